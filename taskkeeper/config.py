from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables (prefixed with
    `TASKKEEPER_`) or a `.env` file.
    """

    model_config = SettingsConfigDict(env_prefix="TASKKEEPER_", env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./taskkeeper.db"
    """SQLAlchemy async URL of the backing store."""

    database_echo: bool = False
    """Echo emitted SQL through the `sqlalchemy.engine` logger."""

    secret_key: str = "change-me"
    """Secret used to sign bearer tokens."""

    algorithm: str = "HS256"
    """JWT signing algorithm."""

    access_token_expire_minutes: int = 60 * 24
    """Lifetime of an issued bearer token."""

    password_hash_rounds: int = 12
    """bcrypt cost factor for newly hashed passwords."""

    log_level: str = "INFO"
    """Console log level."""

    log_file: Path | None = None
    """Optional file receiving full DEBUG logs."""


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings instance."""
    return Settings()
