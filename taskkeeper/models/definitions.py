from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow

# --- CORE IDENTITY ENTITY ---


class User(Base):
    """
    The User Table (users).
    The identity every task hangs off. Users have no update path; a removed user
    takes its tasks with it through the ON DELETE CASCADE foreign key on tasks.

    Both username and email are unique. Email is the login identifier.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, comment="Unique User ID.")

    username: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True, comment="User's unique display handle."
    )

    email: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="User's unique email address, used as the login identifier.",
    )

    password_hash: Mapped[str] = mapped_column(
        String(128), nullable=False, comment="One-way hash of the user's password."
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, comment="Date and time of registration (UTC)."
    )
