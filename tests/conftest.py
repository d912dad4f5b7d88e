# tests/conftest.py

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from taskkeeper.config import Settings
from taskkeeper.db.session import build_engine, build_sessionmaker, init_models
from taskkeeper.main import create_app
from taskkeeper.models import User
from taskkeeper.repositories import TaskRepository, UserRepository
from taskkeeper.services import AuthService, TaskService


@pytest.fixture()
def settings() -> Settings:
    """
    Settings for an isolated in-memory database.
    The low bcrypt cost keeps registration tests fast.
    """
    return Settings(
        _env_file=None,
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key="test-secret",
        password_hash_rounds=4,
    )


@pytest_asyncio.fixture()
async def engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    engine = build_engine(settings.database_url)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest.fixture()
def user_repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest.fixture()
def task_repo(session: AsyncSession) -> TaskRepository:
    return TaskRepository(session)


@pytest.fixture()
def task_service(task_repo: TaskRepository) -> TaskService:
    return TaskService(task_repo)


@pytest.fixture()
def auth_service(user_repo: UserRepository, settings: Settings) -> AuthService:
    return AuthService(user_repo, settings)


@pytest.fixture()
def make_user(user_repo: UserRepository) -> Callable[[str], Awaitable[User]]:
    """Inserts a bare user row; the password hash is irrelevant for task tests."""

    async def _make(username: str) -> User:
        return await user_repo.create(
            {"username": username, "email": f"{username}@example.com", "password_hash": "not-a-real-hash"}
        )

    return _make


@pytest_asyncio.fixture()
async def client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    """
    HTTP client bound to a fresh app. ASGITransport does not run the lifespan,
    so the schema is created here.
    """
    app = create_app(settings)
    await init_models(app.state.engine)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    await app.state.engine.dispose()
