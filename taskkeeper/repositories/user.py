from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskkeeper.db.utils import apply_dict_updates
from taskkeeper.models.base import utcnow
from taskkeeper.models.definitions import User


class UserRepository:
    """Credential Store: user identities and their one-way password hashes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> User | None:
        """Retrieves a User by their primary ID."""
        return await self.session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Retrieves a User by their unique email (login ID)."""
        stmt = select(User).where(User.email == email)
        return (await self.session.scalars(stmt)).one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return (await self.session.scalars(stmt)).one_or_none()

    async def create(self, create_data: dict[str, Any]) -> User:
        """
        Creates a new User record and flushes it so the id is assigned.
        Raises IntegrityError when a concurrent registration won the unique constraint.
        """
        sensitive_fields = {"id", "created_at"}
        user = User(created_at=utcnow())
        apply_dict_updates(user, create_data, sensitive_fields)
        self.session.add(user)
        await self.session.flush()
        return user
