"""
Request-scoped dependencies: one AsyncSession per request wrapped in a single
transaction, services built on that session, and the authenticated user id.
"""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskkeeper.config import Settings
from taskkeeper.exceptions.http import InvalidCredentialsError
from taskkeeper.repositories import TaskRepository, UserRepository
from taskkeeper.services import AuthService, TaskService

bearer = HTTPBearer(auto_error=False)


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Commits when the endpoint returns, rolls back when it raises.
    Declared with function scope so the commit finishes before the response is
    sent; a failed commit becomes the response.
    """
    async with request.app.state.sessionmaker() as session:
        async with session.begin():
            yield session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


SessionDep = Annotated[AsyncSession, Depends(get_session, scope="function")]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_auth_service(session: SessionDep, settings: SettingsDep) -> AuthService:
    return AuthService(UserRepository(session), settings)


def get_task_service(session: SessionDep) -> TaskService:
    return TaskService(TaskRepository(session))


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]


async def get_current_user_id(
    auth_service: AuthServiceDep,
    creds: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> int:
    if creds is None or not creds.credentials:
        raise InvalidCredentialsError("Not authenticated")
    return await auth_service.resolve_user_id(creds.credentials)


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
