"""
HTTP endpoints for authentication and task management.
Every task endpoint resolves the caller to a user id first and hands it to
the TaskService as an explicit argument.
"""

from datetime import UTC, datetime

from fastapi import APIRouter, status

from taskkeeper.models.task import TaskPriority
from taskkeeper.schemas import (
    AuthResponse,
    DeleteResult,
    LoginRequest,
    RegisterRequest,
    TaskCreateRequest,
    TaskFilter,
    TaskPatch,
    TaskResponse,
)

from .deps import AuthServiceDep, CurrentUserId, TaskServiceDep

health_router = APIRouter(tags=["health"])
auth_router = APIRouter(prefix="/auth", tags=["auth"])
task_router = APIRouter(prefix="/tasks", tags=["tasks"])


@health_router.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}


# --- Auth ---


@auth_router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, auth_service: AuthServiceDep) -> AuthResponse:
    return await auth_service.register(data)


@auth_router.post("/login")
async def login(data: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    return await auth_service.login(data)


# --- Tasks ---


@task_router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(data: TaskCreateRequest, user_id: CurrentUserId, task_service: TaskServiceDep) -> TaskResponse:
    return await task_service.create(user_id, data)


@task_router.get("")
async def list_tasks(
    user_id: CurrentUserId,
    task_service: TaskServiceDep,
    completed: bool | None = None,
    priority: TaskPriority | None = None,
) -> list[TaskResponse]:
    return list(await task_service.list(user_id, TaskFilter(completed=completed, priority=priority)))


@task_router.get("/{task_id}")
async def get_task(task_id: int, user_id: CurrentUserId, task_service: TaskServiceDep) -> TaskResponse:
    return await task_service.get(user_id, task_id)


@task_router.patch("/{task_id}")
async def update_task(
    task_id: int, patch: TaskPatch, user_id: CurrentUserId, task_service: TaskServiceDep
) -> TaskResponse:
    return await task_service.update(user_id, task_id, patch)


@task_router.delete("/{task_id}")
async def delete_task(task_id: int, user_id: CurrentUserId, task_service: TaskServiceDep) -> DeleteResult:
    return await task_service.delete(user_id, task_id)
