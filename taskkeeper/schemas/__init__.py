from .task import DeleteResult, TaskCreateRequest, TaskFilter, TaskPatch, TaskResponse
from .user import AuthResponse, LoginRequest, PublicUser, RegisterRequest

__all__ = [
    "AuthResponse",
    "DeleteResult",
    "LoginRequest",
    "PublicUser",
    "RegisterRequest",
    "TaskCreateRequest",
    "TaskFilter",
    "TaskPatch",
    "TaskResponse",
]
