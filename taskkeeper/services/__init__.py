from .auth import AuthService
from .task import TaskService

__all__ = ["AuthService", "TaskService"]
