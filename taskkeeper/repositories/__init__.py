from .task import TaskRepository
from .user import UserRepository

__all__ = ["TaskRepository", "UserRepository"]
