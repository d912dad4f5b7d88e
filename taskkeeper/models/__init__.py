from .base import Base, TimestampMixin, utcnow
from .definitions import User
from .task import Task, TaskPriority

__all__ = ["Base", "TimestampMixin", "utcnow", "User", "Task", "TaskPriority"]
