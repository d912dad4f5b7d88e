from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from .definitions import User


class TaskPriority(str, PyEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base, TimestampMixin):
    """
    The Task Table (tasks).
    A private to-do item. user_id is fixed at creation and every lookup,
    update and delete is filtered on it together with the task id.
    """

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, comment="Unique Task ID.")

    title: Mapped[str] = mapped_column(String(200), nullable=False, comment="Short title (1-200 chars).")
    description: Mapped[None | str] = mapped_column(Text, nullable=True, comment="Optional free-form details.")

    completed: Mapped[bool] = mapped_column(nullable=False, default=False, comment="Completion flag.")

    priority: Mapped[TaskPriority] = mapped_column(
        Enum(TaskPriority, name="priority", values_callable=lambda members: [m.value for m in members]),
        nullable=False,
        default=TaskPriority.MEDIUM,
        index=True,
        comment="One of low, medium, high.",
    )

    due_date: Mapped[None | datetime] = mapped_column(
        DateTime, nullable=True, comment="Optional due date (UTC). Overdue is derived, never stored."
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey(User.id, ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="The ID of the user who owns this task. Never transferred.",
    )
