"""
Pydantic schemas for task commands, filters and responses.

TaskPatch relies on pydantic's set-field tracking: a field the caller never
sent is absent from `model_fields_set`, while a field sent as null is present
with value None. `to_update_data()` keeps exactly the fields that were sent.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from taskkeeper.models.base import utcnow
from taskkeeper.models.task import TaskPriority

TITLE_MAX_LENGTH = 200


def _to_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


# --- Input Schemas (Requests / Commands) ---


class TaskCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Short task title")
    description: str | None = Field(default=None, description="Optional details")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="low, medium or high")
    due_date: datetime | None = Field(default=None, description="Optional due date")

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return _to_naive_utc(value)


class TaskPatch(BaseModel):
    """
    Partial update. Three states per field:
    - omitted: leave unchanged
    - null: clear (description and due_date only)
    - value: set
    """

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    completed: bool | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None

    # Validators only run for fields that were actually supplied.
    @field_validator("title", "completed", "priority")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("due_date")
    @classmethod
    def _normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return _to_naive_utc(value)

    def to_update_data(self) -> dict[str, Any]:
        """Only the fields the caller supplied, explicit nulls included."""
        return self.model_dump(exclude_unset=True)


class TaskFilter(BaseModel):
    """
    Optional list filters. None means the filter was not supplied and matches
    any value; it never stands for a default such as completed=False.
    """

    completed: bool | None = None
    priority: TaskPriority | None = None


# --- Output Schemas ---


class TaskResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    title: str
    description: str | None
    completed: bool
    priority: TaskPriority
    due_date: datetime | None
    user_id: int
    created_at: datetime
    updated_at: datetime

    def is_overdue(self, now: datetime | None = None) -> bool:
        """Derived view: past its due date and still open. Never persisted."""
        if self.due_date is None or self.completed:
            return False
        now = _to_naive_utc(now) if now is not None else utcnow()
        return self.due_date < now


class DeleteResult(BaseModel):
    success: bool
