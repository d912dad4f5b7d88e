import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskkeeper.db.utils import apply_dict_updates
from taskkeeper.models.base import utcnow
from taskkeeper.models.task import Task, TaskPriority
from taskkeeper.schemas.task import TaskFilter

logger = logging.getLogger(__name__)


class TaskRepository:
    """
    Task Store: ownership-aware persistence for tasks.

    Every method that takes a task id also takes the owner id and puts both in
    the same WHERE clause. A row owned by someone else is indistinguishable
    from a missing row.
    """

    # Never taken from caller-supplied data
    _PROTECTED_FIELDS = {"id", "user_id", "created_at", "updated_at"}
    _PATCHABLE_FIELDS = {"title", "description", "completed", "priority", "due_date"}

    def __init__(self, session: AsyncSession):
        self.session = session

    def _owned(self, task_id: int, owner_id: int):
        return and_(Task.id == task_id, Task.user_id == owner_id)

    # --- 1. CREATE ---

    async def insert(self, owner_id: int, create_data: dict[str, Any]) -> Task:
        """
        Inserts a task for owner_id. created_at and updated_at come from one
        clock reading so a fresh task always has them equal.
        """
        now = utcnow()
        task = Task(
            user_id=owner_id,
            completed=False,
            priority=TaskPriority.MEDIUM,
            created_at=now,
            updated_at=now,
        )
        apply_dict_updates(task, create_data, self._PROTECTED_FIELDS)
        if task.priority is None:
            task.priority = TaskPriority.MEDIUM

        self.session.add(task)
        await self.session.flush()
        return task

    # --- 2. READ ---

    async def find_by_id(self, task_id: int, owner_id: int) -> Task | None:
        stmt = select(Task).where(self._owned(task_id, owner_id))
        return (await self.session.scalars(stmt)).one_or_none()

    async def list(self, owner_id: int, task_filter: TaskFilter | None = None) -> Sequence[Task]:
        """
        Retrieves the owner's tasks matching every supplied filter, in insertion order.
        An unsupplied filter adds no condition.
        """
        conditions = [Task.user_id == owner_id]

        if task_filter is not None:
            if task_filter.completed is not None:
                conditions.append(Task.completed == task_filter.completed)
            if task_filter.priority is not None:
                conditions.append(Task.priority == task_filter.priority)

        stmt = select(Task).where(and_(*conditions)).order_by(Task.id)
        tasks = (await self.session.scalars(stmt)).all()
        logger.debug("Listed %d task(s) for user %s with %d condition(s)", len(tasks), owner_id, len(conditions))
        return tasks

    # --- 3. MUTATE ---

    async def update(self, task_id: int, owner_id: int, patch_data: dict[str, Any]) -> Task | None:
        """
        Applies only the supplied fields and always refreshes updated_at, in a
        single UPDATE scoped by id and owner.

        Returns:
            The updated Task, or None if no row matched both id and owner.
        """
        values = {key: value for key, value in patch_data.items() if key in self._PATCHABLE_FIELDS}
        values["updated_at"] = utcnow()

        stmt = (
            update(Task)
            .where(self._owned(task_id, owner_id))
            .values(**values)
            .returning(Task)
            # Only the row RETURNING reports is refreshed in the session;
            # in-memory copies of a row that no longer matches stay as loaded.
            .execution_options(synchronize_session=False, populate_existing=True)
        )

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, task_id: int, owner_id: int) -> bool:
        """Removes the task if owner_id owns it. Returns whether a row was removed."""
        stmt = delete(Task).where(self._owned(task_id, owner_id))
        result = await self.session.execute(stmt)
        return result.rowcount > 0
