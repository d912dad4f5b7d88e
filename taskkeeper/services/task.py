import logging
from collections.abc import Mapping, Sequence
from typing import Any

from taskkeeper.exceptions.http import NotFoundError
from taskkeeper.repositories import TaskRepository
from taskkeeper.schemas import DeleteResult, TaskCreateRequest, TaskFilter, TaskPatch, TaskResponse

from ._validation import coerce_input

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


class TaskService:
    """
    Task CRUD scoped to an explicit owner.

    Every public method takes the acting user's id as its first argument; the
    service never looks it up from request state. It keeps no state between
    calls, the repository's per-statement scoping is the only coordination.
    """

    def __init__(self, task_repo: TaskRepository):
        self._task_repo = task_repo

    async def create(self, owner_id: int, data: TaskCreateRequest | Mapping[str, Any]) -> TaskResponse:
        request = coerce_input(TaskCreateRequest, data)
        task = await self._task_repo.insert(owner_id, request.model_dump())
        logger.info("User %s created task %s", owner_id, task.id)
        return TaskResponse.model_validate(task)

    async def get(self, owner_id: int, task_id: int) -> TaskResponse:
        task = await self._task_repo.find_by_id(task_id, owner_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return TaskResponse.model_validate(task)

    async def list(
        self, owner_id: int, task_filter: TaskFilter | Mapping[str, Any] | None = None
    ) -> Sequence[TaskResponse]:
        """
        The owner's tasks narrowed by whichever filters were supplied (logical AND).
        No filter at all returns every task the owner has.
        """
        criteria = coerce_input(TaskFilter, task_filter) if task_filter is not None else TaskFilter()
        tasks = await self._task_repo.list(owner_id, criteria)
        return [TaskResponse.model_validate(task) for task in tasks]

    async def update(self, owner_id: int, task_id: int, patch: TaskPatch | Mapping[str, Any]) -> TaskResponse:
        """
        Applies a partial update. Fields absent from the patch are untouched,
        explicit nulls clear description/due_date, and updated_at moves forward
        even for an empty patch.
        """
        task_patch = coerce_input(TaskPatch, patch)
        update_data = task_patch.to_update_data()

        task = await self._task_repo.update(task_id, owner_id, update_data)
        if task is None:
            logger.warning("User %s: update of task %s matched no owned row", owner_id, task_id)
            raise NotFoundError(TASK_NOT_FOUND)

        logger.info("User %s updated task %s (fields: %s)", owner_id, task_id, sorted(update_data) or "none")
        return TaskResponse.model_validate(task)

    async def delete(self, owner_id: int, task_id: int) -> DeleteResult:
        """False means nothing matched (already gone or not owned); it is not an error."""
        removed = await self._task_repo.delete(task_id, owner_id)
        if removed:
            logger.info("User %s deleted task %s", owner_id, task_id)
        else:
            logger.warning("User %s: delete of task %s matched no owned row", owner_id, task_id)
        return DeleteResult(success=removed)
