"""Todo manager holding the business rules of the todo resource."""

from __future__ import annotations

from typing import Sequence

from todokit.core.exceptions import BadRequestError, NotFoundError
from todokit.core.logging import get_logger
from todokit.core.manager import BaseManager

from .models import Todo
from .repository import TodoRepository
from .schemas import TodoFilter, TodoIn, TodoOut, TodoSort, TodoUpdate

logger = get_logger(__name__)


class TodoManager(BaseManager[Todo, TodoIn, TodoOut]):
    """Manager for Todo entities."""

    def __init__(self, repo: TodoRepository) -> None:
        """Initialize todo manager with repository."""
        super().__init__(repo, Todo, TodoOut)
        self.repo: TodoRepository = repo

    async def find_todos(self, filter: TodoFilter | None = None, sort: TodoSort | None = None) -> list[TodoOut]:
        """List tasks matching the filter, in the requested sort order."""
        todos = await self.repo.find_filtered(filter or TodoFilter(), sort or TodoSort())
        return [self._to_output_schema(todo) for todo in todos]

    async def get(self, id: int) -> TodoOut:
        """Return one task or raise NotFoundError."""
        todo = await self.find_by_id(id)
        if todo is None:
            logger.warning("todo.not_found", operation="get", todo_id=id)
            raise NotFoundError(f"Todo {id} not found")
        return todo

    async def create(self, data: TodoIn) -> TodoOut:
        """Insert a task with defaulted optional fields."""
        created = await self.save(data)
        logger.info("todo.created", todo_id=created.id, priority=created.priority.value)
        return created

    async def update(self, id: int, data: TodoUpdate) -> TodoOut:
        """Apply the supplied fields to an existing task."""
        await self.require(id, operation="update")

        if "title" in data.model_fields_set and not data.title:
            logger.warning("todo.invalid_update", operation="update", todo_id=id, reason="empty_title")
            raise BadRequestError("Title cannot be empty")

        changes = data.changes()
        if not changes:
            logger.warning("todo.invalid_update", operation="update", todo_id=id, reason="no_fields")
            raise BadRequestError("No fields to update")

        await self.repo.update_fields(id, changes)
        await self.repo.commit()
        logger.info("todo.updated", todo_id=id, fields=sorted(changes))
        return await self._reload(id)

    async def set_status(self, id: int, completed: bool | None) -> TodoOut:
        """Set only the completion flag of an existing task."""
        await self.require(id, operation="set_status")

        if completed is None:
            logger.warning("todo.invalid_update", operation="set_status", todo_id=id, reason="missing_completed")
            raise BadRequestError("Completed status is required")

        await self.repo.update_fields(id, {"completed": completed})
        await self.repo.commit()
        logger.info("todo.status_changed", todo_id=id, completed=completed)
        return await self._reload(id)

    async def delete(self, id: int) -> None:
        """Delete one existing task."""
        await self.require(id, operation="delete")
        await self.delete_by_id(id)
        logger.info("todo.deleted", todo_id=id)

    async def delete_many(self, ids: Sequence[int]) -> int:
        """Delete every listed task in one transaction; unknown ids are ignored."""
        if not ids:
            raise BadRequestError("Valid array of IDs is required")
        deleted = await self.delete_all_by_id(list(ids))
        logger.info("todo.bulk_deleted", requested=len(ids), deleted=deleted)
        return deleted

    async def require(self, id: int, *, operation: str) -> None:
        """Raise NotFoundError unless task ``id`` exists."""
        if not await self.exists_by_id(id):
            logger.warning("todo.not_found", operation=operation, todo_id=id)
            raise NotFoundError(f"Todo {id} not found")

    async def _reload(self, id: int) -> TodoOut:
        todo = await self.repo.reload(id)
        if todo is None:
            raise NotFoundError(f"Todo {id} not found")
        return self._to_output_schema(todo)
