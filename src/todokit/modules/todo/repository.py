"""Todo repository with filtered and sorted queries."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import ColumnElement, case, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from todokit.core.repository import BaseRepository

from .models import Priority, Todo
from .schemas import SortDirection, SortField, TodoFilter, TodoSort

# Rank so that ordering by priority follows low < medium < high
_PRIORITY_RANK = case(
    (Todo.priority == Priority.LOW, 0),
    (Todo.priority == Priority.MEDIUM, 1),
    else_=2,
)

SORT_COLUMNS: dict[SortField, ColumnElement[Any]] = {
    SortField.TITLE: Todo.title,  # type: ignore[dict-item]
    SortField.PRIORITY: _PRIORITY_RANK,
    SortField.CREATED_AT: Todo.created_at,  # type: ignore[dict-item]
    SortField.UPDATED_AT: Todo.updated_at,  # type: ignore[dict-item]
}


class TodoRepository(BaseRepository[Todo]):
    """Repository for Todo entities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize todo repository with database session."""
        super().__init__(session, Todo)

    async def find_filtered(self, filter: TodoFilter, sort: TodoSort) -> Sequence[Todo]:
        """Find tasks matching every supplied predicate, in the requested order."""
        stmt = select(Todo)

        if filter.completed is not None:
            stmt = stmt.where(Todo.completed == filter.completed)
        if filter.priority is not None:
            stmt = stmt.where(Todo.priority == filter.priority)
        if filter.search:
            stmt = stmt.where(
                or_(
                    Todo.title.contains(filter.search, autoescape=True),
                    Todo.description.contains(filter.search, autoescape=True),
                )
            )

        column = SORT_COLUMNS[sort.field]
        if sort.direction is SortDirection.ASC:
            stmt = stmt.order_by(column.asc(), Todo.id.asc())
        else:
            stmt = stmt.order_by(column.desc(), Todo.id.desc())

        result = await self.s.scalars(stmt)
        return result.all()

    async def update_fields(self, id: int, values: dict[str, Any]) -> bool:
        """Apply a partial update to one row; returns False when the row is missing."""
        if not values:
            return await self.exists_by_id(id)
        result = await self.s.execute(
            update(Todo).where(Todo.id == id).values(**values).execution_options(synchronize_session=False)
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def reload(self, id: int) -> Todo | None:
        """Fetch a row bypassing any stale copy held by the session."""
        return await self.s.get(Todo, id, populate_existing=True)
