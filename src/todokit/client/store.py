"""In-memory client state that mirrors the server after every change."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from todokit.core.logging import get_logger
from todokit.modules.todo.schemas import SortField, TodoFilter, TodoIn, TodoOut, TodoSort, TodoUpdate

from .service import TodoService

logger = get_logger(__name__)

FETCH_ERROR = "Failed to fetch todos. Please try again later."
ADD_ERROR = "Failed to add todo. Please try again later."
UPDATE_ERROR = "Failed to update todo. Please try again later."
DELETE_ERROR = "Failed to delete todo. Please try again later."
STATUS_ERROR = "Failed to update todo status. Please try again later."
DELETE_SELECTED_ERROR = "Failed to delete selected todos. Please try again later."


@dataclass
class TodoState:
    """Snapshot rendered by the presentational layer."""

    todos: list[TodoOut] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    filter: TodoFilter = field(default_factory=TodoFilter)
    sort: TodoSort = field(default_factory=TodoSort)
    selected: set[int] = field(default_factory=set)


class TodoStore:
    """Holds client state and refetches the full list after each mutation.

    Filtering and sorting are never applied locally: changing either sends a
    new list request. A failed request stores one error string per action and
    the previous list is kept as-is.
    """

    def __init__(self, service: TodoService, state: TodoState | None = None) -> None:
        self.service = service
        self.state = state or TodoState()

    async def _run(self, action: str, error: str, call: Callable[[], Awaitable[Any]]) -> bool:
        self.state.loading = True
        try:
            await call()
        except httpx.HTTPError as exc:
            self.state.error = error
            logger.warning("client.action_failed", action=action, error=str(exc))
            return False
        finally:
            self.state.loading = False
        return True

    async def fetch_todos(self) -> None:
        """Replace the list with the server's view for the active filter and sort."""

        async def load() -> None:
            self.state.todos = await self.service.get_todos(self.state.filter, self.state.sort)

        self.state.error = None
        await self._run("fetch_todos", FETCH_ERROR, load)

    async def set_filter(self, filter: TodoFilter) -> None:
        self.state.filter = filter
        await self.fetch_todos()

    async def set_sort(self, sort: TodoSort) -> None:
        self.state.sort = sort
        await self.fetch_todos()

    async def sort_by(self, field: SortField) -> None:
        """Sort by ``field``, flipping direction if it is already active."""
        await self.set_sort(self.state.sort.toggled(field))

    async def add_todo(self, data: TodoIn) -> None:
        if await self._run("add_todo", ADD_ERROR, lambda: self.service.create_todo(data)):
            await self.fetch_todos()

    async def edit_todo(self, id: int, data: TodoUpdate) -> None:
        if await self._run("edit_todo", UPDATE_ERROR, lambda: self.service.update_todo(id, data)):
            await self.fetch_todos()

    async def remove_todo(self, id: int) -> None:
        if await self._run("remove_todo", DELETE_ERROR, lambda: self.service.delete_todo(id)):
            self.state.selected.discard(id)
            await self.fetch_todos()

    async def toggle_status(self, id: int, completed: bool) -> None:
        if await self._run("toggle_status", STATUS_ERROR, lambda: self.service.toggle_status(id, completed)):
            await self.fetch_todos()

    async def remove_selected(self) -> None:
        """Delete every selected task in one request; no-op when nothing is selected."""
        if not self.state.selected:
            return
        ids = sorted(self.state.selected)
        if await self._run("remove_selected", DELETE_SELECTED_ERROR, lambda: self.service.delete_many(ids)):
            self.state.selected.clear()
            await self.fetch_todos()

    def toggle_selected(self, id: int) -> None:
        if id in self.state.selected:
            self.state.selected.remove(id)
        else:
            self.state.selected.add(id)

    def select_all(self) -> None:
        self.state.selected = {todo.id for todo in self.state.todos}

    def clear_selection(self) -> None:
        self.state.selected.clear()
