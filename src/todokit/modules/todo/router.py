"""Todo REST router."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fastapi import Body, Depends, Query, Request, Response, status

from todokit.core.api.router import Router
from todokit.core.api.utilities import build_location_url, validate_request_data

from .manager import TodoManager
from .schemas import TodoBulkDelete, TodoFilter, TodoIn, TodoOut, TodoSort, TodoStatusUpdate, TodoUpdate


class TodoRouter(Router):
    """Router exposing the task collection as a REST resource."""

    def __init__(
        self,
        prefix: str,
        tags: Sequence[str],
        manager_factory: Any,
        **kwargs: Any,
    ) -> None:
        """Initialize todo router with the manager dependency factory."""
        self.manager_factory = manager_factory
        super().__init__(prefix=prefix, tags=list(tags), **kwargs)

    def _register_routes(self) -> None:
        """Register collection and item routes."""
        manager_factory = self.manager_factory
        prefix = self.router.prefix

        @self.router.get("", response_model=list[TodoOut], summary="List tasks")
        async def list_todos(
            manager: TodoManager = Depends(manager_factory),
            completed: str | None = None,
            priority: str | None = None,
            search: str | None = None,
            sort_field: str | None = Query(default=None, alias="sortField"),
            sort_direction: str | None = Query(default=None, alias="sortDirection"),
        ) -> list[TodoOut]:
            """Return the filtered list; unknown sort values fall back to createdAt/desc."""
            todo_filter = validate_request_data(
                TodoFilter, {"completed": completed, "priority": priority, "search": search}, location="query"
            )
            return await manager.find_todos(todo_filter, TodoSort.parse(sort_field, sort_direction))

        @self.router.get("/{todo_id}", response_model=TodoOut, summary="Get a task")
        async def get_todo(
            todo_id: int,
            manager: TodoManager = Depends(manager_factory),
        ) -> TodoOut:
            return await manager.get(todo_id)

        @self.router.post(
            "",
            response_model=TodoOut,
            status_code=status.HTTP_201_CREATED,
            summary="Create a task",
        )
        async def create_todo(
            data: TodoIn,
            request: Request,
            response: Response,
            manager: TodoManager = Depends(manager_factory),
        ) -> TodoOut:
            created = await manager.create(data)
            response.headers["Location"] = build_location_url(request, f"{prefix}/{created.id}")
            return created

        @self.router.put("/{todo_id}", response_model=TodoOut, summary="Update a task")
        async def update_todo(
            todo_id: int,
            body: Any = Body(default=None),
            manager: TodoManager = Depends(manager_factory),
        ) -> TodoOut:
            """Change only the fields present in the body; a missing task is reported before body errors."""
            await manager.require(todo_id, operation="update")
            data = validate_request_data(TodoUpdate, body if body is not None else {}, location="body")
            return await manager.update(todo_id, data)

        @self.router.patch("/{todo_id}/status", response_model=TodoOut, summary="Set task completion")
        async def set_todo_status(
            todo_id: int,
            body: Any = Body(default=None),
            manager: TodoManager = Depends(manager_factory),
        ) -> TodoOut:
            await manager.require(todo_id, operation="set_status")
            data = validate_request_data(TodoStatusUpdate, body if body is not None else {}, location="body")
            return await manager.set_status(todo_id, data.completed)

        @self.router.delete(
            "/{todo_id}",
            status_code=status.HTTP_204_NO_CONTENT,
            response_class=Response,
            summary="Delete a task",
        )
        async def delete_todo(
            todo_id: int,
            manager: TodoManager = Depends(manager_factory),
        ) -> None:
            await manager.delete(todo_id)

        @self.router.delete(
            "",
            status_code=status.HTTP_204_NO_CONTENT,
            response_class=Response,
            summary="Delete several tasks",
        )
        async def delete_todos(
            data: TodoBulkDelete,
            manager: TodoManager = Depends(manager_factory),
        ) -> None:
            """Delete every listed task in one transaction; missing ids are ignored."""
            await manager.delete_many(data.ids)
