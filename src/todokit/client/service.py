"""Async HTTP client for the todo REST resource."""

from __future__ import annotations

from typing import Any, Self

import httpx

from todokit.core.logging import get_logger
from todokit.modules.todo.schemas import TodoFilter, TodoIn, TodoOut, TodoSort, TodoUpdate

logger = get_logger(__name__)

DEFAULT_API_URL = "http://localhost:3001/api/todos"


class TodoService:
    """Thin wrapper mapping each REST operation to one request.

    Non-2xx responses raise ``httpx.HTTPStatusError``; transport failures raise
    the usual ``httpx.HTTPError`` subclasses.
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, *, client: httpx.AsyncClient | None = None) -> None:
        """Initialize with the collection URL and an optional preconfigured client."""
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient()
        self._owns_client = client is None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if this service created it."""
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def build_params(filter: TodoFilter | None, sort: TodoSort | None) -> dict[str, str]:
        """Translate filter and sort state into query parameters."""
        params: dict[str, str] = {}
        if filter is not None:
            if filter.completed is not None:
                params["completed"] = "true" if filter.completed else "false"
            if filter.priority is not None:
                params["priority"] = filter.priority.value
            if filter.search:
                params["search"] = filter.search
        if sort is not None:
            params["sortField"] = sort.field.value
            params["sortDirection"] = sort.direction.value
        return params

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, url, **kwargs)
        if response.is_error:
            logger.warning("client.request_failed", method=method, url=url, status=response.status_code)
        response.raise_for_status()
        return response

    async def get_todos(self, filter: TodoFilter | None = None, sort: TodoSort | None = None) -> list[TodoOut]:
        """Fetch the filtered, sorted task list."""
        response = await self._request("GET", self.base_url, params=self.build_params(filter, sort))
        return [TodoOut.model_validate(item) for item in response.json()]

    async def get_todo(self, id: int) -> TodoOut:
        """Fetch one task."""
        response = await self._request("GET", f"{self.base_url}/{id}")
        return TodoOut.model_validate(response.json())

    async def create_todo(self, data: TodoIn) -> TodoOut:
        """Create a task."""
        response = await self._request("POST", self.base_url, json=data.model_dump(mode="json", by_alias=True))
        return TodoOut.model_validate(response.json())

    async def update_todo(self, id: int, data: TodoUpdate) -> TodoOut:
        """Send only the fields set on ``data``."""
        payload = data.model_dump(mode="json", by_alias=True, exclude_unset=True)
        response = await self._request("PUT", f"{self.base_url}/{id}", json=payload)
        return TodoOut.model_validate(response.json())

    async def toggle_status(self, id: int, completed: bool) -> TodoOut:
        """Set the completion flag of a task."""
        response = await self._request("PATCH", f"{self.base_url}/{id}/status", json={"completed": completed})
        return TodoOut.model_validate(response.json())

    async def delete_todo(self, id: int) -> None:
        """Delete one task."""
        await self._request("DELETE", f"{self.base_url}/{id}")

    async def delete_many(self, ids: list[int]) -> None:
        """Delete several tasks in one request."""
        await self._request("DELETE", self.base_url, json={"ids": ids})
