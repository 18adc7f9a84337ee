"""Service builder with the todo module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Self

from fastapi import FastAPI

from todokit.core.api.service_builder import BaseServiceBuilder, ServiceInfo
from todokit.modules.todo import TodoRouter, seed_on_startup

from .dependencies import get_todo_manager


@dataclass(slots=True)
class _TodoOptions:
    """Internal todo options for ServiceBuilder."""

    prefix: str = "/api/todos"
    tags: List[str] = field(default_factory=lambda: ["Todos"])
    seed: bool = True


class ServiceBuilder(BaseServiceBuilder):
    """Service builder with integrated todo module support."""

    def __init__(self, **kwargs: Any) -> None:
        """Initialize service builder with module-specific state."""
        super().__init__(**kwargs)
        self._todo_options: _TodoOptions | None = None

    def with_todos(
        self,
        *,
        prefix: str = "/api/todos",
        tags: List[str] | None = None,
        seed: bool = True,
    ) -> Self:
        """Enable the todo REST resource, optionally seeding an empty table at startup."""
        self._todo_options = _TodoOptions(prefix=prefix, tags=list(tags) if tags else ["Todos"], seed=seed)
        if seed:
            self.on_startup(seed_on_startup)
        return self

    def _validate_module_configuration(self) -> None:
        """Validate module-specific configuration."""
        if self._todo_options and not self._todo_options.prefix.startswith("/"):
            raise ValueError(f"Todo prefix must start with '/', got {self._todo_options.prefix!r}")

    def _register_module_routers(self, app: FastAPI) -> None:
        """Register the todo router."""
        if self._todo_options:
            todo_options = self._todo_options
            todo_router = TodoRouter.create(
                prefix=todo_options.prefix,
                tags=todo_options.tags,
                manager_factory=get_todo_manager,
            )
            app.include_router(todo_router)


__all__ = ["ServiceBuilder", "ServiceInfo"]
