"""Client layer: HTTP service, state store, text rendering and CLI."""

from .render import render, render_filter_bar, render_list, render_status, render_todo
from .service import DEFAULT_API_URL, TodoService
from .store import TodoState, TodoStore

__all__ = [
    "DEFAULT_API_URL",
    "TodoService",
    "TodoState",
    "TodoStore",
    "render",
    "render_filter_bar",
    "render_list",
    "render_status",
    "render_todo",
]
