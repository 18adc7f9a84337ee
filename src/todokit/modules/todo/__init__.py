"""Todo feature - the task collection resource."""

from .manager import TodoManager
from .models import Priority, Todo
from .repository import TodoRepository
from .router import TodoRouter
from .schemas import (
    SortDirection,
    SortField,
    TodoBulkDelete,
    TodoFilter,
    TodoIn,
    TodoOut,
    TodoSort,
    TodoStatusUpdate,
    TodoUpdate,
)
from .seed import SAMPLE_TODOS, seed_on_startup, seed_todos

__all__ = [
    "Todo",
    "Priority",
    "TodoIn",
    "TodoOut",
    "TodoUpdate",
    "TodoStatusUpdate",
    "TodoBulkDelete",
    "TodoFilter",
    "TodoSort",
    "SortField",
    "SortDirection",
    "TodoRepository",
    "TodoManager",
    "TodoRouter",
    "SAMPLE_TODOS",
    "seed_todos",
    "seed_on_startup",
]
