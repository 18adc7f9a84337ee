"""Todokit - task management service with a REST API and an async client."""

# Core framework
from todokit.core import (
    Base,
    BaseManager,
    BaseRepository,
    Database,
    Entity,
    EntityIn,
    EntityOut,
    Repository,
    Settings,
)

# Todo feature
from todokit.modules.todo import (
    Priority,
    SortDirection,
    SortField,
    Todo,
    TodoFilter,
    TodoIn,
    TodoManager,
    TodoOut,
    TodoRepository,
    TodoSort,
    TodoUpdate,
)

__version__ = "0.1.0"

__all__ = [
    # Core framework
    "Database",
    "Repository",
    "BaseRepository",
    "BaseManager",
    "Base",
    "Entity",
    "EntityIn",
    "EntityOut",
    "Settings",
    # Todo feature
    "Todo",
    "Priority",
    "TodoIn",
    "TodoOut",
    "TodoUpdate",
    "TodoFilter",
    "TodoSort",
    "SortField",
    "SortDirection",
    "TodoRepository",
    "TodoManager",
    # Version
    "__version__",
]
