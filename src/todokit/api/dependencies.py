"""Feature-specific FastAPI dependency injection for managers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from todokit.core.api.dependencies import get_session
from todokit.modules.todo import TodoManager, TodoRepository


async def get_todo_manager(session: Annotated[AsyncSession, Depends(get_session)]) -> TodoManager:
    """Get a todo manager bound to the request's session."""
    return TodoManager(TodoRepository(session))
