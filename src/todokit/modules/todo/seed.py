"""Default dataset inserted into an empty todo table."""

from __future__ import annotations

from fastapi import FastAPI

from todokit.core import Database
from todokit.core.logging import get_logger

from .manager import TodoManager
from .models import Priority
from .repository import TodoRepository
from .schemas import TodoIn

logger = get_logger(__name__)

SAMPLE_TODOS: tuple[TodoIn, ...] = (
    TodoIn(
        title="Complete project proposal",
        description="Write up the initial proposal for the client project",
        completed=False,
        priority=Priority.HIGH,
    ),
    TodoIn(
        title="Buy groceries",
        description="Milk, eggs, bread, and vegetables",
        completed=True,
        priority=Priority.MEDIUM,
    ),
    TodoIn(
        title="Schedule dentist appointment",
        description="Call Dr. Smith for a cleaning",
        completed=False,
        priority=Priority.LOW,
    ),
    TodoIn(
        title="Finish reading book",
        description="Complete the last three chapters",
        completed=False,
        priority=Priority.MEDIUM,
    ),
    TodoIn(
        title="Update portfolio website",
        description="Add recent projects and update skills section",
        completed=False,
        priority=Priority.HIGH,
    ),
)


async def seed_todos(database: Database) -> int:
    """Insert the sample tasks when the table is empty; returns the number inserted."""
    async with database.session() as session:
        manager = TodoManager(TodoRepository(session))
        if await manager.count() > 0:
            return 0
        created = await manager.save_all(SAMPLE_TODOS)

    logger.info("todo.seeded", count=len(created))
    return len(created)


async def seed_on_startup(app: FastAPI) -> None:
    """Startup hook seeding the database opened by the app lifespan."""
    database: Database | None = getattr(app.state, "database", None)
    if database is None:
        return
    await seed_todos(database)
