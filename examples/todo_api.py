"""Todo service with a custom health check, startup hook and request logging.

Run with:
    python -m examples.todo_api
"""

from __future__ import annotations

from fastapi import FastAPI

from todokit.api import ServiceBuilder, ServiceInfo, get_logger, run_app
from todokit.core import Database
from todokit.core.api.routers.health import HealthState
from todokit.modules.todo import TodoFilter, TodoManager, TodoRepository, TodoSort

logger = get_logger(__name__)

OPEN_TASK_LIMIT = 100


async def check_backlog() -> tuple[HealthState, str | None]:
    """Report degraded when too many tasks are still open."""
    database: Database | None = getattr(app.state, "database", None)
    if database is None:
        return (HealthState.UNHEALTHY, "Database not initialized")

    async with database.session() as session:
        open_tasks = len(await TodoRepository(session).find_filtered(TodoFilter(completed=False), TodoSort()))

    if open_tasks > OPEN_TASK_LIMIT:
        return (HealthState.DEGRADED, f"{open_tasks} open tasks")
    return (HealthState.OK, None)


async def log_inventory(app: FastAPI) -> None:
    """Log how many tasks exist once the database is ready."""
    async with app.state.database.session() as session:
        total = await TodoManager(TodoRepository(session)).count()
    logger.info("inventory.loaded", total=total)


app: FastAPI = (
    ServiceBuilder(
        info=ServiceInfo(
            display_name="Todo Example Service",
            version="1.0.0",
            summary="Todo API with backlog health check",
        ),
        database_url="sqlite+aiosqlite:///:memory:",
    )
    .with_logging()
    .with_health(checks={"backlog": check_backlog})
    .with_system()
    .with_todos()
    .on_startup(log_inventory)
    .build()
)


if __name__ == "__main__":
    run_app("examples.todo_api:app")
