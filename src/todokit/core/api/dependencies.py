"""Generic FastAPI dependency injection for the database handle."""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from todokit.core import Database


def get_database(request: Request) -> Database:
    """Get the database opened by the application lifespan."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized. Build the app with ServiceBuilder and run its lifespan.")
    return database


async def get_session(db: Annotated[Database, Depends(get_database)]) -> AsyncIterator[AsyncSession]:
    """Get a database session for dependency injection."""
    async with db.session() as session:
        yield session
