"""Tests for first-run seeding."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest

from todokit.core import Database
from todokit.modules.todo import SAMPLE_TODOS, Priority, TodoIn, TodoManager, TodoRepository, seed_todos


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Create and initialize in-memory database for testing."""
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.init()
    try:
        yield db
    finally:
        await db.dispose()


def test_sample_covers_every_priority_and_state() -> None:
    assert len(SAMPLE_TODOS) == 5
    assert {todo.priority for todo in SAMPLE_TODOS} == set(Priority)
    assert {todo.completed for todo in SAMPLE_TODOS} == {True, False}


async def test_seed_empty_table(database: Database) -> None:
    """An empty table receives exactly the five sample tasks."""
    assert await seed_todos(database) == 5

    async with database.session() as session:
        todos = await TodoManager(TodoRepository(session)).find_all()

    assert sorted(todo.title for todo in todos) == sorted(todo.title for todo in SAMPLE_TODOS)


async def test_seed_is_skipped_when_rows_exist(database: Database) -> None:
    async with database.session() as session:
        await TodoManager(TodoRepository(session)).create(TodoIn(title="Mine"))

    assert await seed_todos(database) == 0

    async with database.session() as session:
        assert await TodoRepository(session).count() == 1


async def test_seed_twice_inserts_once(database: Database) -> None:
    await seed_todos(database)
    await seed_todos(database)

    async with database.session() as session:
        assert await TodoRepository(session).count() == 5
