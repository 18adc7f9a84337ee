import tempfile
from pathlib import Path
from types import SimpleNamespace
from typing import cast

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

import todokit.core.database as database_module
from todokit import Database


def test_install_sqlite_pragmas(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure SQLite connect pragmas are installed on new connections."""

    captured: dict[str, object] = {}

    def fake_listen(target: object, event_name: str, handler: object) -> None:
        captured["target"] = target
        captured["event_name"] = event_name
        captured["handler"] = handler

    fake_engine = cast(AsyncEngine, SimpleNamespace(sync_engine=object()))
    monkeypatch.setattr(database_module.event, "listen", fake_listen)

    database_module._install_sqlite_connect_pragmas(fake_engine)

    assert captured["target"] is fake_engine.sync_engine
    assert captured["event_name"] == "connect"
    handler = captured["handler"]
    assert callable(handler)

    class DummyCursor:
        def __init__(self) -> None:
            self.commands: list[str] = []
            self.closed = False

        def execute(self, sql: str) -> None:
            self.commands.append(sql)

        def close(self) -> None:
            self.closed = True

    class DummyConnection:
        def __init__(self) -> None:
            self._cursor = DummyCursor()

        def cursor(self) -> DummyCursor:
            return self._cursor

    connection = DummyConnection()
    handler(connection, None)

    assert connection._cursor.commands == [
        "PRAGMA foreign_keys=ON;",
        "PRAGMA synchronous=NORMAL;",
        "PRAGMA busy_timeout=30000;",
        "PRAGMA temp_store=MEMORY;",
    ]
    assert connection._cursor.closed is True


class TestDatabase:
    """Tests for the Database class."""

    async def test_init_creates_todos_table(self) -> None:
        """init() on an in-memory database creates the todos table."""
        db = Database("sqlite+aiosqlite:///:memory:")
        await db.init()

        async with db.session() as session:
            result = await session.execute(text("SELECT name FROM sqlite_master WHERE type='table' AND name='todos'"))
            assert result.scalar() == "todos"

        await db.dispose()

    async def test_multiple_sessions_share_in_memory_data(self) -> None:
        """Sessions opened one after another see the same in-memory database."""
        db = Database("sqlite+aiosqlite:///:memory:")
        await db.init()

        async with db.session() as session1:
            await session1.execute(
                text(
                    "INSERT INTO todos (title, description, completed, priority, created_at, updated_at) "
                    "VALUES ('a', '', 0, 'low', '2026-01-01 00:00:00', '2026-01-01 00:00:00')"
                )
            )
            await session1.commit()

        async with db.session() as session2:
            result = await session2.execute(text("SELECT COUNT(*) FROM todos"))
            assert result.scalar() == 1

        await db.dispose()

    async def test_is_in_memory(self) -> None:
        """Memory URLs are detected; file URLs are not."""
        memory = Database("sqlite+aiosqlite:///:memory:")
        on_disk = Database("sqlite+aiosqlite:///./some.db")

        assert memory.is_in_memory is True
        assert on_disk.is_in_memory is False

        await memory.dispose()
        await on_disk.dispose()

    async def test_echo_parameter(self) -> None:
        """Test that echo parameter is passed to engine."""
        db_echo = Database("sqlite+aiosqlite:///:memory:", echo=True)
        db_no_echo = Database("sqlite+aiosqlite:///:memory:", echo=False)

        assert db_echo.engine.echo is True
        assert db_no_echo.engine.echo is False

        await db_echo.dispose()
        await db_no_echo.dispose()

    async def test_session_factory_configuration(self) -> None:
        """Sessions keep loaded attributes after commit."""
        db = Database("sqlite+aiosqlite:///:memory:")
        await db.init()

        assert db._session_factory.kw.get("expire_on_commit") is False

        await db.dispose()

    async def test_file_database_without_auto_migrate_uses_create_all(self) -> None:
        """auto_migrate=False creates tables from metadata and skips Alembic."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            db_path = Path(tmp_dir) / "plain.db"
            db = Database(f"sqlite+aiosqlite:///{db_path}", auto_migrate=False)
            await db.init()

            async with db.session() as session:
                result = await session.execute(
                    text("SELECT name FROM sqlite_master WHERE type='table' AND name='alembic_version'")
                )
                assert result.scalar() is None
                result = await session.execute(text("PRAGMA journal_mode"))
                assert result.scalar() == "wal"

            await db.dispose()

    async def test_file_based_database_with_alembic_migrations(self) -> None:
        """File-based databases get their schema from the Alembic migration."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            db_path = Path(tmp_dir) / "todos.db"
            db = Database(f"sqlite+aiosqlite:///{db_path}")
            await db.init()

            async with db.session() as session:
                result = await session.execute(text("SELECT version_num FROM alembic_version"))
                assert result.scalar() == "20261019_0001"

                result = await session.execute(text("SELECT name FROM sqlite_master WHERE type='table' AND name='todos'"))
                assert result.scalar() == "todos"

            await db.dispose()

            # Running init again on an up-to-date database is a no-op
            db = Database(f"sqlite+aiosqlite:///{db_path}")
            await db.init()
            await db.dispose()
