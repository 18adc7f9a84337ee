"""SQLite database handle: engine, pragmas, schema setup and sessions."""

from __future__ import annotations

import asyncio
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from alembic.config import Config
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import ConnectionPoolEntry

from alembic import command
from todokit.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ALEMBIC_DIR = Path(__file__).resolve().parents[3] / "alembic"

CONNECT_PRAGMAS = (
    "PRAGMA foreign_keys=ON;",
    "PRAGMA synchronous=NORMAL;",
    "PRAGMA busy_timeout=30000;",
    "PRAGMA temp_store=MEMORY;",
)


def _install_sqlite_connect_pragmas(engine: AsyncEngine) -> None:
    """Run CONNECT_PRAGMAS on every new DBAPI connection."""

    def on_connect(dbapi_conn: sqlite3.Connection, _conn_record: ConnectionPoolEntry) -> None:
        cur = dbapi_conn.cursor()
        for pragma in CONNECT_PRAGMAS:
            cur.execute(pragma)
        cur.close()

    event.listen(engine.sync_engine, "connect", on_connect)


class Database:
    """Owns the async engine for one database URL.

    In-memory databases (and ``auto_migrate=False``) get their tables from the
    ORM metadata; file databases are brought to the latest Alembic revision and
    switched to WAL journaling.
    """

    def __init__(
        self, url: str, *, echo: bool = False, alembic_dir: Path | None = None, auto_migrate: bool = True
    ) -> None:
        self.url = url
        self.alembic_dir = alembic_dir or DEFAULT_ALEMBIC_DIR
        self.auto_migrate = auto_migrate
        self.engine: AsyncEngine = create_async_engine(url, echo=echo)
        _install_sqlite_connect_pragmas(self.engine)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @property
    def is_in_memory(self) -> bool:
        return ":memory:" in self.url

    async def init(self) -> None:
        """Create or migrate the schema."""
        from todokit.core.models import Base

        if not self.is_in_memory:
            async with self.engine.begin() as conn:
                await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")

        if self.is_in_memory or not self.auto_migrate:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.debug("database.tables_created", url=self.url)
            return

        config = Config()
        config.set_main_option("script_location", str(self.alembic_dir))
        config.set_main_option("sqlalchemy.url", self.url)

        # env.py starts its own event loop
        await asyncio.get_running_loop().run_in_executor(None, command.upgrade, config, "head")
        logger.info("database.migrated", url=self.url)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that is closed on exit."""
        async with self._session_factory() as s:
            yield s

    async def dispose(self) -> None:
        await self.engine.dispose()
