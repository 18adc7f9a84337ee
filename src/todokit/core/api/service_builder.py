"""Fluent builder assembling the FastAPI app around one Database handle."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass, field
from typing import Self

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict
from sqlalchemy import text

from todokit.core import Database
from todokit.core.logging import configure_logging, get_logger

from .middleware import add_error_handlers, add_logging_middleware
from .routers import HealthRouter, SystemRouter
from .routers.health import HealthCheck, HealthState

logger = get_logger(__name__)

LifecycleHook = Callable[[FastAPI], Awaitable[None]]


class ServiceInfo(BaseModel):
    """Metadata shown in the OpenAPI document and at /api/info."""

    display_name: str
    version: str = "1.0.0"
    summary: str | None = None
    description: str | None = None

    model_config = ConfigDict(extra="forbid")


@dataclass(slots=True)
class _HealthOptions:
    prefix: str
    tags: list[str]
    checks: dict[str, HealthCheck]
    database_check: bool


@dataclass(slots=True)
class _LoggingOptions:
    level: str | None = None
    log_format: str | None = None


@dataclass(slots=True)
class _Hooks:
    startup: list[LifecycleHook] = field(default_factory=list)
    shutdown: list[LifecycleHook] = field(default_factory=list)


class BaseServiceBuilder:
    """Collects options through chained ``with_*`` calls, then builds the app.

    Subclasses add feature modules through ``_validate_module_configuration``
    and ``_register_module_routers``.
    """

    def __init__(self, *, info: ServiceInfo, database_url: str = "sqlite+aiosqlite:///:memory:") -> None:
        """Start from service metadata and a database URL (in-memory by default)."""
        if info.description is None and info.summary is not None:
            info = info.model_copy(update={"description": info.summary})
        self.info = info
        self._database_url = database_url
        self._database: Database | None = None
        self._logging: _LoggingOptions | None = None
        self._debug = False
        self._cors_origins: list[str] | None = None
        self._health: _HealthOptions | None = None
        self._system: tuple[str, list[str]] | None = None
        self._routers: list[APIRouter] = []
        self._overrides: dict[Callable[..., object], Callable[..., object]] = {}
        self._hooks = _Hooks()

    def with_database(self, url: str) -> Self:
        """Open a database at ``url`` for the lifetime of the app."""
        self._database_url = url
        return self

    def with_database_instance(self, database: Database) -> Self:
        """Use an existing handle; the caller stays responsible for disposing it."""
        self._database = database
        return self

    def with_logging(self, enabled: bool = True, *, level: str | None = None, log_format: str | None = None) -> Self:
        """Configure structlog at startup and log every request."""
        self._logging = _LoggingOptions(level=level, log_format=log_format) if enabled else None
        return self

    def with_debug(self, enabled: bool = True) -> Self:
        """Add tracebacks to 500 responses."""
        self._debug = enabled
        return self

    def with_cors(self, origins: list[str] | None = None) -> Self:
        """Allow browser clients from ``origins`` (any origin when omitted)."""
        self._cors_origins = list(origins) if origins else ["*"]
        return self

    def with_health(
        self,
        *,
        prefix: str = "/health",
        tags: list[str] | None = None,
        checks: dict[str, HealthCheck] | None = None,
        include_database_check: bool = True,
    ) -> Self:
        """Serve aggregated health checks, by default including database connectivity."""
        self._health = _HealthOptions(
            prefix=prefix,
            tags=list(tags) if tags is not None else ["health"],
            checks=dict(checks or {}),
            database_check=include_database_check,
        )
        return self

    def with_system(self, *, prefix: str = "/api/system", tags: list[str] | None = None) -> Self:
        """Serve runtime information about the process."""
        self._system = (prefix, list(tags) if tags is not None else ["system"])
        return self

    def include_router(self, router: APIRouter) -> Self:
        self._routers.append(router)
        return self

    def override_dependency(self, dependency: Callable[..., object], override: Callable[..., object]) -> Self:
        self._overrides[dependency] = override
        return self

    def on_startup(self, hook: LifecycleHook) -> Self:
        """Run ``hook(app)`` after the database is ready."""
        self._hooks.startup.append(hook)
        return self

    def on_shutdown(self, hook: LifecycleHook) -> Self:
        """Run ``hook(app)`` before the database is closed."""
        self._hooks.shutdown.append(hook)
        return self

    def build(self) -> FastAPI:
        """Validate options and assemble the application."""
        self._check_health_names()
        self._validate_module_configuration()

        app = FastAPI(
            title=self.info.display_name,
            description=self.info.description or "",
            version=self.info.version,
            lifespan=self._lifespan(),
        )
        app.state.debug = self._debug

        add_error_handlers(app)
        if self._logging is not None:
            add_logging_middleware(app)
        if self._cors_origins is not None:
            app.add_middleware(
                CORSMiddleware,
                allow_origins=self._cors_origins,
                allow_methods=["*"],
                allow_headers=["*"],
            )

        if self._health is not None:
            checks = dict(self._health.checks)
            if self._health.database_check:
                checks["database"] = self._database_check(app)
            app.include_router(HealthRouter.create(prefix=self._health.prefix, tags=self._health.tags, checks=checks))

        if self._system is not None:
            prefix, tags = self._system
            app.include_router(SystemRouter.create(prefix=prefix, tags=tags))

        self._register_module_routers(app)

        for router in self._routers:
            app.include_router(router)
        app.dependency_overrides.update(self._overrides)

        info = self.info

        @app.get("/api/info", include_in_schema=False, response_model=ServiceInfo)
        async def get_info() -> ServiceInfo:
            return info

        return app

    def _validate_module_configuration(self) -> None:
        """Hook for subclasses to reject inconsistent module options."""

    def _register_module_routers(self, app: FastAPI) -> None:
        """Hook for subclasses to mount their feature routers."""

    def _check_health_names(self) -> None:
        if self._health is None:
            return
        for name in self._health.checks:
            if not name.replace("_", "").replace("-", "").isalnum():
                raise ValueError(
                    f"Health check name {name!r} contains invalid characters; "
                    "use letters, digits, underscores or hyphens"
                )

    def _lifespan(self) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
        database_url = self._database_url
        injected = self._database
        log_options = self._logging
        hooks = _Hooks(startup=list(self._hooks.startup), shutdown=list(self._hooks.shutdown))

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            if log_options is not None:
                configure_logging(level=log_options.level, log_format=log_options.log_format)

            database = injected or Database(database_url)
            await database.init()
            app.state.database = database
            logger.info("service.started", database_url=database.url, debug=app.state.debug)

            try:
                for hook in hooks.startup:
                    await hook(app)
                yield
            finally:
                for hook in hooks.shutdown:
                    await hook(app)
                app.state.database = None
                if injected is None:
                    await database.dispose()
                logger.info("service.stopped")

        return lifespan

    @staticmethod
    def _database_check(app: FastAPI) -> HealthCheck:
        """Health check running ``SELECT 1`` on the app's database."""

        async def check_database() -> tuple[HealthState, str | None]:
            database: Database | None = getattr(app.state, "database", None)
            if database is None:
                return (HealthState.UNHEALTHY, "Database not initialized")
            try:
                async with database.session() as session:
                    await session.execute(text("SELECT 1"))
            except Exception as e:
                logger.warning("health.database_unreachable", error=str(e))
                return (HealthState.UNHEALTHY, f"Database connection failed: {e}")
            return (HealthState.OK, None)

        return check_database
