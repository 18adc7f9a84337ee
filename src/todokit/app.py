"""Application factory and server entry point."""

from __future__ import annotations

from fastapi import FastAPI

from todokit.api import ServiceBuilder, ServiceInfo, run_app
from todokit.core.settings import Settings

INFO = ServiceInfo(
    display_name="Todokit",
    summary="Task management REST service",
    description="Create, list, filter, sort, update and delete tasks.",
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the todo service from settings (environment when omitted)."""
    settings = settings or Settings.from_env()

    return (
        ServiceBuilder(info=INFO, database_url=settings.database_url)
        .with_logging(level=settings.log_level, log_format=settings.log_format)
        .with_debug(settings.debug)
        .with_cors(settings.cors_origins)
        .with_health()
        .with_system()
        .with_todos(seed=settings.seed)
        .build()
    )


def main() -> None:
    """Serve the app with uvicorn using TODOKIT_* settings."""
    settings = Settings.from_env()
    run_app(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
