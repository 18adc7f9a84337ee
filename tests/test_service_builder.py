"""Tests for ServiceBuilder configuration and lifecycle."""

from __future__ import annotations

import pytest
from fastapi import APIRouter, Depends, FastAPI
from fastapi.testclient import TestClient

from todokit.api import ServiceBuilder, ServiceInfo
from todokit.core import Database
from todokit.modules.todo import TodoRepository


def test_todo_prefix_must_start_with_slash() -> None:
    """A relative todo prefix is rejected at build time."""
    builder = ServiceBuilder(info=ServiceInfo(display_name="Test")).with_todos(prefix="api/todos")

    with pytest.raises(ValueError, match="Todo prefix must start with '/'"):
        builder.build()


def test_custom_todo_prefix() -> None:
    app = ServiceBuilder(info=ServiceInfo(display_name="Test")).with_todos(prefix="/v2/tasks", seed=False).build()

    with TestClient(app) as client:
        assert client.post("/v2/tasks", json={"title": "moved"}).status_code == 201
        assert client.get("/api/todos").status_code == 404


def test_info_endpoint() -> None:
    """Service metadata is served at /api/info."""
    info = ServiceInfo(display_name="Todo Service", version="2.0.0", summary="Tasks")
    app = ServiceBuilder(info=info).build()

    with TestClient(app) as client:
        data = client.get("/api/info").json()

    assert data["display_name"] == "Todo Service"
    assert data["version"] == "2.0.0"
    assert data["summary"] == "Tasks"
    assert data["description"] == "Tasks"


def test_system_endpoint() -> None:
    app = ServiceBuilder(info=ServiceInfo(display_name="Test")).with_system().with_debug().build()

    with TestClient(app) as client:
        data = client.get("/api/system").json()

    assert data["database_backend"] == "sqlite+aiosqlite"
    assert data["debug"] is True
    assert {"current_time", "python_version", "platform", "hostname", "package_version"} <= set(data)


def test_startup_and_shutdown_hooks_run_in_order() -> None:
    """Hooks see the opened database and run around the app lifetime."""
    calls: list[str] = []

    async def on_start(app: FastAPI) -> None:
        assert isinstance(app.state.database, Database)
        calls.append("start")

    async def on_stop(app: FastAPI) -> None:
        calls.append("stop")

    app = ServiceBuilder(info=ServiceInfo(display_name="Test")).on_startup(on_start).on_shutdown(on_stop).build()

    with TestClient(app):
        assert calls == ["start"]

    assert calls == ["start", "stop"]
    assert app.state.database is None


async def test_injected_database_is_not_disposed() -> None:
    """A database passed in by the caller outlives the app."""
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.init()
    app = (
        ServiceBuilder(info=ServiceInfo(display_name="Test"))
        .with_database_instance(database)
        .with_todos(seed=True)
        .build()
    )

    async with app.router.lifespan_context(app):
        assert app.state.database is database

    async with database.session() as session:
        assert await TodoRepository(session).count() == 5

    await database.dispose()


def test_include_router_and_dependency_override() -> None:
    extra = APIRouter(prefix="/extra")

    def real_value() -> str:
        return "real"

    def fake_value() -> str:
        return "fake"

    @extra.get("")
    async def read(value: str = Depends(real_value)) -> dict[str, str]:
        return {"value": value}

    app = (
        ServiceBuilder(info=ServiceInfo(display_name="Test"))
        .include_router(extra)
        .override_dependency(real_value, fake_value)
        .build()
    )

    with TestClient(app) as client:
        assert client.get("/extra").json() == {"value": "fake"}


def test_cors_headers() -> None:
    app = ServiceBuilder(info=ServiceInfo(display_name="Test")).with_cors(["http://localhost:5173"]).build()

    with TestClient(app) as client:
        response = client.get("/api/info", headers={"Origin": "http://localhost:5173"})

    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_logging_middleware_echoes_request_id() -> None:
    app = ServiceBuilder(info=ServiceInfo(display_name="Test")).with_logging(log_format="json").build()

    with TestClient(app) as client:
        given = client.get("/api/info", headers={"X-Request-ID": "abc123"})
        generated = client.get("/api/info")

    assert given.headers["X-Request-ID"] == "abc123"
    assert len(generated.headers["X-Request-ID"]) == 32
