"""Tests for todo_api example using TestClient.

Tests use FastAPI's TestClient instead of running a separate server.
Validates the seeded service, its custom health check and request tracing.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from examples.todo_api import app


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    """Create FastAPI TestClient for testing with lifespan context."""
    with TestClient(app) as test_client:
        yield test_client


def test_health_endpoint(client: TestClient) -> None:
    """Database and backlog checks both pass on the sample data."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["checks"]["database"]["state"] == "ok"
    assert data["checks"]["backlog"]["state"] == "ok"


def test_info_endpoint(client: TestClient) -> None:
    """Test service info endpoint returns service metadata."""
    data = client.get("/api/info").json()
    assert data["display_name"] == "Todo Example Service"
    assert data["summary"] == "Todo API with backlog health check"


def test_seeded_tasks(client: TestClient) -> None:
    """The in-memory database starts with the sample tasks."""
    response = client.get("/api/todos", params={"completed": "true"})
    assert response.status_code == 200
    assert [todo["title"] for todo in response.json()] == ["Buy groceries"]


def test_request_id_header(client: TestClient) -> None:
    """Logging middleware echoes a request id."""
    response = client.get("/api/todos/1", headers={"X-Request-ID": "example-1"})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "example-1"
