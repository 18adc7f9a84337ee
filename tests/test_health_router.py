"""Tests for health check router."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from todokit.api import ServiceBuilder, ServiceInfo
from todokit.core.api.routers.health import CheckResult, HealthRouter, HealthState, HealthStatus


async def check_ok() -> tuple[HealthState, str | None]:
    return (HealthState.OK, None)


async def check_degraded() -> tuple[HealthState, str | None]:
    return (HealthState.DEGRADED, "Partial outage")


async def check_unhealthy() -> tuple[HealthState, str | None]:
    return (HealthState.UNHEALTHY, "Service down")


async def check_exception() -> tuple[HealthState, str | None]:
    raise RuntimeError("boom")


def make_app(checks: dict | None = None) -> FastAPI:
    app = FastAPI()
    app.include_router(HealthRouter.create(prefix="/health", tags=["health"], checks=checks))
    return app


def test_health_check_no_checks() -> None:
    """Without checks the endpoint reports ok and omits the checks map."""
    response = TestClient(make_app()).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_check_with_checks() -> None:
    """Check results are aggregated; the worst state wins."""
    app = make_app(
        {
            "ok_check": check_ok,
            "degraded_check": check_degraded,
            "unhealthy_check": check_unhealthy,
            "exception_check": check_exception,
        }
    )
    data = TestClient(app).get("/health").json()

    assert data["status"] == "unhealthy"
    checks = data["checks"]
    assert checks["ok_check"] == {"state": "ok"}
    assert checks["degraded_check"] == {"state": "degraded", "message": "Partial outage"}
    assert checks["unhealthy_check"]["message"] == "Service down"
    assert checks["exception_check"]["state"] == "unhealthy"
    assert checks["exception_check"]["message"] == "Check failed: boom"


@pytest.mark.parametrize(
    ("checks", "expected"),
    [
        ({"a": check_ok}, "ok"),
        ({"a": check_ok, "b": check_degraded}, "degraded"),
        ({"a": check_degraded, "b": check_unhealthy}, "unhealthy"),
    ],
)
def test_health_check_aggregation_priority(checks: dict, expected: str) -> None:
    """unhealthy > degraded > ok in aggregation."""
    assert TestClient(make_app(checks)).get("/health").json()["status"] == expected


def test_health_models() -> None:
    """Model defaults."""
    assert HealthState.OK.value == "ok"
    assert CheckResult(state=HealthState.OK).message is None
    assert HealthStatus(status=HealthState.OK).checks is None


def test_service_health_includes_database_check() -> None:
    """The built service checks database connectivity."""
    app = ServiceBuilder(info=ServiceInfo(display_name="Health Test")).with_health().build()

    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "checks": {"database": {"state": "ok"}}}


def test_service_health_without_database_check() -> None:
    app = (
        ServiceBuilder(info=ServiceInfo(display_name="Health Test"))
        .with_health(include_database_check=False, checks={"custom": check_degraded})
        .build()
    )

    with TestClient(app) as client:
        data = client.get("/health").json()

    assert data["status"] == "degraded"
    assert set(data["checks"]) == {"custom"}


def test_invalid_check_name_rejected() -> None:
    builder = ServiceBuilder(info=ServiceInfo(display_name="Health Test")).with_health(checks={"bad name!": check_ok})

    with pytest.raises(ValueError, match="invalid characters"):
        builder.build()
