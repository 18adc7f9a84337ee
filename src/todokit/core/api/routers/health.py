"""Health endpoint aggregating named async checks."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from enum import StrEnum

from pydantic import BaseModel, Field

from todokit.core.logging import get_logger

from ..router import Router

logger = get_logger(__name__)


class HealthState(StrEnum):
    """State reported by a single check and by the service overall."""

    OK = "ok"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


_SEVERITY = {HealthState.OK: 0, HealthState.DEGRADED: 1, HealthState.UNHEALTHY: 2}

HealthCheck = Callable[[], Awaitable[tuple[HealthState, str | None]]]


class CheckResult(BaseModel):
    state: HealthState
    message: str | None = Field(default=None, description="Why the check is not ok")


class HealthStatus(BaseModel):
    """Response body of the health endpoint."""

    status: HealthState = Field(description="Worst state across all checks")
    checks: dict[str, CheckResult] | None = Field(default=None, description="Per-check results, when configured")


def worst_state(states: Iterable[HealthState]) -> HealthState:
    """Most severe state in ``states``; OK when empty."""
    return max(states, key=_SEVERITY.__getitem__, default=HealthState.OK)


class HealthRouter(Router):
    """Serves GET ``prefix`` running every configured check in turn."""

    def __init__(
        self,
        prefix: str,
        tags: list[str],
        checks: dict[str, HealthCheck] | None = None,
        **kwargs: object,
    ) -> None:
        self.checks = checks or {}
        super().__init__(prefix=prefix, tags=tags, **kwargs)

    async def run_checks(self) -> dict[str, CheckResult]:
        """Run each check; a check that raises counts as unhealthy."""
        results: dict[str, CheckResult] = {}
        for name, check in self.checks.items():
            try:
                state, message = await check()
            except Exception as e:
                logger.warning("health.check_failed", check=name, error=str(e))
                state, message = HealthState.UNHEALTHY, f"Check failed: {e}"
            results[name] = CheckResult(state=state, message=message)
        return results

    def _register_routes(self) -> None:
        @self.router.get("", summary="Health check", response_model=HealthStatus, response_model_exclude_none=True)
        async def health_check() -> HealthStatus:
            if not self.checks:
                return HealthStatus(status=HealthState.OK)
            results = await self.run_checks()
            return HealthStatus(status=worst_state(r.state for r in results.values()), checks=results)
