"""Runtime information router."""

from __future__ import annotations

import platform
import sys
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version

from fastapi import Request
from pydantic import BaseModel, Field
from sqlalchemy.engine import make_url

from ..router import Router


def _package_version() -> str:
    try:
        return version("todokit")
    except PackageNotFoundError:
        return "unknown"


class SystemInfo(BaseModel):
    """Runtime information about the serving process."""

    current_time: datetime = Field(description="Current server time in UTC")
    python_version: str = Field(description="Python version")
    platform: str = Field(description="Operating system platform")
    hostname: str = Field(description="Server hostname")
    package_version: str = Field(description="Installed todokit version")
    database_backend: str | None = Field(default=None, description="SQLAlchemy dialect and driver in use")
    debug: bool = Field(description="Whether development mode is on")


class SystemRouter(Router):
    """Runtime information router."""

    def _register_routes(self) -> None:
        """Register system info endpoint."""

        @self.router.get(
            "",
            summary="System information",
            response_model=SystemInfo,
        )
        async def get_system_info(request: Request) -> SystemInfo:
            database = getattr(request.app.state, "database", None)
            backend = None
            if database is not None:
                url = make_url(database.url)
                backend = f"{url.get_backend_name()}+{url.get_driver_name()}"

            return SystemInfo(
                current_time=datetime.now(timezone.utc),
                python_version=f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
                platform=platform.platform(),
                hostname=platform.node(),
                package_version=_package_version(),
                database_backend=backend,
                debug=bool(getattr(request.app.state, "debug", False)),
            )
