"""FastAPI routers and related presentation logic."""

from todokit.core.api import HealthRouter, HealthState, HealthStatus, Router, SystemInfo, SystemRouter
from todokit.core.api.middleware import (
    add_error_handlers,
    add_logging_middleware,
    database_error_handler,
    validation_error_handler,
)
from todokit.core.api.service_builder import ServiceInfo
from todokit.core.api.utilities import build_location_url, run_app
from todokit.core.logging import (
    add_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    reset_request_context,
)
from todokit.modules.todo import TodoRouter

from .dependencies import get_todo_manager
from .service_builder import ServiceBuilder

__all__ = [
    # Base classes
    "Router",
    # Routers
    "HealthRouter",
    "HealthStatus",
    "HealthState",
    "SystemRouter",
    "SystemInfo",
    "TodoRouter",
    # Dependencies
    "get_todo_manager",
    # Middleware
    "add_error_handlers",
    "add_logging_middleware",
    "database_error_handler",
    "validation_error_handler",
    # Logging
    "configure_logging",
    "get_logger",
    "add_request_context",
    "clear_request_context",
    "reset_request_context",
    # Builders
    "ServiceBuilder",
    "ServiceInfo",
    # Utilities
    "build_location_url",
    "run_app",
]
