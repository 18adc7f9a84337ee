"""FastAPI framework layer - routers, middleware, utilities."""

from .dependencies import get_database, get_session
from .middleware import (
    add_error_handlers,
    add_logging_middleware,
    database_error_handler,
    todokit_exception_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from .router import Router
from .routers import HealthRouter, HealthState, HealthStatus, SystemInfo, SystemRouter
from .service_builder import BaseServiceBuilder, ServiceInfo
from .utilities import build_location_url, run_app, validate_request_data

__all__ = [
    # Base router class
    "Router",
    # Service builder
    "BaseServiceBuilder",
    "ServiceInfo",
    # Dependencies
    "get_database",
    "get_session",
    # Middleware
    "add_error_handlers",
    "add_logging_middleware",
    "database_error_handler",
    "todokit_exception_handler",
    "unhandled_exception_handler",
    "validation_error_handler",
    # System routers
    "HealthRouter",
    "HealthState",
    "HealthStatus",
    "SystemRouter",
    "SystemInfo",
    # Utilities
    "build_location_url",
    "run_app",
    "validate_request_data",
]
