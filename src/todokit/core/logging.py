"""Structured logging configuration built on structlog."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.typing import Processor


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(*, level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and route stdlib logging through the same renderer.

    Level and format fall back to TODOKIT_LOG_LEVEL and TODOKIT_LOG_FORMAT
    ("console" or "json").
    """
    level_name = (level or os.getenv("TODOKIT_LOG_LEVEL", "INFO")).upper()
    format_name = (log_format or os.getenv("TODOKIT_LOG_FORMAT", "console")).lower()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    renderer: Processor
    if format_name == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    shared = _shared_processors()

    structlog.configure(
        processors=[
            *shared,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    final_processors: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if format_name == "json":
        final_processors.append(structlog.processors.format_exc_info)
    final_processors.append(renderer)

    formatter = structlog.stdlib.ProcessorFormatter(foreign_pre_chain=shared, processors=final_processors)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    # uvicorn installs its own handlers; let records propagate to ours instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the given name."""
    return structlog.get_logger(name)


def add_request_context(**kwargs: Any) -> None:
    """Bind key-value pairs to the logging context of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def reset_request_context(*keys: str) -> None:
    """Remove the given keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_request_context() -> None:
    """Clear the whole logging context."""
    structlog.contextvars.clear_contextvars()
