"""Request and serving helpers for applications."""

from __future__ import annotations

import os
from typing import Any, TypeVar

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError


def build_location_url(request: Request, path: str) -> str:
    """Build an absolute URL for a resource path on the serving host."""
    return f"{str(request.base_url).rstrip('/')}{path}"


ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_request_data(model: type[ModelT], data: Any, *, location: str) -> ModelT:
    """Validate ``data`` against ``model`` inside a route handler.

    Failures are raised as RequestValidationError with ``location`` (``"query"``
    or ``"body"``) prefixed to each error path, so they render like the errors
    FastAPI reports while parsing the request.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = [{**error, "loc": (location, *error["loc"])} for error in e.errors(include_url=False)]
        raise RequestValidationError(errors, body=data if location == "body" else None) from e


def run_app(
    app: FastAPI | str,
    *,
    host: str | None = None,
    port: int | None = None,
    reload: bool = False,
    **uvicorn_kwargs: Any,
) -> None:
    """Serve an app or an "module:attribute" import string with uvicorn.

    Host and port fall back to TODOKIT_HOST and TODOKIT_PORT. Logging is left
    to structlog, so uvicorn's own log config is disabled.
    """
    resolved_host = host or os.getenv("TODOKIT_HOST", "127.0.0.1")
    resolved_port = port or int(os.getenv("TODOKIT_PORT", "3001"))
    uvicorn_kwargs.setdefault("log_config", None)
    uvicorn.run(app, host=resolved_host, port=resolved_port, reload=reload, **uvicorn_kwargs)
