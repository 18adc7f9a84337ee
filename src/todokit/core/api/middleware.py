"""Error handlers and request logging middleware."""

from __future__ import annotations

import time
import traceback
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, cast

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from todokit.core.exceptions import ErrorType, TodokitException
from todokit.core.logging import add_request_context, get_logger, reset_request_context

logger = get_logger(__name__)

PROBLEM_JSON = "application/problem+json"
GENERIC_ERROR_DETAIL = "An unexpected error occurred"
REQUEST_ID_HEADER = "X-Request-ID"


def _problem_response(
    request: Request,
    *,
    status_code: int,
    type_uri: str,
    title: str,
    detail: str,
    instance: str | None = None,
    **extensions: Any,
) -> JSONResponse:
    content: dict[str, Any] = {
        "type": type_uri,
        "title": title,
        "status": status_code,
        "detail": detail,
        "instance": instance or request.url.path,
    }
    content.update(extensions)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content), media_type=PROBLEM_JSON)


def _debug_enabled(request: Request) -> bool:
    return bool(getattr(request.app.state, "debug", False))


def _server_error(request: Request, exc: Exception) -> JSONResponse:
    extensions: dict[str, Any] = {}
    if _debug_enabled(request):
        extensions["traceback"] = "".join(traceback.format_exception(exc))
    return _problem_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        type_uri=ErrorType.INTERNAL_ERROR,
        title="Internal Server Error",
        detail=GENERIC_ERROR_DETAIL,
        **extensions,
    )


async def todokit_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a TodokitException as problem details."""
    error = cast(TodokitException, exc)
    logger.warning(
        "request.rejected",
        status=error.status,
        detail=error.detail,
        method=request.method,
        path=request.url.path,
    )
    return _problem_response(
        request,
        status_code=error.status,
        type_uri=error.type_uri,
        title=error.title,
        detail=error.detail,
        instance=error.instance,
        **error.extensions,
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render request validation failures as 400 problem details."""
    errors = cast(RequestValidationError, exc).errors()
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    detail = "; ".join(messages) or "Invalid request"

    logger.warning("request.validation_failed", method=request.method, path=request.url.path, detail=detail)
    return _problem_response(
        request,
        status_code=status.HTTP_400_BAD_REQUEST,
        type_uri=ErrorType.VALIDATION_FAILED,
        title="Bad Request",
        detail=detail,
        errors=[{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors],
    )


async def database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render storage failures as a generic 500 response."""
    logger.error(
        "database.query_failed",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return _server_error(request, exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other exception as a generic 500 response."""
    logger.error(
        "request.unhandled_exception",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return _server_error(request, exc)


def add_error_handlers(app: FastAPI) -> None:
    """Install problem-details error handlers on the app."""
    app.add_exception_handler(TodokitException, todokit_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def add_logging_middleware(app: FastAPI) -> None:
    """Bind a request id to the logging context and log each request outcome."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        add_request_context(request_id=request_id, method=request.method, path=request.url.path)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("http.request.failed", duration_ms=round((time.perf_counter() - started) * 1000, 2))
            raise
        else:
            logger.info(
                "http.request.completed",
                status=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            reset_request_context("request_id", "method", "path")
