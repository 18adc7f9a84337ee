"""Domain exceptions mapped to RFC 9457 problem details by the API error handlers."""

from __future__ import annotations

from typing import Any


class ErrorType:
    """URN identifiers used as the problem ``type`` field."""

    NOT_FOUND = "urn:todokit:error:not-found"
    BAD_REQUEST = "urn:todokit:error:bad-request"
    VALIDATION_FAILED = "urn:todokit:error:validation-failed"
    INTERNAL_ERROR = "urn:todokit:error:internal"


class TodokitException(Exception):
    """Base exception carrying the fields of a problem details response."""

    def __init__(
        self,
        detail: str,
        *,
        type_uri: str = ErrorType.INTERNAL_ERROR,
        title: str = "Internal Server Error",
        status: int = 500,
        instance: str | None = None,
        **extensions: Any,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.type_uri = type_uri
        self.title = title
        self.status = status
        self.instance = instance
        self.extensions = extensions


class NotFoundError(TodokitException):
    """Raised when a requested entity does not exist."""

    def __init__(self, detail: str, *, instance: str | None = None, **extensions: Any) -> None:
        super().__init__(
            detail,
            type_uri=ErrorType.NOT_FOUND,
            title="Not Found",
            status=404,
            instance=instance,
            **extensions,
        )


class BadRequestError(TodokitException):
    """Raised when request data fails a business rule."""

    def __init__(self, detail: str, *, instance: str | None = None, **extensions: Any) -> None:
        super().__init__(
            detail,
            type_uri=ErrorType.BAD_REQUEST,
            title="Bad Request",
            status=400,
            instance=instance,
            **extensions,
        )
