"""Application error hierarchy and the error-response renderer.

Every failure raised by the post API is an :class:`ApiError` carrying an
HTTP status, a user-facing message and optional structured details.  The
controller never recovers from these; :func:`render_api_error` is registered
as a FastAPI exception handler and turns them into the error envelope::

    {"success": false, "message": "...", "errors": {...}}

Storage and unexpected failures are first classified by
``normalize_db_error`` / ``normalize_unknown_error`` so that internals never
reach the client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi.responses import JSONResponse

from backend.app.core.logging import EVENT_API_ERROR, log_event

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Structured application error with an HTTP-equivalent status."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class InvalidIdentifierError(ApiError):
    """Path identifier is non-numeric or not positive."""

    def __init__(self, raw_id: str | None = None, message: str = "Invalid post ID") -> None:
        super().__init__(message, status_code=400)
        self.raw_id = raw_id


class ValidationFailedError(ApiError):
    """One or more post fields violate their constraints."""

    def __init__(self, errors: dict[str, str], message: str = "Validation failed") -> None:
        super().__init__(message, status_code=422, details=dict(errors))

    @property
    def errors(self) -> dict[str, str]:
        return self.details or {}


class PostNotFoundError(ApiError):
    """Raised when a post cannot be found by id."""

    def __init__(self, post_id: int | None = None, message: str | None = None) -> None:
        if message is None:
            message = f"Post not found: id={post_id}" if post_id is not None else "Post not found"
        super().__init__(message, status_code=404)
        self.post_id = post_id


class StorageError(ApiError):
    """Repository failure that is not a missing record."""

    def __init__(self, message: str, status_code: int = 500, retryable: bool = False) -> None:
        super().__init__(message, status_code=status_code)
        self.retryable = retryable

    @classmethod
    def from_normalized(cls, error: NormalizedError) -> StorageError:
        return cls(error.user_message, status_code=error.http_status, retryable=error.retryable)


@dataclass(frozen=True)
class NormalizedError:
    """Standardized error representation for API responses."""

    user_message: str
    error_category: str
    retryable: bool
    http_status: int = 500


def normalize_db_error(
    exc: Exception,
    *,
    operation: str,
    event_name: str = "db_write_failed",
    correlation_id: str | None = None,
) -> NormalizedError:
    """Normalize a database error into a user-friendly message."""
    exc_msg = str(exc).lower()

    if "locked" in exc_msg or "busy" in exc_msg:
        error = NormalizedError(
            user_message=(
                "The database is temporarily busy. Please try again in a moment."
            ),
            error_category="db",
            retryable=True,
            http_status=503,
        )
    elif "readonly" in exc_msg or "read-only" in exc_msg or "permission" in exc_msg:
        error = NormalizedError(
            user_message=(
                "A database permission error occurred. "
                "Check APP_DB_PATH points to a writable location."
            ),
            error_category="db",
            retryable=False,
            http_status=500,
        )
    else:
        error = NormalizedError(
            user_message="A database error occurred. Please try again.",
            error_category="db",
            retryable=True,
            http_status=500,
        )

    log_event(
        logger, "error", event_name,
        operation=operation,
        error_category=error.error_category,
        retryable=error.retryable,
        correlation_id=correlation_id or "N/A",
        detail=str(exc),
    )
    return error


def normalize_unknown_error(
    exc: Exception,
    *,
    operation: str,
    correlation_id: str | None = None,
) -> NormalizedError:
    """Normalize an unexpected error into a safe generic message."""
    log_event(
        logger, "exception", "unknown_error",
        operation=operation,
        error_category="unknown",
        correlation_id=correlation_id or "N/A",
        detail=f"{type(exc).__name__}: {exc}",
    )
    return NormalizedError(
        user_message="An unexpected error occurred. Please try again.",
        error_category="unknown",
        retryable=False,
        http_status=500,
    )


def error_envelope(message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the JSON body shared by every error response."""
    body: dict[str, Any] = {"success": False, "message": message}
    if details:
        body["errors"] = details
    return body


def render_api_error(exc: ApiError, *, operation: str = "N/A") -> JSONResponse:
    """Render an :class:`ApiError` as a JSON error response."""
    level = "error" if exc.status_code >= 500 else "warning"
    log_event(
        logger, level, EVENT_API_ERROR,
        operation=operation,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
        message=exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.message, exc.details),
    )
