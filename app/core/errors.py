"""Application error taxonomy.

Every failure surfaced to a client maps to one of these classes. The
``error`` attribute is the short machine-classifiable string placed in the
response body; ``status_code`` is the HTTP status used by the exception
handlers in :mod:`app.interfaces.http.errors`.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base class for errors that carry their own HTTP classification."""

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, message: str | None = None, *, error: str | None = None, details: Any = None) -> None:
        if error is not None:
            self.error = error
        super().__init__(message or self.error)
        self.details = details

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else self.error


class ValidationFailedError(AppError):
    """Malformed, missing or out-of-range input detected before any downstream call."""

    status_code = 400
    error = "Validation Error"


class AuthenticationError(AppError):
    """Absent, malformed, expired or badly signed credentials."""

    status_code = 401
    error = "Unauthorized"


class AuthorizationError(AppError):
    """Authenticated caller does not own the targeted resource."""

    status_code = 403
    error = "Forbidden"


class NotFoundError(AppError):
    """Valid identifier with no matching record."""

    status_code = 404
    error = "Not Found"


class ConflictError(AppError):
    """Unique-field collision on create or update."""

    status_code = 409
    error = "Duplicate Entry"


class StorageError(AppError):
    """A blob store operation failed."""

    status_code = 500
    error = "Storage Error"


__all__ = [
    "AppError",
    "ValidationFailedError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
]
