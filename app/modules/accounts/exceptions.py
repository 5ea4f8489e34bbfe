"""Account domain specific exceptions."""

from app.core.errors import AppError, AuthorizationError, ConflictError, NotFoundError


class AccountError(AppError):
    """Base class for account domain errors."""


class AccountAlreadyExistsError(AccountError, ConflictError):
    """Raised when a username or email collides with an existing account."""


class AccountNotFoundError(AccountError, NotFoundError):
    """Raised when the requested account cannot be found."""

    error = "User not found"


class AccountAccessDeniedError(AccountError, AuthorizationError):
    """Raised when a caller targets an account other than their own."""
