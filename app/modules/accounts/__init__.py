"""Account domain services and models."""

from .models import Account, AccountCreateInput, AccountUpdateInput, UNSET
from .service import AccountService
from .exceptions import (
    AccountAccessDeniedError,
    AccountError,
    AccountAlreadyExistsError,
    AccountNotFoundError,
)

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountUpdateInput",
    "AccountService",
    "AccountAccessDeniedError",
    "AccountError",
    "AccountAlreadyExistsError",
    "AccountNotFoundError",
    "UNSET",
]
