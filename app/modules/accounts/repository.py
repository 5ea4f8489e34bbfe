"""Repository protocol for accounts."""

from __future__ import annotations

from typing import Protocol

from .models import Account


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def get_by_username(self, username: str) -> Account | None:
        ...

    async def get_by_email(self, email: str) -> Account | None:
        ...

    async def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        email: str | None,
    ) -> Account:
        ...

    async def update_account(
        self,
        account_id: str,
        *,
        username: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> Account:
        ...

    async def delete_account(self, account_id: str) -> bool:
        ...
