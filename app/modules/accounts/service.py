"""Domain services for account management."""

from __future__ import annotations

import logging

from app.core.crypto import DEFAULT_ROUNDS, hash_password, verify_password
from app.core.ownership import ensure_access

from .exceptions import AccountAccessDeniedError, AccountAlreadyExistsError, AccountNotFoundError
from .models import Account, AccountCreateInput, AccountUpdateInput
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository, *, bcrypt_rounds: int = DEFAULT_ROUNDS) -> None:
        self._repository = repository
        self._bcrypt_rounds = bcrypt_rounds

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_by_username(self, username: str) -> Account | None:
        return await self._repository.get_by_username(username)

    async def get_profile(self, account_id: str) -> Account:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def authenticate(self, username: str, password: str) -> Account | None:
        account = await self._repository.get_by_username(username)
        if account is None:
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def register(self, payload: AccountCreateInput) -> Account:
        await self._ensure_unique(username=payload.username, email=payload.email)

        account = await self._repository.create_account(
            username=payload.username,
            password_hash=hash_password(payload.password, self._bcrypt_rounds),
            email=payload.email or None,
        )
        logger.info("Account %s registered as %s", account.id, account.username)
        return account

    async def update_account(self, caller_id: str, account_id: str, payload: AccountUpdateInput) -> Account:
        ensure_access(caller_id, account_id, AccountAccessDeniedError)

        current = await self._repository.get_by_id(account_id)
        if current is None:
            raise AccountNotFoundError(account_id)

        changes = payload.provided()
        username = changes.get("username")
        email = changes.get("email")
        await self._ensure_unique(
            username=username if username != current.username else None,
            email=email if email != current.email else None,
        )

        password_hash = None
        if "password" in changes:
            password_hash = hash_password(str(changes["password"]), self._bcrypt_rounds)

        account = await self._repository.update_account(
            account_id,
            username=username,
            email=email,
            password_hash=password_hash,
        )
        logger.info("Account %s updated fields: %s", account_id, ", ".join(sorted(changes)) or "none")
        return account

    async def delete_account(self, caller_id: str, account_id: str) -> None:
        # owned audio records go with the account through the foreign key
        # cascade; their blobs are left in the store
        ensure_access(caller_id, account_id, AccountAccessDeniedError)

        deleted = await self._repository.delete_account(account_id)
        if not deleted:
            raise AccountNotFoundError(account_id)
        logger.info("Account %s deleted", account_id)

    async def _ensure_unique(self, *, username: str | None, email: str | None) -> None:
        if username and await self._repository.get_by_username(username) is not None:
            raise AccountAlreadyExistsError(f"Username already exists: {username}")
        if email and await self._repository.get_by_email(email) is not None:
            raise AccountAlreadyExistsError(f"Email already exists: {email}")
