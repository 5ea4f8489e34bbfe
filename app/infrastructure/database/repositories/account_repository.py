"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Account as AccountModel
from app.infrastructure.database.errors import is_unique_violation
from app.modules.accounts.exceptions import AccountAlreadyExistsError, AccountNotFoundError
from app.modules.accounts.models import Account
from app.modules.accounts.repository import AccountRepository


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        return self._to_domain(await self._session.get(AccountModel, account_id))

    async def get_by_username(self, username: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.username == username)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_by_email(self, email: str) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.email == email)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def create_account(
        self,
        *,
        username: str,
        password_hash: str,
        email: str | None,
    ) -> Account:
        model = AccountModel(
            username=username,
            password_hash=password_hash,
            email=email,
        )
        self._session.add(model)
        await self._flush_unique(f"Account already exists: {username}")
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_account(
        self,
        account_id: str,
        *,
        username: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> Account:
        model = await self._session.get(AccountModel, account_id)
        if model is None:
            raise AccountNotFoundError(account_id)

        if username is not None:
            model.username = username
        if email is not None:
            model.email = email
        if password_hash is not None:
            model.password_hash = password_hash

        await self._flush_unique(f"Account field already in use: {account_id}")
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete_account(self, account_id: str) -> bool:
        stmt = delete(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def _flush_unique(self, message: str) -> None:
        # a concurrent writer can still win the race after the service pre-check
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            if not is_unique_violation(exc):
                raise
            raise AccountAlreadyExistsError(message) from exc

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            username=model.username,
            password_hash=model.password_hash,
            email=model.email,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
