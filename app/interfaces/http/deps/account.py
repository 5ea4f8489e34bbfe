"""Account related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.container import get_settings_dependency
from app.infrastructure.database.repositories import SqlAccountRepository
from app.modules.accounts.service import AccountService

from .database import get_db_session


def get_account_repository(db: AsyncSession = Depends(get_db_session)) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def get_account_service(
    repository: SqlAccountRepository = Depends(get_account_repository),
    settings: Settings = Depends(get_settings_dependency),
) -> AccountService:
    return AccountService(repository, bcrypt_rounds=settings.security.bcrypt_rounds)


__all__ = [
    "get_account_repository",
    "get_account_service",
]
