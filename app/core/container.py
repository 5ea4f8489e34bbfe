"""Dependency container owning the per-application infrastructure handles."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.core.config import Settings
from app.infrastructure.database import build_engine, build_session_factory, init_db, session_scope
from app.infrastructure.storage import BlobStore, build_blob_store


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    blob_store: BlobStore

    @classmethod
    def build(cls, settings: Settings, *, blob_store: BlobStore | None = None) -> "ApplicationContainer":
        engine = build_engine(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            blob_store=blob_store or build_blob_store(settings.storage),
        )

    async def init_infrastructure(self) -> None:
        """Create tables when running without migrations (development, tests)."""
        await init_db(self.engine)

    def session(self) -> AbstractAsyncContextManager[AsyncSession]:
        return session_scope(self.session_factory)

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_settings_dependency(request: Request) -> Settings:
    return get_container(request).settings


__all__ = ["ApplicationContainer", "get_container", "get_settings_dependency"]
