"""Audio related dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import ApplicationContainer, get_container
from app.infrastructure.database.repositories import SqlAudioFileRepository
from app.modules.audio.service import AudioService, UploadPolicy

from .database import get_db_session


def get_audio_repository(db: AsyncSession = Depends(get_db_session)) -> SqlAudioFileRepository:
    return SqlAudioFileRepository(db)


def get_audio_service(
    repository: SqlAudioFileRepository = Depends(get_audio_repository),
    container: ApplicationContainer = Depends(get_container),
) -> AudioService:
    return AudioService(
        repository,
        container.blob_store,
        UploadPolicy.from_settings(container.settings.storage),
    )


__all__ = [
    "get_audio_repository",
    "get_audio_service",
]
