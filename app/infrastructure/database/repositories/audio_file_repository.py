"""SQLAlchemy implementation of the audio file repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Account as AccountModel
from app.db.models import AudioFile as AudioFileModel
from app.modules.audio.models import AudioCategory, AudioFile
from app.modules.audio.repository import AudioFileRepository


class SqlAudioFileRepository(AudioFileRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        owner_id: str,
        title: str,
        description: str | None,
        category: AudioCategory,
        s3_key: str,
        s3_url: str | None,
        file_name: str,
        file_size: int,
        mime_type: str,
    ) -> AudioFile:
        model = AudioFileModel(
            owner_id=owner_id,
            title=title,
            description=description,
            category=category.value,
            s3_key=s3_key,
            s3_url=s3_url,
            file_name=file_name,
            file_size=file_size,
            mime_type=mime_type,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def owner_exists(self, owner_id: str) -> bool:
        stmt = select(AccountModel.id).where(AccountModel.id == owner_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def get_by_id(self, audio_id: str) -> AudioFile | None:
        model = await self._session.get(AudioFileModel, audio_id)
        return self._to_domain(model) if model else None

    async def list_by_owner(self, owner_id: str, category: AudioCategory | None = None) -> Sequence[AudioFile]:
        stmt = select(AudioFileModel).where(AudioFileModel.owner_id == owner_id)
        if category is not None:
            stmt = stmt.where(AudioFileModel.category == category.value)
        stmt = stmt.order_by(AudioFileModel.created_at.desc(), AudioFileModel.id.desc())
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def find_by_file_name(self, owner_id: str, file_name: str) -> AudioFile | None:
        stmt = (
            select(AudioFileModel)
            .where(AudioFileModel.owner_id == owner_id, AudioFileModel.file_name == file_name)
            .order_by(AudioFileModel.created_at.asc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def delete(self, audio_id: str) -> bool:
        stmt = delete(AudioFileModel).where(AudioFileModel.id == audio_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    @staticmethod
    def _to_domain(model: AudioFileModel) -> AudioFile:
        return AudioFile(
            id=str(model.id),
            owner_id=model.owner_id,
            title=model.title,
            description=model.description,
            category=AudioCategory(model.category),
            s3_key=model.s3_key,
            s3_url=model.s3_url,
            file_name=model.file_name,
            file_size=model.file_size,
            mime_type=model.mime_type,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
