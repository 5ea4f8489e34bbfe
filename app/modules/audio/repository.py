"""Repository protocol for audio file records."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import AudioCategory, AudioFile


class AudioFileRepository(Protocol):
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
        ...

    async def owner_exists(self, owner_id: str) -> bool:
        ...

    async def get_by_id(self, audio_id: str) -> AudioFile | None:
        ...

    async def list_by_owner(self, owner_id: str, category: AudioCategory | None = None) -> Sequence[AudioFile]:
        ...

    async def find_by_file_name(self, owner_id: str, file_name: str) -> AudioFile | None:
        ...

    async def delete(self, audio_id: str) -> bool:
        ...
