"""Audio service: upload, listing, playback and deletion of owned audio files."""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass
from typing import Sequence

from fastapi import UploadFile

from app.core.config import StorageSettings
from app.core.ownership import ensure_access
from app.infrastructure.storage import BlobStore

from .exceptions import (
    AudioAccessDeniedError,
    AudioFileNotFoundError,
    AudioOwnerNotFoundError,
    InvalidAudioUploadError,
)
from .models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    AudioCategory,
    AudioFile,
    AudioMetadataInput,
    PlaybackUrl,
)
from .repository import AudioFileRepository

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class UploadPolicy:
    max_bytes: int
    allowed_content_types: frozenset[str]
    presign_expires_seconds: int

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "UploadPolicy":
        return cls(
            max_bytes=settings.max_upload_bytes,
            allowed_content_types=frozenset(t.lower() for t in settings.allowed_content_types),
            presign_expires_seconds=settings.presign_expires_seconds,
        )

    @property
    def max_megabytes(self) -> int:
        return self.max_bytes // (1024 * 1024)


@dataclass(slots=True)
class _ValidatedMetadata:
    title: str
    description: str | None
    category: AudioCategory


class AudioService:
    """Owns the audio asset lifecycle across the registry and the blob store."""

    def __init__(self, repository: AudioFileRepository, blob_store: BlobStore, policy: UploadPolicy) -> None:
        self._repository = repository
        self._blob_store = blob_store
        self._policy = policy

    async def upload(
        self,
        owner_id: str,
        upload: UploadFile | None,
        metadata: AudioMetadataInput,
    ) -> AudioFile:
        """Validate, store the blob, then record it.

        The record is only inserted once the blob write succeeded. A failed
        insert leaves the blob behind; it is logged and not cleaned up.
        """
        if upload is None or not upload.filename:
            raise InvalidAudioUploadError("No audio file provided", error="No audio file provided")

        content_type = (upload.content_type or "").split(";")[0].strip().lower()
        if content_type not in self._policy.allowed_content_types:
            raise InvalidAudioUploadError(
                f"Unsupported content type: {content_type or 'unknown'}",
                error="Invalid file type",
                details="Invalid file type. Only audio files are allowed.",
            )

        validated = self.validate_metadata(metadata)
        # a token can outlive its account; nothing may be stored for a deleted owner
        if not await self._repository.owner_exists(owner_id):
            raise AudioOwnerNotFoundError(owner_id)
        data = await self._read_capped(upload)

        file_name = _sanitize_filename(upload.filename)
        key = f"audio/{owner_id}/{uuid.uuid4()}-{file_name}"

        await self._blob_store.put(key, data, content_type)

        try:
            audio = await self._repository.create(
                owner_id=owner_id,
                title=validated.title,
                description=validated.description,
                category=validated.category,
                s3_key=key,
                s3_url=self._blob_store.locator(key),
                file_name=file_name,
                file_size=len(data),
                mime_type=content_type,
            )
        except Exception:
            logger.warning("Audio record insert failed; blob %s left orphaned", key)
            raise

        logger.info("Audio %s uploaded by %s (%d bytes)", audio.id, owner_id, audio.file_size)
        return audio

    @staticmethod
    def validate_metadata(metadata: AudioMetadataInput) -> _ValidatedMetadata:
        title = (metadata.title or "").strip()
        if not title or len(title) > TITLE_MAX_LENGTH:
            raise InvalidAudioUploadError(
                "Title is required and must be at most 200 characters",
                details=[{"field": "title", "msg": f"must be 1-{TITLE_MAX_LENGTH} characters"}],
            )

        description = (metadata.description or "").strip() or None
        if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
            raise InvalidAudioUploadError(
                "Description must be at most 1000 characters",
                details=[{"field": "description", "msg": f"must be at most {DESCRIPTION_MAX_LENGTH} characters"}],
            )

        category = parse_category(metadata.category)
        if category is None:
            raise InvalidAudioUploadError(
                "Title and category are required",
                details=[{"field": "category", "msg": "category is required"}],
            )
        return _ValidatedMetadata(title=title, description=description, category=category)

    async def list_audio_files(self, owner_id: str, category: str | None = None) -> Sequence[AudioFile]:
        parsed = parse_category(category, field="category filter") if category else None
        return await self._repository.list_by_owner(owner_id, parsed)

    async def find_by_file_name(self, caller_id: str, owner_id: str, file_name: str) -> AudioFile | None:
        """Advisory duplicate probe; ``None`` means no same-named upload exists."""
        ensure_access(caller_id, owner_id, AudioAccessDeniedError)
        return await self._repository.find_by_file_name(owner_id, file_name)

    async def get_owned(self, caller_id: str, audio_id: str) -> AudioFile:
        audio = await self._repository.get_by_id(audio_id)
        if audio is None:
            raise AudioFileNotFoundError(audio_id)
        ensure_access(caller_id, audio, AudioAccessDeniedError)
        return audio

    async def playback_url(self, caller_id: str, audio_id: str) -> PlaybackUrl:
        audio = await self.get_owned(caller_id, audio_id)
        expires_in = self._policy.presign_expires_seconds
        url = await self._blob_store.presign_download(audio.s3_key, expires_in)
        logger.info("Playback URL issued for audio %s (expires in %ds)", audio.id, expires_in)
        return PlaybackUrl(url=url, expires_in=expires_in)

    async def delete(self, caller_id: str, audio_id: str) -> None:
        """Remove the blob first, then the record.

        A blob failure aborts with the record intact. A record failure after
        the blob is gone leaves a dangling record; it is logged, not repaired.
        """
        audio = await self.get_owned(caller_id, audio_id)

        await self._blob_store.delete(audio.s3_key)

        try:
            deleted = await self._repository.delete(audio.id)
        except Exception:
            logger.warning("Audio record %s delete failed after blob %s was removed", audio.id, audio.s3_key)
            raise
        if not deleted:
            # a concurrent delete removed the record between lookup and delete
            raise AudioFileNotFoundError(audio_id)
        logger.info("Audio %s deleted by %s", audio.id, caller_id)

    async def _read_capped(self, upload: UploadFile) -> bytes:
        if upload.size is not None and upload.size > self._policy.max_bytes:
            raise self._too_large()

        chunks: list[bytes] = []
        total = 0
        try:
            while True:
                chunk = await upload.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                total += len(chunk)
                if total > self._policy.max_bytes:
                    raise self._too_large()
                chunks.append(chunk)
        finally:
            await upload.close()

        if total == 0:
            raise InvalidAudioUploadError("Uploaded audio file is empty", error="No audio file provided")
        return b"".join(chunks)

    def _too_large(self) -> InvalidAudioUploadError:
        return InvalidAudioUploadError(
            "File too large",
            error="File too large",
            details=f"Maximum file size is {self._policy.max_megabytes}MB",
        )


def parse_category(value: str | None, *, field: str = "category") -> AudioCategory | None:
    if value is None or value == "":
        return None
    try:
        return AudioCategory(value)
    except ValueError as exc:
        raise InvalidAudioUploadError(
            f"Invalid {field}",
            details=[{"field": "category", "msg": f"must be one of: {', '.join(AudioCategory.values())}"}],
        ) from exc


def _sanitize_filename(filename: str | None) -> str:
    name = os.path.basename((filename or "").replace("\\", "/"))
    # strip dangerous characters
    name = name.replace("\0", "").strip()
    return name or "audio"
