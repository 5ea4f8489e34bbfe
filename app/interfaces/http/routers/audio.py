"""Audio library endpoints. Every route requires a bearer token."""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import Identity, get_current_identity
from app.interfaces.http.deps import get_audio_service, get_db_session
from app.modules.audio import AudioFile, AudioMetadataInput, AudioService
from app.schemas import AudioFileCheckResponse, AudioFileResponse, MessageResponse, PlaybackUrlResponse

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_identity)])

DUPLICATE_FOUND_MESSAGE = "This audio file was uploaded previously. Please proceed if you want to re-upload it."
DUPLICATE_MISSING_MESSAGE = "Audio file not found, proceed with upload"


def _to_response(audio: AudioFile) -> AudioFileResponse:
    return AudioFileResponse(
        id=audio.id,
        title=audio.title,
        description=audio.description,
        category=audio.category.value,
        s3_key=audio.s3_key,
        s3_url=audio.s3_url,
        file_name=audio.file_name,
        file_size=audio.file_size,
        mime_type=audio.mime_type,
        user_id=audio.owner_id,
        created_at=audio.created_at,
        updated_at=audio.updated_at,
    )


@router.post(
    "/upload",
    response_model=AudioFileResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an audio file with metadata",
)
async def upload_audio(
    audio: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    identity: Identity = Depends(get_current_identity),
    audio_service: AudioService = Depends(get_audio_service),
    db: AsyncSession = Depends(get_db_session),
) -> AudioFileResponse:
    record = await audio_service.upload(
        identity.account_id,
        audio,
        AudioMetadataInput(title=title, description=description, category=category),
    )
    try:
        await db.commit()
    except Exception:
        logger.warning("Audio record commit failed; blob %s left orphaned", record.s3_key)
        raise
    return _to_response(record)


@router.get("", response_model=list[AudioFileResponse], summary="List own audio files, newest first")
async def list_audio_files(
    category: Optional[str] = Query(None),
    identity: Identity = Depends(get_current_identity),
    audio_service: AudioService = Depends(get_audio_service),
) -> list[AudioFileResponse]:
    records = await audio_service.list_audio_files(identity.account_id, category)
    return [_to_response(record) for record in records]


@router.get(
    "/check/{file_name}/{user_id}",
    response_model=AudioFileCheckResponse,
    summary="Check whether a file with this name was uploaded before",
)
async def check_audio_file_name(
    file_name: str = Path(..., min_length=1),
    user_id: str = Path(..., min_length=1),
    identity: Identity = Depends(get_current_identity),
    audio_service: AudioService = Depends(get_audio_service),
) -> AudioFileCheckResponse:
    record = await audio_service.find_by_file_name(identity.account_id, user_id, file_name)
    if record is None:
        return AudioFileCheckResponse(message=DUPLICATE_MISSING_MESSAGE)
    return AudioFileCheckResponse(message=DUPLICATE_FOUND_MESSAGE, audio_file=_to_response(record))


@router.get("/{audio_id}", response_model=AudioFileResponse, summary="Audio file metadata")
async def get_audio_file(
    audio_id: uuid.UUID,
    identity: Identity = Depends(get_current_identity),
    audio_service: AudioService = Depends(get_audio_service),
) -> AudioFileResponse:
    record = await audio_service.get_owned(identity.account_id, str(audio_id))
    return _to_response(record)


@router.get("/{audio_id}/play", response_model=PlaybackUrlResponse, summary="Signed, time-limited playback URL")
async def get_playback_url(
    audio_id: uuid.UUID,
    identity: Identity = Depends(get_current_identity),
    audio_service: AudioService = Depends(get_audio_service),
) -> PlaybackUrlResponse:
    playback = await audio_service.playback_url(identity.account_id, str(audio_id))
    return PlaybackUrlResponse.model_validate(playback)


@router.delete("/{audio_id}", response_model=MessageResponse, summary="Delete an audio file and its blob")
async def delete_audio_file(
    audio_id: uuid.UUID,
    identity: Identity = Depends(get_current_identity),
    audio_service: AudioService = Depends(get_audio_service),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await audio_service.delete(identity.account_id, str(audio_id))
    await db.commit()
    return MessageResponse(message="Audio file deleted successfully")
