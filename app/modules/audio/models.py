"""Domain models for audio files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class AudioCategory(str, Enum):
    MUSIC = "Music"
    PODCAST = "Podcast"
    AUDIOBOOK = "Audiobook"
    SOUND_EFFECT = "Sound Effect"
    VOICE_RECORDING = "Voice Recording"
    OTHER = "Other"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass(slots=True)
class AudioFile:
    id: str
    owner_id: str
    title: str
    description: Optional[str]
    category: AudioCategory
    s3_key: str
    s3_url: Optional[str]
    file_name: str
    file_size: int
    mime_type: str
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class AudioMetadataInput:
    title: Optional[str]
    category: Optional[str]
    description: Optional[str] = None


@dataclass(slots=True)
class PlaybackUrl:
    url: str
    expires_in: int
