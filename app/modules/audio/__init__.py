"""Audio domain services and models."""

from .models import AudioCategory, AudioFile, AudioMetadataInput, PlaybackUrl
from .service import AudioService, UploadPolicy, parse_category
from .exceptions import (
    AudioAccessDeniedError,
    AudioError,
    AudioFileNotFoundError,
    AudioOwnerNotFoundError,
    InvalidAudioUploadError,
)

__all__ = [
    "AudioCategory",
    "AudioFile",
    "AudioMetadataInput",
    "PlaybackUrl",
    "AudioService",
    "UploadPolicy",
    "parse_category",
    "AudioAccessDeniedError",
    "AudioError",
    "AudioFileNotFoundError",
    "AudioOwnerNotFoundError",
    "InvalidAudioUploadError",
]
