"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .audio_file_repository import SqlAudioFileRepository

__all__ = [
    "SqlAccountRepository",
    "SqlAudioFileRepository",
]
