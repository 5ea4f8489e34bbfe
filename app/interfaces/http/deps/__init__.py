"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .account import get_account_repository, get_account_service
from .audio import get_audio_repository, get_audio_service

__all__ = [
    "get_db_session",
    "get_account_repository",
    "get_account_service",
    "get_audio_repository",
    "get_audio_service",
]
