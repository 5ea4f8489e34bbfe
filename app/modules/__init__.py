"""Domain modules."""

from . import accounts, audio

__all__ = [
    "accounts",
    "audio",
]
