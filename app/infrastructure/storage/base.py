"""Blob store port used by the audio service."""

from __future__ import annotations

from typing import Protocol

from app.core.errors import StorageError


class BlobStoreError(StorageError):
    """Raised when the object store rejects or fails an operation."""


class BlobStore(Protocol):
    """Opaque key/value store for binary objects with signed read URLs."""

    def locator(self, key: str) -> str:
        """Direct (unsigned) URL of the object; informational only."""
        ...

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...

    async def presign_download(self, key: str, expires_seconds: int) -> str:
        ...


__all__ = ["BlobStore", "BlobStoreError"]
