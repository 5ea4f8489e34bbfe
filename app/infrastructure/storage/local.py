"""Filesystem blob store for local development and tests."""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from urllib.parse import quote

from .base import BlobStoreError


class LocalBlobStore:
    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()

    def _path(self, key: str) -> Path:
        path = (self.root / key.strip("/")).resolve()
        if self.root not in path.parents:
            raise BlobStoreError(f"Key escapes storage root: {key}")
        return path

    def exists(self, key: str) -> bool:
        return self._path(key).is_file()

    def locator(self, key: str) -> str:
        return self._path(key).as_uri()

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        path = self._path(key)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as exc:
            raise BlobStoreError(f"Failed to store object {key}") from exc

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise BlobStoreError(f"Failed to delete object {key}") from exc

    async def presign_download(self, key: str, expires_seconds: int) -> str:
        # no signing authority locally; the expiry is advisory
        expires_at = int(time.time()) + expires_seconds
        return f"{self._path(key).as_uri()}?expires={quote(str(expires_at))}"


__all__ = ["LocalBlobStore"]
