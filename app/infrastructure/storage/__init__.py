"""Blob store adapters."""

from app.core.config import StorageSettings

from .base import BlobStore, BlobStoreError
from .local import LocalBlobStore
from .s3 import S3BlobStore


def build_blob_store(settings: StorageSettings) -> BlobStore:
    if settings.provider == "s3":
        return S3BlobStore(settings)
    return LocalBlobStore(settings.local_root)


__all__ = ["BlobStore", "BlobStoreError", "LocalBlobStore", "S3BlobStore", "build_blob_store"]
