"""S3 implementation of the blob store."""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import StorageSettings

from .base import BlobStoreError

logger = logging.getLogger(__name__)


class S3BlobStore:
    def __init__(self, settings: StorageSettings, client=None) -> None:
        self.bucket = settings.s3_bucket
        self.region = settings.s3_region
        self.endpoint_url = settings.s3_endpoint_url
        if client is None:
            session = boto3.session.Session(
                aws_access_key_id=settings.s3_access_key,
                aws_secret_access_key=settings.s3_secret_key,
                region_name=settings.s3_region,
            )
            client = session.client(
                "s3",
                endpoint_url=settings.s3_endpoint_url,
                config=Config(signature_version="s3v4"),
            )
        self.s3 = client

    def locator(self, key: str) -> str:
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{quote(key)}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quote(key)}"

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        try:
            await asyncio.to_thread(
                self.s3.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("S3 put_object failed for %s: %s", key, exc)
            raise BlobStoreError(f"Failed to store object {key}") from exc

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self.s3.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.error("S3 delete_object failed for %s: %s", key, exc)
            raise BlobStoreError(f"Failed to delete object {key}") from exc

    async def presign_download(self, key: str, expires_seconds: int) -> str:
        try:
            return await asyncio.to_thread(
                self.s3.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_seconds,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("S3 presign failed for %s: %s", key, exc)
            raise BlobStoreError(f"Failed to sign URL for {key}") from exc


__all__ = ["S3BlobStore"]
