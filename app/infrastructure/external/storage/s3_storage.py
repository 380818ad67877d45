"""S3-compatible object storage (AWS S3, MinIO, etc.) with presigned URLs."""

from __future__ import annotations

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
    StorageUploadError,
    StorageUrlError,
)

logger = logging.getLogger(__name__)

_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


def _is_missing(e: ClientError) -> bool:
    return e.response.get("Error", {}).get("Code") in _MISSING_CODES


class S3StorageService:
    """S3-compatible storage with server-side encryption and presigned URLs.

    Uses boto3 (sync) via asyncio.to_thread for the async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
        """
        self.bucket = bucket
        self.region = region
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    async def upload(self, data: bytes, key: str, content_type: str) -> None:
        """Put the object (overwrites an existing key)."""

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ServerSideEncryption="AES256",
            )

        try:
            await asyncio.to_thread(_put)
        except (BotoCoreError, ClientError) as e:
            raise StorageUploadError(key, str(e)) from e
        logger.debug("Uploaded s3://%s/%s (%d bytes)", self.bucket, key, len(data))

    async def generate_presigned_url(self, key: str, ttl_seconds: int) -> str:
        """Return a presigned GET URL; StorageNotFoundError if the object is missing."""

        def _presign() -> str:
            try:
                self._client.head_object(Bucket=self.bucket, Key=key)
            except ClientError as e:
                if _is_missing(e):
                    raise StorageNotFoundError(key) from e
                raise
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=ttl_seconds,
            )

        try:
            return await asyncio.to_thread(_presign)
        except StorageNotFoundError:
            raise
        except (BotoCoreError, ClientError) as e:
            raise StorageUrlError(key, str(e)) from e

    async def delete(self, key: str) -> bool:
        """Delete object. Returns True if deleted, False if it did not exist."""

        def _delete() -> bool:
            try:
                self._client.head_object(Bucket=self.bucket, Key=key)
            except ClientError as e:
                if _is_missing(e):
                    return False
                raise
            self._client.delete_object(Bucket=self.bucket, Key=key)
            return True

        try:
            return await asyncio.to_thread(_delete)
        except (BotoCoreError, ClientError) as e:
            raise StorageDeleteError(key, str(e)) from e
