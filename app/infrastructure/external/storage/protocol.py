"""Object storage protocol (DIP). Implementations: LocalStorageService, S3StorageService."""

from typing import Protocol


class ObjectStorageProtocol(Protocol):
    """Protocol for object storage backends (local, S3-compatible)."""

    async def upload(self, data: bytes, key: str, content_type: str) -> None:
        """Store data under key, replacing any existing object."""
        ...

    async def generate_presigned_url(self, key: str, ttl_seconds: int) -> str:
        """Return a temporary download URL for key."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete the object. Returns True if deleted, False if not found."""
        ...
