"""Storage: local filesystem and S3-compatible backends.

Factory creates the backend from app.core.config. Implementations are loaded
lazily inside StorageFactory.create_storage_service() so the local default
does not import boto3.

Implementations follow ObjectStorageProtocol (upload, generate_presigned_url,
delete).
"""

from app.infrastructure.external.storage.factory import StorageFactory
from app.infrastructure.external.storage.protocol import ObjectStorageProtocol

__all__ = [
    "ObjectStorageProtocol",
    "StorageFactory",
]
