"""Domain value objects and shared value types."""

from app.domain.value_objects.core import IdListDiff, ImageContentType, StorageKey

__all__ = [
    "IdListDiff",
    "ImageContentType",
    "StorageKey",
]
