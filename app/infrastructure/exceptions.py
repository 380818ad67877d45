"""Infrastructure exceptions for object storage.

Storage errors extend CascadeException so presentation can map them
to the error envelope consistently.
"""

from app.domain.exceptions import CascadeException


class StorageException(CascadeException):
    """Base exception for storage operations."""


class StorageNotFoundError(StorageException):
    """Object not found in storage."""

    def __init__(self, key: str) -> None:
        super().__init__(
            "File not found.",
            "STORAGE_NOT_FOUND",
            {"key": key},
            error=f"No stored object for key: {key}",
        )


class StorageUploadError(StorageException):
    """Object upload failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            "File upload failed.",
            "STORAGE_UPLOAD_ERROR",
            {"key": key},
            error=reason,
        )


class StorageUrlError(StorageException):
    """Presigned URL generation failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            "Could not generate a download URL.",
            "STORAGE_URL_ERROR",
            {"key": key},
            error=reason,
        )


class StorageDeleteError(StorageException):
    """Object deletion failed."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            "File deletion failed.",
            "STORAGE_DELETE_ERROR",
            {"key": key},
            error=reason,
        )


class StoragePermissionError(StorageException):
    """Key resolves outside the storage root."""

    def __init__(self, key: str) -> None:
        super().__init__(
            "Invalid storage key.",
            "STORAGE_PERMISSION_ERROR",
            {"key": key},
            error=f"Key escapes storage root: {key}",
        )
