"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import logging
import os
import secrets
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import aiofiles
import aiofiles.os

from app.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageUploadError,
)
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Route that serves files for download tokens (see app.api.v1.endpoints.storage).
DOWNLOAD_PATH = "/api/v1/storage"


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Keys are resolved under storage_root. Writes go to a temp file and are
    renamed into place. Presigned URLs are backed by short-lived in-memory
    download tokens.
    """

    _download_tokens: dict[str, tuple[str, datetime]] = {}  # token -> (key, expires_at)

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            base_url: Public base URL prepended to download paths.
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else None
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def path_for(self, key: str) -> Path:
        """Resolve key under storage_root. Raises StoragePermissionError on traversal."""
        full_path = (self.storage_root / key).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(key) from e
        return full_path

    async def upload(self, data: bytes, key: str, content_type: str) -> None:
        """Write data atomically (temp file + rename), replacing an existing file."""
        target_path = self.path_for(key)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            raise StorageUploadError(key, str(e)) from e
        logger.debug("Stored %s (%s, %d bytes)", key, content_type, len(data))

    async def generate_presigned_url(self, key: str, ttl_seconds: int) -> str:
        """Return a token URL valid for ttl_seconds."""
        if not self.path_for(key).is_file():
            raise StorageNotFoundError(key)
        token = secrets.token_urlsafe(32)
        self._download_tokens[token] = (key, utc_now() + timedelta(seconds=ttl_seconds))
        self._cleanup_expired_tokens()
        path = f"{DOWNLOAD_PATH}/{token}"
        return f"{self.base_url}{path}" if self.base_url else path

    async def delete(self, key: str) -> bool:
        """Delete file and prune empty parent directories. Returns True if deleted."""
        file_path = self.path_for(key)
        if not file_path.exists():
            return False
        try:
            await aiofiles.os.remove(file_path)
        except OSError as e:
            raise StorageDeleteError(key, str(e)) from e
        parent = file_path.parent
        while parent != self.storage_root:
            try:
                parent.rmdir()
            except OSError:
                break
            parent = parent.parent
        return True

    def _cleanup_expired_tokens(self) -> None:
        now = utc_now()
        for token in [t for t, (_, exp) in self._download_tokens.items() if exp <= now]:
            del self._download_tokens[token]

    def resolve_download_token(self, token: str) -> Path | None:
        """Return the file path for a valid, unexpired token, else None."""
        entry = self._download_tokens.get(token)
        if entry is None:
            return None
        key, expires_at = entry
        if utc_now() > expires_at:
            del self._download_tokens[token]
            return None
        path = self.path_for(key)
        return path if path.is_file() else None
