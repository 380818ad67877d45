"""Download endpoint behind local-storage presigned URLs.

Only active with STORAGE_BACKEND=local; S3 URLs point at the bucket directly.
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.core.config import get_settings
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.external.storage.local_storage import LocalStorageService

router = APIRouter()


@router.get("/{token}", response_class=FileResponse)
async def download(token: str) -> FileResponse:
    """Serve the file a download token was issued for; 404 when expired or unknown."""
    settings = get_settings()
    if settings.storage_backend != "local":
        raise ResourceNotFoundException("File", error="Invalid download token.")
    path = LocalStorageService(settings.storage_root).resolve_download_token(token)
    if path is None:
        raise ResourceNotFoundException("File", error="Invalid download token.")
    return FileResponse(path, filename=path.name)
