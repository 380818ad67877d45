"""Users API: current user profile, search and profile image."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from app.api.v1.dependencies import (
    get_auth_payload,
    get_user_service,
    get_user_service_for_write,
)
from app.application.dtos.auth import AuthPayload
from app.application.dtos.task import FileUpload
from app.application.services.user_service import UserService
from app.core.limiter import limit_upload, limit_writes
from app.schemas.common import EmptyData, Envelope
from app.schemas.user import (
    ImageUrlResponse,
    UserResponse,
    UserSearchResponse,
    UserUpdate,
)

router = APIRouter()

CurrentPayload = Annotated[AuthPayload, Depends(get_auth_payload)]


@router.get("/search", response_model=Envelope[UserSearchResponse])
async def search_user(
    _payload: CurrentPayload,
    email: str = Query(..., min_length=1),
    user_service: UserService = Depends(get_user_service),
):
    """Find a user by exact email (e.g. to add them to a role)."""
    user = await user_service.search_by_email(email)
    return Envelope(
        data=UserSearchResponse.model_validate(user),
        message="User found.",
    )


@router.get("/me", response_model=Envelope[UserResponse])
async def get_me(
    payload: CurrentPayload,
    user_service: UserService = Depends(get_user_service),
):
    """Current user with memberships read from the database."""
    user = await user_service.get_me(payload.user_id)
    return Envelope(data=UserResponse.model_validate(user), message="User retrieved.")


@router.put("/me", response_model=Envelope[UserResponse])
@limit_writes
async def update_me(
    request: Request,
    body: UserUpdate,
    payload: CurrentPayload,
    user_service: UserService = Depends(get_user_service_for_write),
):
    """Update names, email and/or password. Email collision is 409."""
    user = await user_service.update_me(
        payload.user_id, body.model_dump(exclude_unset=True)
    )
    return Envelope(data=UserResponse.model_validate(user), message="User updated.")


@router.delete("/me", response_model=Envelope[EmptyData])
@limit_writes
async def delete_me(
    request: Request,
    payload: CurrentPayload,
    user_service: UserService = Depends(get_user_service_for_write),
):
    """Delete the current user and all of their memberships."""
    await user_service.delete_me(payload.user_id)
    return Envelope(data=EmptyData(), message="User deleted.")


@router.get("/me/image", response_model=Envelope[ImageUrlResponse])
async def get_my_image(
    payload: CurrentPayload,
    user_service: UserService = Depends(get_user_service),
):
    """Short-lived download URL of the profile image."""
    url = await user_service.get_image_url(payload.user_id)
    return Envelope(data=ImageUrlResponse(url=url), message="Image URL generated.")


@router.put("/me/image", response_model=Envelope[ImageUrlResponse])
@limit_upload
async def update_my_image(
    request: Request,
    payload: CurrentPayload,
    file: UploadFile = File(...),
    user_service: UserService = Depends(get_user_service_for_write),
):
    """Replace the profile image (JPEG or PNG only)."""
    upload = FileUpload(
        file_name=file.filename or "image",
        content_type=file.content_type or "",
        data=await file.read(),
    )
    url = await user_service.update_image(payload.user_id, upload)
    return Envelope(data=ImageUrlResponse(url=url), message="Image updated.")


@router.delete("/me/image", response_model=Envelope[EmptyData])
@limit_writes
async def delete_my_image(
    request: Request,
    payload: CurrentPayload,
    user_service: UserService = Depends(get_user_service_for_write),
):
    """Revert to the default image. 404 when the default is already in use."""
    await user_service.delete_image(payload.user_id)
    return Envelope(data=EmptyData(), message="Image deleted.")
