"""User application service: current user profile, search, deletion and profile image."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from app.application.dtos.task import FileUpload
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import (
    ICompanyRoleRepository,
    IUserRepository,
)
from app.application.interfaces.services import IObjectStorage
from app.core.constants import DEFAULT_USER_IMAGE
from app.domain.exceptions import (
    BadRequestException,
    PersistenceException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import ImageContentType, StorageKey
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class UserService:
    """Operations on the authenticated user's own account."""

    def __init__(
        self,
        user_repo: IUserRepository,
        company_role_repo: ICompanyRoleRepository,
        storage: IObjectStorage | None = None,
        presigned_url_ttl_seconds: int = 60,
    ) -> None:
        self._user_repo = user_repo
        self._company_role_repo = company_role_repo
        self._storage = storage
        self._ttl = presigned_url_ttl_seconds

    def _require_storage(self) -> IObjectStorage:
        if self._storage is None:
            raise RuntimeError("UserService was built without object storage")
        return self._storage

    async def get_me(self, user_id: str) -> UserResult:
        """Return the user with their current memberships."""
        user = await self._user_repo.get_result(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id, error="User ID is not valid.")
        memberships = await self._company_role_repo.list_for_user(user_id)
        return dataclasses.replace(user, company_roles=tuple(memberships))

    async def search_by_email(self, email: str) -> UserResult:
        user = await self._user_repo.get_result_by_email(email)
        if user is None:
            raise ResourceNotFoundException("User", error="No user with this email.")
        return user

    async def update_me(self, user_id: str, changes: dict[str, Any]) -> UserResult:
        """Update names, email and/or password. Raises DuplicateEmailException on email collision."""
        if not any(v is not None for v in changes.values()):
            raise ValidationException("At least one field is required.")
        updated = await self._user_repo.update_profile(user_id, changes)
        if updated is None:
            raise ResourceNotFoundException(
                "User", user_id, error="User was not found and hence cannot update."
            )
        return updated

    async def delete_me(self, user_id: str) -> None:
        """Delete the user and all of their memberships."""
        removed = await self._company_role_repo.remove_for_user(user_id)
        if not await self._user_repo.delete_user(user_id):
            raise PersistenceException("Not able to delete the user.")
        logger.info("Deleted user %s (%d memberships)", user_id, removed)

    async def _user_or_404(self, user_id: str) -> UserResult:
        user = await self._user_repo.get_result(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id, error="Invalid user ID.")
        return user

    async def get_image_url(self, user_id: str) -> str:
        user = await self._user_or_404(user_id)
        return await self._require_storage().generate_presigned_url(user.image, self._ttl)

    async def update_image(self, user_id: str, upload: FileUpload) -> str:
        """Store a new JPEG/PNG profile image, drop the old one, return its URL."""
        try:
            ImageContentType(upload.content_type)
        except ValueError:
            raise BadRequestException(
                error="Unsupported file type.",
                message="Invalid file type. Please upload an image file.",
            ) from None
        user = await self._user_or_404(user_id)
        stamp = int(utc_now().timestamp() * 1000)
        try:
            key = StorageKey(user_id, f"{stamp}_{upload.file_name}").value
        except ValueError as e:
            raise ValidationException(str(e), "file") from e

        storage = self._require_storage()
        await storage.upload(upload.data, key, upload.content_type)
        if user.image and user.image != DEFAULT_USER_IMAGE:
            await storage.delete(user.image)
        await self._user_repo.set_image(user_id, key)
        logger.info("Updated profile image of user %s", user_id)
        return await storage.generate_presigned_url(key, self._ttl)

    async def delete_image(self, user_id: str) -> str:
        """Remove the custom image and revert to the default. Returns the default key."""
        user = await self._user_or_404(user_id)
        if not user.image or user.image == DEFAULT_USER_IMAGE:
            raise ResourceNotFoundException(
                "Image",
                error="Invalid user image to delete.",
                message="Image not found.",
            )
        await self._require_storage().delete(user.image)
        await self._user_repo.set_image(user_id, DEFAULT_USER_IMAGE)
        return DEFAULT_USER_IMAGE
