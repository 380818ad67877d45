"""User repository with password and refresh-token helpers. Interface methods return application DTOs."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import StoredRefreshToken, UserResult
from app.domain.exceptions import DuplicateEmailException, UserAlreadyExistsException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import get_password_hash, verify_password
from app.shared.utils.datetime import ensure_utc

# Fields a user may change on their own profile.
_PROFILE_FIELDS = ("first_name", "last_name", "email")


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password, no refresh token)."""
    return UserResult(
        id=u.id,
        first_name=u.first_name,
        last_name=u.last_name,
        email=u.email,
        web_app_role=u.web_app_role,
        image=u.image,
        created_at=ensure_utc(u.created_at),
        updated_at=ensure_utc(u.updated_at),
    )


class UserRepository(BaseRepository[User]):
    """User repository. Registration, credential checks, refresh token storage, profile."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_result(self, user_id: str) -> UserResult | None:
        user = await self.get_by_id(user_id)
        return _user_to_result(user) if user else None

    async def get_result_by_email(self, email: str) -> UserResult | None:
        user = await self.get_by_email(email)
        return _user_to_result(user) if user else None

    async def exists(self, user_id: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none() is not None

    async def check_password(self, user: User, password: str) -> bool:
        """Verify password against the stored bcrypt hash (in a worker thread)."""
        return await asyncio.to_thread(verify_password, password, user.hashed_password)

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> UserResult:
        """Create user; raise UserAlreadyExistsException when the email is taken."""
        if await self.get_by_email(email) is not None:
            raise UserAlreadyExistsException()
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            hashed_password=hashed,
        )
        try:
            created = await self.create(user)
        except IntegrityError:
            raise UserAlreadyExistsException() from None
        return _user_to_result(created)

    async def update_profile(self, user_id: str, changes: dict[str, Any]) -> UserResult | None:
        """Apply profile changes (first/last name, email, password). None if user missing."""
        user = await self.get_by_id(user_id)
        if not user:
            return None
        for key in _PROFILE_FIELDS:
            if changes.get(key) is not None:
                setattr(user, key, changes[key])
        if changes.get("password"):
            user.hashed_password = await asyncio.to_thread(
                get_password_hash, changes["password"]
            )
        try:
            updated = await self.update(user)
        except IntegrityError:
            raise DuplicateEmailException() from None
        return _user_to_result(updated)

    async def set_image(self, user_id: str, image: str) -> int:
        result = await self.db.execute(
            update(User).where(User.id == user_id).values(image=image)
        )
        return result.rowcount or 0

    async def get_refresh_token(self, user_id: str) -> StoredRefreshToken | None:
        """Return the stored refresh token and expiry, or None if the user does not exist."""
        result = await self.db.execute(
            select(User.refresh_token, User.refresh_token_expires_at).where(
                User.id == user_id
            )
        )
        row = result.one_or_none()
        if row is None:
            return None
        return StoredRefreshToken(token=row[0], expires_at=ensure_utc(row[1]))

    async def set_refresh_token(
        self, user_id: str, token: str | None, expires_at: datetime | None
    ) -> int:
        """Write (or clear, with None) the refresh token fields. Returns matched rows."""
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=token, refresh_token_expires_at=expires_at)
        )
        return result.rowcount or 0

    async def delete_user(self, user_id: str) -> bool:
        user = await self.get_by_id(user_id)
        if not user:
            return False
        await self.delete(user)
        return True
