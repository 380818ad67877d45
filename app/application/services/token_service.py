"""Token service: access/refresh token issuance, refresh token storage and validation."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from jose import JWTError

from app.application.dtos.auth import AuthPayload, RefreshToken, TokenPair
from app.application.interfaces.repositories import (
    ICompanyRoleRepository,
    IUserRepository,
)
from app.domain.exceptions import (
    ConfigurationException,
    InvalidArgumentException,
    PersistenceException,
    ResourceNotFoundException,
    SigningException,
)
from app.infrastructure.security.jwt import create_access_token
from app.shared.utils.datetime import ensure_utc, utc_in, utc_now
from app.shared.utils.generators import generate_refresh_token

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


class TokenService:
    """Issues access tokens carrying the membership snapshot, and manages the
    single active refresh token stored on the user row.

    A user has at most one refresh token; persisting a new one overwrites the
    previous value.
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        company_role_repo: ICompanyRoleRepository,
        settings: Settings,
    ) -> None:
        self.user_repo = user_repo
        self.company_role_repo = company_role_repo
        self.settings = settings

    def issue_token_pair(self, payload: AuthPayload | None) -> TokenPair:
        """Issue an access token for payload and a fresh refresh token (not persisted)."""
        if not payload:
            raise InvalidArgumentException()
        access_token = self.issue_access_token(payload)
        refresh = self.issue_refresh_token()
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh.token,
            refresh_token_expires_at=refresh.expires_at,
        )

    def issue_access_token(self, payload: AuthPayload | None) -> str:
        """Sign payload into a JWT with exp = now + ACCESS_TOKEN_EXPIRE_SECONDS.

        The payload shape is not checked here; verification on use rejects
        tokens missing required claims.
        """
        if not payload:
            raise InvalidArgumentException()
        ttl = self.settings.access_token_expire_seconds
        if not ttl:
            raise ConfigurationException("ACCESS_TOKEN_EXPIRE_SECONDS")
        try:
            return create_access_token(payload.to_claims(), timedelta(seconds=ttl))
        except (JWTError, TypeError, ValueError) as e:
            raise SigningException(str(e)) from e

    def issue_refresh_token(self) -> RefreshToken:
        """Return a random 256-bit hex token and its expiry."""
        ttl = self.settings.refresh_token_expire_seconds
        if not ttl:
            raise ConfigurationException("REFRESH_TOKEN_EXPIRE_SECONDS")
        return RefreshToken(token=generate_refresh_token(), expires_at=utc_in(ttl))

    async def persist_refresh_token(
        self, user_id: str, token: str, expires_at: datetime
    ) -> None:
        if not user_id or not token or not expires_at:
            raise PersistenceException("One of the arguments is missing.")
        matched = await self.user_repo.set_refresh_token(user_id, token, expires_at)
        if matched == 0:
            raise PersistenceException("Saving refresh token has failed.")

    async def validate_refresh_token(self, user_id: str, presented: str) -> bool:
        """True when presented equals the stored token and it has not expired."""
        if not user_id or not presented:
            raise InvalidArgumentException()
        stored = await self.user_repo.get_refresh_token(user_id)
        if stored is None or stored.token is None or stored.token != presented:
            return False
        expires_at = ensure_utc(stored.expires_at)
        if expires_at is None or utc_now() > expires_at:
            return False
        return True

    async def invalidate_refresh_token(self, user_id: str) -> None:
        if not user_id:
            raise InvalidArgumentException()
        matched = await self.user_repo.set_refresh_token(user_id, None, None)
        if matched == 0:
            raise PersistenceException("Invalidating the old refresh token has failed.")

    async def build_payload(self, user_id: str) -> AuthPayload:
        """Current authorization snapshot for user_id, read from the database."""
        user = await self.user_repo.get_result(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        memberships = await self.company_role_repo.list_for_user(user_id)
        return AuthPayload(
            user_id=user.id,
            web_app_role=user.web_app_role,
            company_roles=tuple(memberships),
        )

    async def needs_rotation(self, user_id: str) -> bool:
        """True when the stored refresh token has less than the rotation buffer left."""
        stored = await self.user_repo.get_refresh_token(user_id)
        expires_at = ensure_utc(stored.expires_at) if stored else None
        if expires_at is None:
            return True
        remaining = (expires_at - utc_now()).total_seconds()
        return remaining < self.settings.refresh_token_rotation_buffer_seconds

    async def rotate_refresh_token(self, user_id: str) -> RefreshToken:
        """Issue and persist a new refresh token, replacing the stored one."""
        refresh = self.issue_refresh_token()
        await self.persist_refresh_token(user_id, refresh.token, refresh.expires_at)
        logger.info("Rotated refresh token for user %s", user_id)
        return refresh
