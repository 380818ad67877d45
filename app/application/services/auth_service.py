"""Auth application service: register, login, refresh and logout."""

from __future__ import annotations

import logging

from app.application.dtos.auth import RefreshResult, TokenPair
from app.application.dtos.user import UserResult
from app.application.interfaces.repositories import IUserRepository
from app.application.services.token_service import TokenService
from app.domain.exceptions import LoginFailedException
from app.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and the access/refresh token protocol."""

    def __init__(self, user_repo: IUserRepository, token_service: TokenService) -> None:
        self.user_repo = user_repo
        self.token_service = token_service

    async def register(
        self, first_name: str, last_name: str, email: str, password: str
    ) -> UserResult:
        """Create a user. Raises UserAlreadyExistsException on duplicate email."""
        user = await self.user_repo.create_user(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
        )
        logger.info("Registered user %s", user.id)
        return user

    async def login(self, email: str, password: str) -> TokenPair:
        """Verify credentials, issue a token pair and persist the refresh token."""
        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.warning("Login failed: unknown email")
            raise LoginFailedException("User does not exist.")
        if not await self.user_repo.check_password(user, password):
            logger.warning("Login failed: wrong password for user %s", user.id)
            raise LoginFailedException("Password is wrong.")
        payload = await self.token_service.build_payload(user.id)
        pair = self.token_service.issue_token_pair(payload)
        await self.token_service.persist_refresh_token(
            user.id, pair.refresh_token, pair.refresh_token_expires_at
        )
        return pair

    async def refresh_tokens(
        self, access_token: str | None, refresh_token: str | None
    ) -> RefreshResult | None:
        """Exchange a valid refresh token for a new access token.

        The (possibly expired) access token identifies the owner: its
        signature is verified, its expiry is not. Returns None when the
        request must be rejected; the caller clears the cookie.
        """
        if not access_token or not refresh_token:
            return None
        try:
            claims = verify_token(access_token, verify_exp=False)
        except ValueError:
            logger.warning("Refresh rejected: access token signature invalid")
            return None
        user_id = claims.get("user_id")
        if not user_id:
            return None
        if not await self.token_service.validate_refresh_token(user_id, refresh_token):
            logger.warning("Refresh rejected: refresh token invalid for user %s", user_id)
            return None

        payload = await self.token_service.build_payload(user_id)
        access = self.token_service.issue_access_token(payload)
        rotated = None
        if await self.token_service.needs_rotation(user_id):
            rotated = await self.token_service.rotate_refresh_token(user_id)
        return RefreshResult(access_token=access, refresh_token=rotated)

    async def logout(self, user_id: str) -> None:
        await self.token_service.invalidate_refresh_token(user_id)
        logger.info("User %s logged out", user_id)
