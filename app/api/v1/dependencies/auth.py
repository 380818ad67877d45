"""Auth dependencies: bearer parsing, token verification, token services."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.dtos.auth import REQUIRED_CLAIMS, AuthPayload
from app.application.services.auth_service import AuthService
from app.application.services.token_service import TokenService
from app.core.config import get_settings
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BadRequestException,
)
from app.infrastructure.persistence.repositories import (
    CompanyRoleRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import verify_token

from . import db as db_deps

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)

MISSING_HEADER = "The authorization header is missing."
NOT_BEARER = "The authorization is not a Bearer type or token is missing."
MISSING_CLAIMS = "Invalid token. Missing values from the token payload."


def parse_bearer(authorization: str | None) -> str:
    """Return the token of an 'Authorization: Bearer <token>' header value.

    Raises BadRequestException (400) when the header is absent or is not
    exactly two space-separated parts with the Bearer scheme.
    """
    if not authorization:
        raise BadRequestException(error=MISSING_HEADER)
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise BadRequestException(error=NOT_BEARER)
    return parts[1]


async def get_bearer_token(
    request: Request,
    _credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_http_bearer)
    ],
) -> str:
    """Bearer token of the request; 400 when missing or malformed.

    The raw header is parsed so a non-Bearer scheme is told apart from a
    missing header; HTTPBearer is kept for the OpenAPI security scheme.
    """
    return parse_bearer(request.headers.get("Authorization"))


def payload_from_token(token: str, *, verify_exp: bool = True) -> AuthPayload:
    """Verify token and return its authorization snapshot.

    401 on any verification failure, 403 when a required claim is missing.
    """
    try:
        claims = verify_token(token, verify_exp=verify_exp)
    except ValueError as e:
        logger.warning("Token verification failed: %s", e)
        raise AuthenticationException(error=str(e)) from e
    if any(claims.get(name) is None for name in REQUIRED_CLAIMS):
        raise AuthorizationException(error=MISSING_CLAIMS)
    return AuthPayload.from_claims(claims)


async def get_auth_payload(
    token: Annotated[str, Depends(get_bearer_token)],
) -> AuthPayload:
    """Authorization snapshot of the caller from a valid access token."""
    return payload_from_token(token)


async def get_token_service(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo)
    ],
) -> TokenService:
    """Token service on the read session (payload building only)."""
    return TokenService(user_repo, company_role_repo, get_settings())


async def get_token_service_for_write(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo_for_write)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo_for_write)
    ],
) -> TokenService:
    """Token service on the transactional session (persists refresh tokens)."""
    return TokenService(user_repo, company_role_repo, get_settings())


async def get_auth_service(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo_for_write)],
    token_service: Annotated[TokenService, Depends(get_token_service_for_write)],
) -> AuthService:
    return AuthService(user_repo, token_service)
