"""Auth API: register, login, refresh tokens, logout.

The access token travels in the JSON body; the refresh token only in the
HTTP-only refresh cookie.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from app.api.v1.dependencies import get_auth_payload, get_auth_service, parse_bearer
from app.application.dtos.auth import AuthPayload
from app.application.services.auth_service import AuthService
from app.core.config import Settings, get_settings
from app.core.limiter import limit_auth
from app.domain.exceptions import BadRequestException
from app.schemas.auth import LoginRequest, RegisterRequest
from app.schemas.common import AccessTokenData, EmptyData, Envelope
from app.shared.utils.datetime import utc_now

router = APIRouter()


def _set_refresh_cookie(
    response: Response, settings: Settings, token: str, expires_at: datetime
) -> None:
    max_age = max(int((expires_at - utc_now()).total_seconds()), 0)
    response.set_cookie(
        key=settings.refresh_cookie_name,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="strict",
    )


def _clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.refresh_cookie_name,
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="strict",
    )


@router.post("/register", response_model=Envelope[EmptyData], status_code=201)
@limit_auth
async def register(
    request: Request,
    body: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user (public). Duplicate email is 400 "User already exists."."""
    await auth_service.register(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password=body.password,
    )
    return Envelope(data=EmptyData(), message="User registered successfully.")


@router.post("/login", response_model=Envelope[AccessTokenData])
@limit_auth
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Return an access token and set the refresh token cookie."""
    pair = await auth_service.login(body.email, body.password)
    _set_refresh_cookie(
        response, get_settings(), pair.refresh_token, pair.refresh_token_expires_at
    )
    return Envelope(
        data=AccessTokenData(access_token=pair.access_token),
        message="Login successful.",
    )


@router.post("/refreshtokens", response_model=Envelope[AccessTokenData])
@limit_auth
async def refresh_tokens(
    request: Request,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange the refresh cookie for a new access token.

    The Authorization header carries the (possibly expired) access token of
    the same user. On any failure the cookie is cleared and 403 returned.
    The refresh token is rotated when close to expiry.
    """
    settings = get_settings()
    try:
        access_token: str | None = parse_bearer(request.headers.get("Authorization"))
    except BadRequestException:
        access_token = None
    result = await auth_service.refresh_tokens(
        access_token, request.cookies.get(settings.refresh_cookie_name)
    )
    if result is None:
        rejected = JSONResponse(
            status_code=403,
            content={
                "status": "error",
                "message": "Forbidden access. Authorization failed.",
                "error": "Invalid refresh token.",
            },
        )
        _clear_refresh_cookie(rejected, settings)
        return rejected
    if result.refresh_token is not None:
        _set_refresh_cookie(
            response,
            settings,
            result.refresh_token.token,
            result.refresh_token.expires_at,
        )
    return Envelope(
        data=AccessTokenData(access_token=result.access_token),
        message="Tokens refreshed successfully.",
    )


@router.post("/logout", response_model=Envelope[EmptyData])
async def logout(
    response: Response,
    payload: Annotated[AuthPayload, Depends(get_auth_payload)],
    auth_service: AuthService = Depends(get_auth_service),
):
    """Invalidate the stored refresh token and clear the cookie."""
    await auth_service.logout(payload.user_id)
    _clear_refresh_cookie(response, get_settings())
    return Envelope(data=EmptyData(), message="Logged out successfully.")
