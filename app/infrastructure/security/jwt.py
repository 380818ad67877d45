"""JWT signing and verification for access tokens.

HS256 (configurable) via python-jose. Secret and algorithm come from
app.core.config; TTL is supplied by the caller (TokenService).
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings
from app.shared.utils.datetime import utc_now


def create_access_token(data: dict[str, Any], expires_delta: timedelta) -> str:
    """Sign a JWT with the given claims and an exp of now + expires_delta.

    Args:
        data: Claims to encode (user_id, web_app_role, company_roles).
        expires_delta: Token lifetime.

    Returns:
        Encoded JWT string.

    Raises:
        JWTError: If encoding fails (e.g. unsupported algorithm).
    """
    settings = get_settings()
    to_encode = data.copy()
    to_encode["exp"] = utc_now() + expires_delta
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str, *, verify_exp: bool = True) -> dict[str, Any]:
    """Verify signature (and, by default, expiry) and return the claims.

    With verify_exp=False an expired but correctly signed token is accepted;
    the refresh endpoint uses this to identify the token owner.

    Raises:
        ValueError: If the token is malformed, badly signed, or expired.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"verify_exp": verify_exp, "require_exp": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    return payload
