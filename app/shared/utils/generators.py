"""ID and token generators (CUID primary keys, opaque refresh tokens)."""

import secrets

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# 32 random bytes = 256 bits of entropy.
REFRESH_TOKEN_BYTES = 32


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_refresh_token() -> str:
    """Return a new opaque refresh token (hex-encoded, 64 characters)."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)
