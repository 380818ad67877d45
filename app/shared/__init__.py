"""Shared utilities: datetime helpers and identifier generators.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    ensure_utc,
    generate_cuid,
    generate_refresh_token,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "generate_refresh_token",
    "utc_now",
    "ensure_utc",
]
