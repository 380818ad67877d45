"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.auth import AuthPayload


class IObjectStorage(Protocol):
    """Protocol for object storage used by task files and profile images."""

    async def upload(self, data: bytes, key: str, content_type: str) -> None:
        """Store data under key."""
        ...

    async def generate_presigned_url(self, key: str, ttl_seconds: int) -> str:
        """Return a temporary download URL."""
        ...

    async def delete(self, key: str) -> bool:
        """Delete the object; False when it did not exist."""
        ...


class IAccessTokenIssuer(Protocol):
    """Protocol for re-issuing access tokens after membership changes."""

    async def build_payload(self, user_id: str) -> AuthPayload:
        """Derive the current authorization snapshot from storage."""
        ...

    def issue_access_token(self, payload: AuthPayload) -> str:
        """Sign an access token for the snapshot."""
        ...
