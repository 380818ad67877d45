"""DTOs for token issuance and the authorization snapshot (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.application.dtos.user import CompanyRoleResult

# Claims every access token must carry.
REQUIRED_CLAIMS = ("user_id", "web_app_role", "company_roles")


@dataclass(frozen=True)
class AuthPayload:
    """Authorization snapshot embedded in an access token.

    A cached projection of the user's memberships at issuance time; write
    paths re-read roles from the database rather than trusting it.
    """

    user_id: str
    web_app_role: str
    company_roles: tuple[CompanyRoleResult, ...] = ()

    def to_claims(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "web_app_role": self.web_app_role,
            "company_roles": [m.to_claim() for m in self.company_roles],
        }

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "AuthPayload":
        """Build from decoded claims. Caller checks REQUIRED_CLAIMS first."""
        return cls(
            user_id=claims["user_id"],
            web_app_role=claims["web_app_role"],
            company_roles=tuple(
                CompanyRoleResult(
                    company_id=entry.get("company_id"),
                    department_id=entry.get("department_id"),
                    role_id=entry.get("role_id"),
                )
                for entry in claims["company_roles"] or []
                if isinstance(entry, dict)
            ),
        )

    def memberships_in(self, company_id: str) -> list[CompanyRoleResult]:
        return [m for m in self.company_roles if m.company_id == company_id]

    def has_role(self, role_id: str) -> bool:
        return any(m.role_id == role_id for m in self.company_roles)


@dataclass(frozen=True)
class RefreshToken:
    """Opaque refresh token and its absolute expiry."""

    token: str
    expires_at: datetime


@dataclass(frozen=True)
class TokenPair:
    """Access token plus refresh token (and its expiry)."""

    access_token: str
    refresh_token: str
    refresh_token_expires_at: datetime


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of POST /auth/refreshtokens.

    refresh_token is set only when the refresh token was rotated.
    """

    access_token: str
    refresh_token: RefreshToken | None = None
