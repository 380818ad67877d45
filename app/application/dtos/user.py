"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CompanyRoleResult:
    """One membership of a user: company, optional department, role."""

    company_id: str
    department_id: str | None
    role_id: str

    def to_claim(self) -> dict[str, Any]:
        """Return the token-claim form of this membership."""
        return {
            "company_id": self.company_id,
            "department_id": self.department_id,
            "role_id": self.role_id,
        }


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_result, create_user, etc.). No password or refresh token."""

    id: str
    first_name: str
    last_name: str
    email: str
    web_app_role: str
    image: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    company_roles: tuple[CompanyRoleResult, ...] = ()


@dataclass(frozen=True)
class StoredRefreshToken:
    """Refresh token value and expiry as stored on the user row."""

    token: str | None
    expires_at: datetime | None
