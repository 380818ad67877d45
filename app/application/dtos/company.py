"""DTOs for company and department use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CompanyResult:
    """Company read-model. company_departments entries: {department_id, department_name}."""

    id: str
    name: str
    subscription_plan: str
    company_departments: list[dict[str, Any]] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CompanyCreationResult:
    """Result of company creation: the company, its default department and admin role.

    access_token reflects the creator's new membership.
    """

    company: CompanyResult
    department_id: str
    admin_role_id: str
    access_token: str


@dataclass(frozen=True)
class CompanyDeletionResult:
    """Counts of removed records plus the acting user's re-issued access token."""

    company_id: str
    departments_deleted: int
    roles_deleted: int
    tasks_deleted: int
    objectives_deleted: int
    memberships_removed: int
    access_token: str


@dataclass(frozen=True)
class DepartmentResult:
    """Department read-model. roles are the ids of roles homed in the department."""

    id: str
    company_id: str
    name: str
    roles: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None
