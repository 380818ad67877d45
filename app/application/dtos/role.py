"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RoleResult:
    """Role read-model with its supervision edges and occupant users.

    supervises / supervised_by are derived from the edge table; users from
    company_role memberships referencing the role.
    """

    id: str
    department_id: str | None
    user_id: str | None
    hierarchy_level: str
    job_title: str
    job_description: str | None
    permissions: list[str] = field(default_factory=list)
    supervises: tuple[str, ...] = ()
    supervised_by: tuple[str, ...] = ()
    users: tuple[str, ...] = ()
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class RoleCreate:
    """Input for HierarchyService.create_role."""

    hierarchy_level: str
    job_title: str
    job_description: str | None = None
    user_id: str | None = None
    permissions: list[str] = field(default_factory=list)
    supervises: list[str] = field(default_factory=list)
    supervised_by: list[str] = field(default_factory=list)
