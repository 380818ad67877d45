"""Company and department API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import SubscriptionPlan


class CompanyCreateRequest(BaseModel):
    """Request body for POST /companies."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=255)
    subscription_plan: SubscriptionPlan | None = None


class CompanyUpdate(BaseModel):
    """Request body for PUT /companies/{company_id} (partial)."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(default=None, min_length=1, max_length=255)
    subscription_plan: SubscriptionPlan | None = None


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    subscription_plan: str
    company_departments: list[dict[str, Any]] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompanyCreatedResponse(BaseModel):
    """Company plus its default department, the creator's admin role and a fresh token."""

    model_config = ConfigDict(from_attributes=True)

    company: CompanyResponse
    department_id: str
    admin_role_id: str
    access_token: str


class CompanyDeletedResponse(BaseModel):
    """Counts of cascaded deletions and the caller's re-issued token."""

    model_config = ConfigDict(from_attributes=True)

    company_id: str
    departments_deleted: int
    roles_deleted: int
    tasks_deleted: int
    objectives_deleted: int
    memberships_removed: int
    access_token: str


class DepartmentCreateRequest(BaseModel):
    """Request body for POST /companies/{company_id}/departments."""

    name: str = Field(..., min_length=1, max_length=255)
    roles: list[str] = Field(default_factory=list, description="Role ids to move into the department")


class DepartmentUpdate(BaseModel):
    """Request body for PUT .../departments/{department_id} (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    roles: list[str] | None = None


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_id: str
    name: str
    roles: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
