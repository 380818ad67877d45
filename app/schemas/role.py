"""Role API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import HierarchyLevel


class RoleCreateRequest(BaseModel):
    """Request body for creating a role in a department."""

    model_config = ConfigDict(use_enum_values=True)

    hierarchy_level: HierarchyLevel
    job_title: str = Field(..., min_length=1, max_length=255)
    job_description: str | None = Field(default=None, max_length=2000)
    user_id: str | None = Field(default=None, description="Occupant; gets a membership")
    permissions: list[str] = Field(default_factory=list, max_length=100)
    supervises: list[str] = Field(default_factory=list)
    supervised_by: list[str] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    """Request body for updating a role (partial).

    supervises, supervised_by and users are desired end states; the
    difference from the current state is applied.
    """

    model_config = ConfigDict(use_enum_values=True)

    hierarchy_level: HierarchyLevel | None = None
    job_title: str | None = Field(default=None, min_length=1, max_length=255)
    job_description: str | None = Field(default=None, max_length=2000)
    permissions: list[str] | None = None
    supervises: list[str] | None = None
    supervised_by: list[str] | None = None
    users: list[str] | None = None


class RoleResponse(BaseModel):
    """Role list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    department_id: str | None
    user_id: str | None
    hierarchy_level: str
    job_title: str
    job_description: str | None
    permissions: list[str] = Field(default_factory=list)
    supervises: list[str] = Field(default_factory=list)
    supervised_by: list[str] = Field(default_factory=list)
    users: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
