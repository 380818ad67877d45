"""Objective API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import Priority


class KpiItem(BaseModel):
    """Key performance indicator tracked by an objective."""

    kpi_name: str = Field(..., min_length=1, max_length=255)
    kpi_description: str | None = None
    target: float | None = None
    actual: float | None = None


class ObjectiveCreateRequest(BaseModel):
    """Request body for POST /roles/{role_id}/objectives."""

    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1, max_length=500)
    objective_kpis: list[KpiItem] = Field(default_factory=list)
    milestones: list[dict[str, Any]] = Field(default_factory=list)
    goal_progress: list[dict[str, Any]] = Field(default_factory=list)
    objective_start_date: datetime | None = None
    objective_due_date: datetime | None = None
    accountable_departments: list[str] = Field(default_factory=list)
    priority: Priority = Priority.MEDIUM
    objective_resources: list[str] = Field(default_factory=list)
    objective_documents: list[str] = Field(default_factory=list)
    assigned_role_ids: list[str] = Field(default_factory=list)
    recent_comments: list[dict[str, Any]] = Field(default_factory=list)
    feedbacks: list[str] = Field(default_factory=list)


class ObjectiveUpdate(BaseModel):
    """Request body for PUT /roles/{role_id}/objectives/{objective_id} (partial)."""

    model_config = ConfigDict(use_enum_values=True)

    name: str | None = Field(default=None, min_length=1, max_length=500)
    objective_kpis: list[KpiItem] | None = None
    milestones: list[dict[str, Any]] | None = None
    goal_progress: list[dict[str, Any]] | None = None
    objective_start_date: datetime | None = None
    objective_due_date: datetime | None = None
    accountable_departments: list[str] | None = None
    priority: Priority | None = None
    objective_resources: list[str] | None = None
    objective_documents: list[str] | None = None
    assigned_role_ids: list[str] | None = None
    recent_comments: list[dict[str, Any]] | None = None
    feedbacks: list[str] | None = None


class ObjectiveResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_role_id: str
    assigned_role_ids: list[str]
    name: str
    objective_kpis: list[dict[str, Any]] = Field(default_factory=list)
    milestones: list[dict[str, Any]] = Field(default_factory=list)
    goal_progress: list[dict[str, Any]] = Field(default_factory=list)
    objective_start_date: datetime | None = None
    objective_due_date: datetime | None = None
    accountable_departments: list[str] = Field(default_factory=list)
    priority: str
    objective_resources: list[str] = Field(default_factory=list)
    objective_documents: list[str] = Field(default_factory=list)
    recent_comments: list[dict[str, Any]] = Field(default_factory=list)
    feedbacks: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RoleObjectivesResponse(BaseModel):
    """Objectives visible to a role, split into owned and assigned."""

    owned_objectives: list[ObjectiveResponse]
    assigned_objectives: list[ObjectiveResponse]
