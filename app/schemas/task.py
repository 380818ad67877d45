"""Task API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import Priority, TaskStatus


class RubricItem(BaseModel):
    """One grading criterion of a task."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    weight: float | None = Field(default=None, ge=0)


class TaskCreateRequest(BaseModel):
    """Request body for POST /roles/{role_id}/tasks."""

    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    objective_id: str | None = None
    task_rubric: list[RubricItem] = Field(default_factory=list)
    start_date: datetime | None = None
    due_date: datetime | None = None
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.NOT_STARTED
    assigned_role_ids: list[str] = Field(default_factory=list)
    recent_comments: list[dict[str, Any]] = Field(default_factory=list)
    feedbacks: list[str] = Field(default_factory=list)


class TaskUpdate(BaseModel):
    """Request body for PUT /roles/{role_id}/tasks/{task_id} (partial)."""

    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    objective_id: str | None = None
    task_rubric: list[RubricItem] | None = None
    start_date: datetime | None = None
    due_date: datetime | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None
    assigned_role_ids: list[str] | None = None
    recent_comments: list[dict[str, Any]] | None = None
    feedbacks: list[str] | None = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_role_id: str
    assigned_role_ids: list[str]
    objective_id: str | None
    title: str
    description: str | None
    task_rubric: list[dict[str, Any]] = Field(default_factory=list)
    start_date: datetime | None = None
    due_date: datetime | None = None
    priority: str
    status: str
    task_resources: list[str] = Field(default_factory=list)
    task_outputs: list[str] = Field(default_factory=list)
    recent_comments: list[dict[str, Any]] = Field(default_factory=list)
    feedbacks: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class RoleTasksResponse(BaseModel):
    """Tasks visible to a role, split into owned and assigned."""

    owned_tasks: list[TaskResponse]
    assigned_tasks: list[TaskResponse]


class TaskFilesResponse(BaseModel):
    """Names of files stored by an upload request."""

    task_id: str
    file_names: list[str]


class FileUrlResponse(BaseModel):
    url: str
