"""DTOs for task use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class TaskResult:
    """Task read-model."""

    id: str
    owner_role_id: str
    assigned_role_ids: tuple[str, ...]
    objective_id: str | None
    title: str
    description: str | None
    task_rubric: list[dict[str, Any]] = field(default_factory=list)
    start_date: datetime | None = None
    due_date: datetime | None = None
    priority: str = "MEDIUM"
    status: str = "NOT_STARTED"
    task_resources: list[str] = field(default_factory=list)
    task_outputs: list[str] = field(default_factory=list)
    recent_comments: list[dict[str, Any]] = field(default_factory=list)
    feedbacks: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_visible_to(self, role_id: str) -> bool:
        """True when role_id owns the task or is assigned to it."""
        return self.owner_role_id == role_id or role_id in self.assigned_role_ids


@dataclass(frozen=True)
class FileUpload:
    """One file received for a task's resources or outputs."""

    file_name: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class RoleTasks:
    """Tasks visible to a role, split by relation."""

    owned: list[TaskResult]
    assigned: list[TaskResult]
