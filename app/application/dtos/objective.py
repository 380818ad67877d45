"""DTOs for objective use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ObjectiveResult:
    """Objective read-model."""

    id: str
    owner_role_id: str
    assigned_role_ids: tuple[str, ...]
    name: str
    objective_kpis: list[dict[str, Any]] = field(default_factory=list)
    milestones: list[dict[str, Any]] = field(default_factory=list)
    goal_progress: list[dict[str, Any]] = field(default_factory=list)
    objective_start_date: datetime | None = None
    objective_due_date: datetime | None = None
    accountable_departments: list[str] = field(default_factory=list)
    priority: str = "MEDIUM"
    objective_resources: list[str] = field(default_factory=list)
    objective_documents: list[str] = field(default_factory=list)
    recent_comments: list[dict[str, Any]] = field(default_factory=list)
    feedbacks: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_visible_to(self, role_id: str) -> bool:
        """True when role_id owns the objective or is assigned to it."""
        return self.owner_role_id == role_id or role_id in self.assigned_role_ids


@dataclass(frozen=True)
class RoleObjectives:
    """Objectives visible to a role, split by relation."""

    owned: list[ObjectiveResult]
    assigned: list[ObjectiveResult]
