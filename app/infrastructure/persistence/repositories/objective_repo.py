"""Objective repository. Interface methods return ObjectiveResult."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.objective import ObjectiveResult
from app.infrastructure.persistence.models.objective import (
    Objective,
    ObjectiveAssignedRole,
)
from app.infrastructure.persistence.repositories.role_scoped_repo import (
    RoleScopedRepository,
)
from app.shared.utils.datetime import ensure_utc

OBJECTIVE_FIELDS = (
    "name",
    "objective_kpis",
    "milestones",
    "goal_progress",
    "objective_start_date",
    "objective_due_date",
    "accountable_departments",
    "priority",
    "objective_resources",
    "objective_documents",
    "recent_comments",
    "feedbacks",
)


def _objective_to_result(o: Objective, assigned: list[str]) -> ObjectiveResult:
    return ObjectiveResult(
        id=o.id,
        owner_role_id=o.owner_role_id,
        assigned_role_ids=tuple(assigned),
        name=o.name,
        objective_kpis=list(o.objective_kpis or []),
        milestones=list(o.milestones or []),
        goal_progress=list(o.goal_progress or []),
        objective_start_date=ensure_utc(o.objective_start_date),
        objective_due_date=ensure_utc(o.objective_due_date),
        accountable_departments=list(o.accountable_departments or []),
        priority=o.priority,
        objective_resources=list(o.objective_resources or []),
        objective_documents=list(o.objective_documents or []),
        recent_comments=list(o.recent_comments or []),
        feedbacks=list(o.feedbacks or []),
        created_at=ensure_utc(o.created_at),
        updated_at=ensure_utc(o.updated_at),
    )


class ObjectiveRepository(RoleScopedRepository[Objective]):
    """Objectives owned by a role, assignable to other roles."""

    link_model = ObjectiveAssignedRole
    link_key = "objective_id"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Objective)

    async def _results(self, objectives: list[Objective]) -> list[ObjectiveResult]:
        assigned = await self.assigned_roles_for(o.id for o in objectives)
        return [_objective_to_result(o, assigned[o.id]) for o in objectives]

    async def get_result(self, objective_id: str) -> ObjectiveResult | None:
        objective = await self.get_by_id(objective_id)
        if not objective:
            return None
        return (await self._results([objective]))[0]

    async def list_for_role(self, role_id: str) -> list[ObjectiveResult]:
        ids = await self.ids_visible_to(role_id)
        if not ids:
            return []
        result = await self.db.execute(
            select(Objective)
            .where(Objective.id.in_(ids))
            .order_by(Objective.created_at, Objective.id)
        )
        return await self._results(list(result.scalars().all()))

    async def get_owned(self, role_id: str, objective_id: str) -> Objective | None:
        result = await self.db.execute(
            select(Objective).where(
                Objective.id == objective_id, Objective.owner_role_id == role_id
            )
        )
        return result.scalar_one_or_none()

    async def create_objective(
        self,
        owner_role_id: str,
        fields: dict[str, Any],
        assigned_role_ids: list[str] | None = None,
    ) -> ObjectiveResult:
        objective = Objective(owner_role_id=owner_role_id)
        for key in OBJECTIVE_FIELDS:
            if fields.get(key) is not None:
                setattr(objective, key, fields[key])
        created = await self.create(objective)
        if assigned_role_ids:
            await self.replace_assigned_roles(created.id, assigned_role_ids)
        return (await self._results([created]))[0]

    async def update_objective(
        self,
        objective: Objective,
        fields: dict[str, Any],
        assigned_role_ids: list[str] | None = None,
    ) -> ObjectiveResult:
        for key in OBJECTIVE_FIELDS:
            if key in fields:
                setattr(objective, key, fields[key])
        updated = await self.update(objective)
        if assigned_role_ids is not None:
            await self.replace_assigned_roles(updated.id, assigned_role_ids)
        return (await self._results([updated]))[0]
