"""Objective application service: role-scoped CRUD."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.objective import ObjectiveResult, RoleObjectives
from app.application.interfaces.repositories import IObjectiveRepository
from app.domain.exceptions import AuthorizationException, ResourceNotFoundException

logger = logging.getLogger(__name__)


class ObjectiveService:
    """Objectives owned by or assigned to a role."""

    def __init__(self, objective_repo: IObjectiveRepository) -> None:
        self.objective_repo = objective_repo

    async def list_for_role(self, role_id: str) -> RoleObjectives:
        objectives = await self.objective_repo.list_for_role(role_id)
        return RoleObjectives(
            owned=[o for o in objectives if o.owner_role_id == role_id],
            assigned=[o for o in objectives if o.owner_role_id != role_id],
        )

    async def get_visible(self, role_id: str, objective_id: str) -> ObjectiveResult:
        objective = await self.objective_repo.get_result(objective_id)
        if objective is None:
            raise ResourceNotFoundException(
                "Objective", objective_id, error="Invalid Objective ID."
            )
        if not objective.is_visible_to(role_id):
            raise AuthorizationException(
                error="Objective not accessible by the specified role.",
                message="Access denied.",
            )
        return objective

    async def create_objective(
        self, role_id: str, fields: dict[str, Any]
    ) -> ObjectiveResult:
        assigned = fields.pop("assigned_role_ids", None)
        objective = await self.objective_repo.create_objective(role_id, fields, assigned)
        logger.info("Role %s created objective %s", role_id, objective.id)
        return objective

    async def update_objective(
        self, role_id: str, objective_id: str, fields: dict[str, Any]
    ) -> ObjectiveResult:
        objective = await self.objective_repo.get_owned(role_id, objective_id)
        if objective is None:
            raise ResourceNotFoundException(
                "Objective", objective_id, error="Invalid ID for objective or role."
            )
        assigned = fields.pop("assigned_role_ids", None)
        return await self.objective_repo.update_objective(objective, fields, assigned)

    async def delete_objective(self, role_id: str, objective_id: str) -> None:
        if await self.objective_repo.get_owned(role_id, objective_id) is None:
            raise ResourceNotFoundException(
                "Objective",
                objective_id,
                error="Invalid ID for objective or role.",
                message="Objective not found, hence could not be deleted.",
            )
        await self.objective_repo.delete_with_links([objective_id])
        logger.info("Role %s deleted objective %s", role_id, objective_id)
