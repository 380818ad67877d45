"""Hierarchy consistency: role create/update/delete with supervision edges and memberships.

Supervision is stored as edges (supervisor, supervised); both directions of a
role's read-model come from the same rows, so every mutation keeps
supervises/supervised_by symmetric. Membership entries on users are kept in
step with the role's occupants.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.company import DepartmentResult
from app.application.dtos.role import RoleCreate, RoleResult
from app.application.interfaces.repositories import (
    ICompanyRoleRepository,
    IDepartmentRepository,
    IRoleRepository,
    IUserRepository,
)
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects import IdListDiff

logger = logging.getLogger(__name__)


class HierarchyService:
    """Role lifecycle inside a department."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        department_repo: IDepartmentRepository,
        user_repo: IUserRepository,
        company_role_repo: ICompanyRoleRepository,
    ) -> None:
        self.role_repo = role_repo
        self.department_repo = department_repo
        self.user_repo = user_repo
        self.company_role_repo = company_role_repo

    async def _department_or_404(self, department_id: str) -> DepartmentResult:
        department = await self.department_repo.get_result(department_id)
        if department is None:
            raise ResourceNotFoundException(
                "Department", department_id, error="Invalid department ID."
            )
        return department

    async def _role_or_404(self, department_id: str, role_id: str) -> Any:
        role = await self.role_repo.get_in_department(department_id, role_id)
        if role is None:
            raise ResourceNotFoundException(
                "Role", role_id, error="Invalid Department or Role ID."
            )
        return role

    async def list_roles(self, department_id: str) -> list[RoleResult]:
        return await self.role_repo.list_for_department(department_id)

    async def get_role(self, department_id: str, role_id: str) -> RoleResult:
        await self._role_or_404(department_id, role_id)
        result = await self.role_repo.get_result(role_id)
        assert result is not None
        return result

    async def create_role(self, department_id: str, data: RoleCreate) -> RoleResult:
        """Create a role in the department.

        The department and (when given) the occupant user are checked before
        anything is written. The occupant gains a membership for the role.
        """
        department = await self._department_or_404(department_id)
        if data.user_id and not await self.user_repo.exists(data.user_id):
            raise ResourceNotFoundException("User", data.user_id, error="Invalid user ID.")

        role = await self.role_repo.create_role(
            department_id,
            {
                "user_id": data.user_id,
                "hierarchy_level": data.hierarchy_level,
                "job_title": data.job_title,
                "job_description": data.job_description,
                "permissions": list(data.permissions),
            },
        )
        if data.user_id:
            await self.company_role_repo.add(
                data.user_id, department.company_id, department_id, role.id
            )
        for supervised_id in dict.fromkeys(data.supervises):
            await self.role_repo.add_supervision(role.id, supervised_id)
        for supervisor_id in dict.fromkeys(data.supervised_by):
            await self.role_repo.add_supervision(supervisor_id, role.id)

        logger.info("Created role %s in department %s", role.id, department_id)
        result = await self.role_repo.get_result(role.id)
        assert result is not None
        return result

    async def update_role(
        self, department_id: str, role_id: str, patch: dict[str, Any]
    ) -> RoleResult:
        """Apply a partial update.

        Keys present in patch are applied in order: supervises, supervised_by,
        users, then scalar fields. Only changed edges and memberships are
        touched.
        """
        role = await self._role_or_404(department_id, role_id)

        if patch.get("supervises") is not None:
            if role_id in patch["supervises"]:
                raise ValidationException("A role cannot supervise itself.", "supervises")
            diff = IdListDiff.between(
                await self.role_repo.supervised_ids(role_id), patch["supervises"]
            )
            for supervised_id in diff.added:
                await self.role_repo.add_supervision(role_id, supervised_id)
            for supervised_id in diff.removed:
                await self.role_repo.remove_supervision(role_id, supervised_id)

        if patch.get("supervised_by") is not None:
            if role_id in patch["supervised_by"]:
                raise ValidationException(
                    "A role cannot supervise itself.", "supervised_by"
                )
            diff = IdListDiff.between(
                await self.role_repo.supervisor_ids(role_id), patch["supervised_by"]
            )
            for supervisor_id in diff.added:
                await self.role_repo.add_supervision(supervisor_id, role_id)
            for supervisor_id in diff.removed:
                await self.role_repo.remove_supervision(supervisor_id, role_id)

        if patch.get("users") is not None:
            await self._sync_users(department_id, role_id, patch["users"])

        scalars = {
            k: v
            for k, v in patch.items()
            if k not in {"supervises", "supervised_by", "users"}
        }
        if scalars:
            await self.role_repo.apply_fields(role, scalars)

        result = await self.role_repo.get_result(role_id)
        assert result is not None
        return result

    async def _sync_users(
        self, department_id: str, role_id: str, user_ids: list[str]
    ) -> None:
        current = await self.company_role_repo.user_ids_for_roles([role_id])
        diff = IdListDiff.between(current.get(role_id, []), user_ids)
        if diff.is_empty:
            return
        department = await self._department_or_404(department_id)
        for user_id in diff.added:
            if not await self.user_repo.exists(user_id):
                raise ResourceNotFoundException("User", user_id, error="Invalid user ID.")
            if await self.company_role_repo.has_membership(user_id, role_id):
                continue
            await self.company_role_repo.add(
                user_id, department.company_id, department_id, role_id
            )
        if diff.removed:
            await self.company_role_repo.remove_for_role(role_id, diff.removed)

    async def delete_role(self, department_id: str, role_id: str) -> int:
        """Delete the role and its edges, then every membership referencing it.

        Returns the number of membership entries removed.
        """
        await self._role_or_404(department_id, role_id)
        await self.role_repo.delete_roles([role_id])
        removed = await self.company_role_repo.remove_for_role(role_id)
        logger.info(
            "Deleted role %s from department %s (%d memberships removed)",
            role_id,
            department_id,
            removed,
        )
        return removed
