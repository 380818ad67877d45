"""Role-based gates for company-scoped routes.

Membership comes from the caller's token snapshot (role gates) or from the
database (company admin gate); hierarchy levels are always read from the
database, never trusted from the token.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from app.application.dtos.auth import AuthPayload
from app.application.dtos.company import DepartmentResult
from app.application.interfaces.repositories import (
    ICompanyRoleRepository,
    IDepartmentRepository,
    IRoleRepository,
)
from app.domain.enums import HierarchyLevel
from app.domain.exceptions import AuthorizationException, ResourceNotFoundException

logger = logging.getLogger(__name__)

ACCESS_DENIED = "Access denied."


class AccessControlService:
    """Hierarchy-level checks for role-scoped and department-scoped routes."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        department_repo: IDepartmentRepository,
        company_role_repo: ICompanyRoleRepository,
    ) -> None:
        self.role_repo = role_repo
        self.department_repo = department_repo
        self.company_role_repo = company_role_repo

    async def require_role_level(
        self,
        payload: AuthPayload,
        role_id: str,
        allowed: Iterable[HierarchyLevel | str],
    ) -> str:
        """Ensure the caller holds role_id and that role's level is allowed.

        Returns the role's hierarchy level.
        """
        if not payload.has_role(role_id):
            logger.warning("User %s does not hold role %s", payload.user_id, role_id)
            raise AuthorizationException(
                error="Role not found for the user.", message=ACCESS_DENIED
            )
        levels = await self.role_repo.levels_for([role_id])
        level = levels.get(role_id)
        if level is None:
            raise AuthorizationException(
                error="Role not found for the user.", message=ACCESS_DENIED
            )
        allowed_values = {getattr(a, "value", a) for a in allowed}
        if level not in allowed_values:
            logger.warning(
                "User %s role %s level %s not in %s",
                payload.user_id,
                role_id,
                level,
                sorted(allowed_values),
            )
            raise AuthorizationException(
                error="Insufficient permissions.", message=ACCESS_DENIED
            )
        return level

    def require_membership(self, payload: AuthPayload, role_id: str) -> None:
        """Ensure the caller's snapshot holds role_id (any level)."""
        if not payload.has_role(role_id):
            raise AuthorizationException(
                error="Role not found for the user.", message=ACCESS_DENIED
            )

    async def require_company_admin(
        self, payload: AuthPayload, department_id: str
    ) -> DepartmentResult:
        """Ensure the department exists and the caller is COMPANY_ADMIN in its company."""
        department = await self.department_repo.get_result(department_id)
        if department is None:
            raise ResourceNotFoundException(
                "Department", department_id, error="Department ID is not valid"
            )
        memberships = await self.company_role_repo.list_for_user(payload.user_id)
        role_ids = [m.role_id for m in memberships if m.company_id == department.company_id]
        levels = await self.role_repo.levels_for(role_ids)
        if HierarchyLevel.COMPANY_ADMIN.value not in levels.values():
            logger.warning(
                "User %s is not company admin of %s",
                payload.user_id,
                department.company_id,
            )
            raise AuthorizationException(
                error="Not a company admin or in the same company.",
                message=ACCESS_DENIED,
            )
        return department
