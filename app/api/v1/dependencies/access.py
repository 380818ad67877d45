"""Role-based route guards (composition root).

require_task_manager / require_objective_manager read role_id from the
route path; require_company_admin reads department_id.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Annotated

from fastapi import Depends

from app.application.dtos.auth import AuthPayload
from app.application.dtos.company import DepartmentResult
from app.application.services.access_control import AccessControlService
from app.domain.enums import (
    OBJECTIVE_MANAGEMENT_LEVELS,
    TASK_MANAGEMENT_LEVELS,
    HierarchyLevel,
)
from app.infrastructure.persistence.repositories import (
    CompanyRoleRepository,
    DepartmentRepository,
    RoleRepository,
)

from . import db as db_deps
from .auth import get_auth_payload


async def get_access_control_service(
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo)],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo)
    ],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo)
    ],
) -> AccessControlService:
    return AccessControlService(role_repo, department_repo, company_role_repo)


def require_role_level(
    allowed: Iterable[HierarchyLevel],
) -> Callable[..., Awaitable[AuthPayload]]:
    """Dependency factory: caller holds the path's role_id at an allowed level."""
    levels = frozenset(allowed)

    async def _require(
        role_id: str,
        payload: Annotated[AuthPayload, Depends(get_auth_payload)],
        access: Annotated[AccessControlService, Depends(get_access_control_service)],
    ) -> AuthPayload:
        await access.require_role_level(payload, role_id, levels)
        return payload

    return _require


require_task_manager = require_role_level(TASK_MANAGEMENT_LEVELS)
require_objective_manager = require_role_level(OBJECTIVE_MANAGEMENT_LEVELS)


async def require_role_member(
    role_id: str,
    payload: Annotated[AuthPayload, Depends(get_auth_payload)],
    access: Annotated[AccessControlService, Depends(get_access_control_service)],
) -> AuthPayload:
    """Caller holds the path's role_id at any level (read access)."""
    access.require_membership(payload, role_id)
    return payload


async def require_company_admin(
    department_id: str,
    payload: Annotated[AuthPayload, Depends(get_auth_payload)],
    access: Annotated[AccessControlService, Depends(get_access_control_service)],
) -> DepartmentResult:
    """Department exists (404) and caller is COMPANY_ADMIN in its company (403)."""
    return await access.require_company_admin(payload, department_id)
