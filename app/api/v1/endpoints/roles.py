"""Department roles API.

Creating, updating and deleting a role requires COMPANY_ADMIN in the
department's company; reading requires a valid access token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_auth_payload,
    get_hierarchy_service,
    get_hierarchy_service_for_write,
    require_company_admin,
)
from app.application.dtos.auth import AuthPayload
from app.application.dtos.company import DepartmentResult
from app.application.dtos.role import RoleCreate
from app.application.services.hierarchy_service import HierarchyService
from app.core.limiter import limit_writes
from app.schemas.common import EmptyData, Envelope
from app.schemas.role import RoleCreateRequest, RoleResponse, RoleUpdate

router = APIRouter()

CompanyAdmin = Annotated[DepartmentResult, Depends(require_company_admin)]


@router.post(
    "/{department_id}/roles", response_model=Envelope[RoleResponse], status_code=201
)
@limit_writes
async def create_role(
    request: Request,
    department_id: str,
    body: RoleCreateRequest,
    _department: CompanyAdmin,
    hierarchy: HierarchyService = Depends(get_hierarchy_service_for_write),
):
    """Create a role; the occupant (user_id) gains a membership, edges are added."""
    role = await hierarchy.create_role(
        department_id, RoleCreate(**body.model_dump())
    )
    return Envelope(
        data=RoleResponse.model_validate(role), message="Role created successfully."
    )


@router.get("/{department_id}/roles", response_model=Envelope[list[RoleResponse]])
async def list_roles(
    department_id: str,
    _payload: Annotated[AuthPayload, Depends(get_auth_payload)],
    hierarchy: HierarchyService = Depends(get_hierarchy_service),
):
    roles = await hierarchy.list_roles(department_id)
    return Envelope(
        data=[RoleResponse.model_validate(r) for r in roles],
        message="Roles retrieved.",
    )


@router.get("/{department_id}/roles/{role_id}", response_model=Envelope[RoleResponse])
async def get_role(
    department_id: str,
    role_id: str,
    _payload: Annotated[AuthPayload, Depends(get_auth_payload)],
    hierarchy: HierarchyService = Depends(get_hierarchy_service),
):
    role = await hierarchy.get_role(department_id, role_id)
    return Envelope(data=RoleResponse.model_validate(role), message="Role retrieved.")


@router.put("/{department_id}/roles/{role_id}", response_model=Envelope[RoleResponse])
@limit_writes
async def update_role(
    request: Request,
    department_id: str,
    role_id: str,
    body: RoleUpdate,
    _department: CompanyAdmin,
    hierarchy: HierarchyService = Depends(get_hierarchy_service_for_write),
):
    """Partial update; supervises, supervised_by and users are desired end states."""
    patch = {
        k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None
    }
    role = await hierarchy.update_role(department_id, role_id, patch)
    return Envelope(data=RoleResponse.model_validate(role), message="Role updated.")


@router.delete(
    "/{department_id}/roles/{role_id}", response_model=Envelope[EmptyData]
)
@limit_writes
async def delete_role(
    request: Request,
    department_id: str,
    role_id: str,
    _department: CompanyAdmin,
    hierarchy: HierarchyService = Depends(get_hierarchy_service_for_write),
):
    """Delete the role, its supervision edges and every membership referencing it."""
    await hierarchy.delete_role(department_id, role_id)
    return Envelope(data=EmptyData(), message="Role deleted.")
