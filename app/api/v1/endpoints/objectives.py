"""Role objectives API.

Writes require an objective-management level (TOP_LEVEL_MANAGER or
COMPANY_ADMIN) on the path's role; reads require holding the role.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_objective_service,
    get_objective_service_for_write,
    require_objective_manager,
    require_role_member,
)
from app.application.dtos.auth import AuthPayload
from app.application.services.objective_service import ObjectiveService
from app.core.limiter import limit_writes
from app.schemas.common import EmptyData, Envelope
from app.schemas.objective import (
    ObjectiveCreateRequest,
    ObjectiveResponse,
    ObjectiveUpdate,
    RoleObjectivesResponse,
)

router = APIRouter()

ObjectiveManager = Annotated[AuthPayload, Depends(require_objective_manager)]
RoleMember = Annotated[AuthPayload, Depends(require_role_member)]


@router.post(
    "/{role_id}/objectives",
    response_model=Envelope[ObjectiveResponse],
    status_code=201,
)
@limit_writes
async def create_objective(
    request: Request,
    role_id: str,
    body: ObjectiveCreateRequest,
    _payload: ObjectiveManager,
    objective_service: ObjectiveService = Depends(get_objective_service_for_write),
):
    objective = await objective_service.create_objective(role_id, body.model_dump())
    return Envelope(
        data=ObjectiveResponse.model_validate(objective),
        message="Objective created successfully.",
    )


@router.get("/{role_id}/objectives", response_model=Envelope[RoleObjectivesResponse])
async def list_objectives(
    role_id: str,
    _payload: RoleMember,
    objective_service: ObjectiveService = Depends(get_objective_service),
):
    objectives = await objective_service.list_for_role(role_id)
    return Envelope(
        data=RoleObjectivesResponse(
            owned_objectives=[
                ObjectiveResponse.model_validate(o) for o in objectives.owned
            ],
            assigned_objectives=[
                ObjectiveResponse.model_validate(o) for o in objectives.assigned
            ],
        ),
        message="Objectives retrieved.",
    )


@router.get(
    "/{role_id}/objectives/{objective_id}",
    response_model=Envelope[ObjectiveResponse],
)
async def get_objective(
    role_id: str,
    objective_id: str,
    _payload: RoleMember,
    objective_service: ObjectiveService = Depends(get_objective_service),
):
    objective = await objective_service.get_visible(role_id, objective_id)
    return Envelope(
        data=ObjectiveResponse.model_validate(objective),
        message="Objective retrieved.",
    )


@router.put(
    "/{role_id}/objectives/{objective_id}",
    response_model=Envelope[ObjectiveResponse],
)
@limit_writes
async def update_objective(
    request: Request,
    role_id: str,
    objective_id: str,
    body: ObjectiveUpdate,
    _payload: ObjectiveManager,
    objective_service: ObjectiveService = Depends(get_objective_service_for_write),
):
    """Partial update through the owner role."""
    fields = {
        k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None
    }
    objective = await objective_service.update_objective(role_id, objective_id, fields)
    return Envelope(
        data=ObjectiveResponse.model_validate(objective),
        message="Objective updated.",
    )


@router.delete(
    "/{role_id}/objectives/{objective_id}", response_model=Envelope[EmptyData]
)
@limit_writes
async def delete_objective(
    request: Request,
    role_id: str,
    objective_id: str,
    _payload: ObjectiveManager,
    objective_service: ObjectiveService = Depends(get_objective_service_for_write),
):
    await objective_service.delete_objective(role_id, objective_id)
    return Envelope(data=EmptyData(), message="Objective deleted.")
