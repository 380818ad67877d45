"""Companies API: companies and their departments.

Company deletion and department deletion cascade through CascadeService.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_auth_payload,
    get_cascade_service,
    get_company_service,
    get_company_service_for_write,
    get_department_service,
    get_department_service_for_write,
)
from app.application.dtos.auth import AuthPayload
from app.application.services.cascade_service import CascadeService
from app.application.services.company_service import CompanyService
from app.application.services.department_service import DepartmentService
from app.core.limiter import limit_writes
from app.schemas.common import EmptyData, Envelope
from app.schemas.company import (
    CompanyCreatedResponse,
    CompanyCreateRequest,
    CompanyDeletedResponse,
    CompanyResponse,
    CompanyUpdate,
    DepartmentCreateRequest,
    DepartmentResponse,
    DepartmentUpdate,
)

router = APIRouter()

CurrentPayload = Annotated[AuthPayload, Depends(get_auth_payload)]


@router.post("", response_model=Envelope[CompanyCreatedResponse], status_code=201)
@limit_writes
async def create_company(
    request: Request,
    body: CompanyCreateRequest,
    payload: CurrentPayload,
    company_service: CompanyService = Depends(get_company_service_for_write),
):
    """Create a company with its default department; the caller becomes its admin.

    The returned access token already contains the new membership.
    """
    result = await company_service.create_company(
        payload.user_id, body.name, body.subscription_plan
    )
    return Envelope(
        data=CompanyCreatedResponse.model_validate(result),
        message="Company created successfully.",
    )


@router.get("", response_model=Envelope[list[CompanyResponse]])
async def list_companies(
    payload: CurrentPayload,
    company_service: CompanyService = Depends(get_company_service),
):
    """Companies referenced by the caller's token."""
    companies = await company_service.list_for_payload(payload)
    return Envelope(
        data=[CompanyResponse.model_validate(c) for c in companies],
        message="Companies retrieved.",
    )


@router.get("/{company_id}", response_model=Envelope[CompanyResponse])
async def get_company(
    company_id: str,
    _payload: CurrentPayload,
    company_service: CompanyService = Depends(get_company_service),
):
    company = await company_service.get_company(company_id)
    return Envelope(
        data=CompanyResponse.model_validate(company), message="Company retrieved."
    )


@router.put("/{company_id}", response_model=Envelope[CompanyResponse])
@limit_writes
async def update_company(
    request: Request,
    company_id: str,
    body: CompanyUpdate,
    _payload: CurrentPayload,
    company_service: CompanyService = Depends(get_company_service_for_write),
):
    company = await company_service.update_company(
        company_id, body.model_dump(exclude_unset=True, exclude_none=True)
    )
    return Envelope(
        data=CompanyResponse.model_validate(company), message="Company updated."
    )


@router.delete("/{company_id}", response_model=Envelope[CompanyDeletedResponse])
@limit_writes
async def delete_company(
    request: Request,
    company_id: str,
    payload: CurrentPayload,
    cascade_service: CascadeService = Depends(get_cascade_service),
):
    """Delete the company with its departments, roles, tasks and objectives.

    Only the caller's memberships are removed; a fresh access token is returned.
    """
    result = await cascade_service.delete_company(company_id, payload.user_id)
    return Envelope(
        data=CompanyDeletedResponse.model_validate(result),
        message="Company deleted successfully.",
    )


@router.post(
    "/{company_id}/departments",
    response_model=Envelope[DepartmentResponse],
    status_code=201,
)
@limit_writes
async def create_department(
    request: Request,
    company_id: str,
    body: DepartmentCreateRequest,
    _payload: CurrentPayload,
    department_service: DepartmentService = Depends(get_department_service_for_write),
):
    """Create a department; listed roles are moved into it."""
    department = await department_service.create_department(
        company_id, body.name, body.roles
    )
    return Envelope(
        data=DepartmentResponse.model_validate(department),
        message="Department created successfully.",
    )


@router.get(
    "/{company_id}/departments", response_model=Envelope[list[DepartmentResponse]]
)
async def list_departments(
    company_id: str,
    _payload: CurrentPayload,
    department_service: DepartmentService = Depends(get_department_service),
):
    departments = await department_service.list_departments(company_id)
    return Envelope(
        data=[DepartmentResponse.model_validate(d) for d in departments],
        message="Departments retrieved.",
    )


@router.get(
    "/{company_id}/departments/{department_id}",
    response_model=Envelope[DepartmentResponse],
)
async def get_department(
    company_id: str,
    department_id: str,
    _payload: CurrentPayload,
    department_service: DepartmentService = Depends(get_department_service),
):
    department = await department_service.get_department(company_id, department_id)
    return Envelope(
        data=DepartmentResponse.model_validate(department),
        message="Department retrieved.",
    )


@router.put(
    "/{company_id}/departments/{department_id}",
    response_model=Envelope[DepartmentResponse],
)
@limit_writes
async def update_department(
    request: Request,
    company_id: str,
    department_id: str,
    body: DepartmentUpdate,
    _payload: CurrentPayload,
    department_service: DepartmentService = Depends(get_department_service_for_write),
):
    """Rename a department and/or move roles into it."""
    department = await department_service.update_department(
        company_id, department_id, body.name, body.roles
    )
    return Envelope(
        data=DepartmentResponse.model_validate(department),
        message="Department updated.",
    )


@router.delete(
    "/{company_id}/departments/{department_id}",
    response_model=Envelope[EmptyData],
)
@limit_writes
async def delete_department(
    request: Request,
    company_id: str,
    department_id: str,
    _payload: CurrentPayload,
    cascade_service: CascadeService = Depends(get_cascade_service),
):
    """Delete a department; its roles stay, detached from membership entries."""
    await cascade_service.delete_department(company_id, department_id)
    return Envelope(data=EmptyData(), message="Department deleted.")
