"""Company application service: creation with default department and admin role, reads, updates."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.auth import AuthPayload
from app.application.dtos.company import CompanyCreationResult, CompanyResult
from app.application.interfaces.repositories import (
    ICompanyRepository,
    ICompanyRoleRepository,
    IDepartmentRepository,
    IRoleRepository,
)
from app.application.interfaces.services import IAccessTokenIssuer
from app.core.constants import (
    ADMIN_JOB_DESCRIPTION,
    ADMIN_JOB_TITLE,
    DEFAULT_DEPARTMENT_NAME,
)
from app.domain.enums import HierarchyLevel
from app.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class CompanyService:
    """Company lifecycle except deletion (see CascadeService)."""

    def __init__(
        self,
        company_repo: ICompanyRepository,
        department_repo: IDepartmentRepository,
        role_repo: IRoleRepository,
        company_role_repo: ICompanyRoleRepository,
        token_issuer: IAccessTokenIssuer,
    ) -> None:
        self.company_repo = company_repo
        self.department_repo = department_repo
        self.role_repo = role_repo
        self.company_role_repo = company_role_repo
        self.token_issuer = token_issuer

    async def create_company(
        self, user_id: str, name: str, subscription_plan: str | None = None
    ) -> CompanyCreationResult:
        """Create the company, its default department and a COMPANY_ADMIN role
        held by user_id; return a new access token including that membership.
        """
        company = await self.company_repo.create_company(name, subscription_plan)
        department = await self.department_repo.create_department(
            company.id, DEFAULT_DEPARTMENT_NAME
        )
        await self.company_repo.add_department_entry(
            company.id, department.id, department.name
        )
        admin_role = await self.role_repo.create_role(
            department.id,
            {
                "user_id": user_id,
                "hierarchy_level": HierarchyLevel.COMPANY_ADMIN.value,
                "job_title": ADMIN_JOB_TITLE,
                "job_description": ADMIN_JOB_DESCRIPTION,
                "permissions": [],
            },
        )
        await self.company_role_repo.add(user_id, company.id, department.id, admin_role.id)

        payload = await self.token_issuer.build_payload(user_id)
        access_token = self.token_issuer.issue_access_token(payload)
        logger.info("Created company %s with admin role %s", company.id, admin_role.id)

        created = await self.company_repo.get_result(company.id)
        assert created is not None
        return CompanyCreationResult(
            company=created,
            department_id=department.id,
            admin_role_id=admin_role.id,
            access_token=access_token,
        )

    async def list_for_payload(self, payload: AuthPayload) -> list[CompanyResult]:
        """Companies referenced by the caller's token snapshot."""
        return await self.company_repo.list_results(
            m.company_id for m in payload.company_roles if m.company_id
        )

    async def get_company(self, company_id: str) -> CompanyResult:
        company = await self.company_repo.get_result(company_id)
        if company is None:
            raise ResourceNotFoundException("Company", company_id, error="Invalid company ID.")
        return company

    async def update_company(
        self, company_id: str, changes: dict[str, Any]
    ) -> CompanyResult:
        updated = await self.company_repo.update_company(company_id, changes)
        if updated is None:
            raise ResourceNotFoundException("Company", company_id, error="Invalid company ID.")
        return updated
