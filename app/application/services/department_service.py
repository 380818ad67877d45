"""Department application service: create, read, update (deletion lives in CascadeService)."""

from __future__ import annotations

import logging

from app.application.dtos.company import DepartmentResult
from app.application.interfaces.repositories import (
    ICompanyRepository,
    ICompanyRoleRepository,
    IDepartmentRepository,
    IRoleRepository,
)
from app.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class DepartmentService:
    """Departments of a company, kept in sync with the company's department list."""

    def __init__(
        self,
        company_repo: ICompanyRepository,
        department_repo: IDepartmentRepository,
        role_repo: IRoleRepository,
        company_role_repo: ICompanyRoleRepository,
    ) -> None:
        self.company_repo = company_repo
        self.department_repo = department_repo
        self.role_repo = role_repo
        self.company_role_repo = company_role_repo

    async def _ensure_company(self, company_id: str) -> None:
        if await self.company_repo.get_result(company_id) is None:
            raise ResourceNotFoundException(
                "Company", company_id, error="Company ID is not valid."
            )

    async def _ensure_roles_in_company(self, company_id: str, role_ids: list[str]) -> None:
        """Roles may only be re-homed within their own company."""
        existing = await self.role_repo.ids_in_company(role_ids, company_id)
        if len(existing) != len(set(role_ids)):
            raise ResourceNotFoundException(
                "Role",
                error="Invalid role ID was detected.",
                message="One or more roles not found.",
            )

    async def _rehome_roles(self, role_ids: list[str], department_id: str) -> None:
        """Move roles into department_id, including their membership entries."""
        await self.role_repo.move_to_department(role_ids, department_id)
        await self.company_role_repo.set_department_for_roles(role_ids, department_id)

    async def create_department(
        self, company_id: str, name: str, role_ids: list[str] | None = None
    ) -> DepartmentResult:
        await self._ensure_company(company_id)
        role_ids = list(dict.fromkeys(role_ids or []))
        if role_ids:
            await self._ensure_roles_in_company(company_id, role_ids)
        department = await self.department_repo.create_department(company_id, name)
        await self.company_repo.add_department_entry(company_id, department.id, name)
        if role_ids:
            await self._rehome_roles(role_ids, department.id)
        logger.info("Created department %s in company %s", department.id, company_id)
        result = await self.department_repo.get_result(department.id)
        assert result is not None
        return result

    async def list_departments(self, company_id: str) -> list[DepartmentResult]:
        await self._ensure_company(company_id)
        return await self.department_repo.list_for_company(company_id)

    async def get_department(self, company_id: str, department_id: str) -> DepartmentResult:
        department = await self.department_repo.get_in_company(company_id, department_id)
        if department is None:
            raise ResourceNotFoundException(
                "Department", department_id, error="Invalid Company or Department ID."
            )
        return department

    async def update_department(
        self,
        company_id: str,
        department_id: str,
        name: str | None = None,
        role_ids: list[str] | None = None,
    ) -> DepartmentResult:
        """Rename and/or re-home roles into the department."""
        await self.get_department(company_id, department_id)
        if role_ids is not None:
            role_ids = list(dict.fromkeys(role_ids))
            await self._ensure_roles_in_company(company_id, role_ids)
        if name is not None:
            await self.department_repo.rename(department_id, name)
            await self.company_repo.rename_department_entry(company_id, department_id, name)
        if role_ids:
            await self._rehome_roles(role_ids, department_id)
        return await self.get_department(company_id, department_id)
