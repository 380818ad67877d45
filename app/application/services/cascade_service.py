"""Cascade deletion of companies and departments.

Steps run sequentially on the request's session; with a transactional
session the whole cascade commits or rolls back together.
"""

from __future__ import annotations

import logging

from app.application.dtos.company import CompanyDeletionResult
from app.application.interfaces.repositories import (
    ICompanyRepository,
    ICompanyRoleRepository,
    IDepartmentRepository,
    IObjectiveRepository,
    IRoleRepository,
    ITaskRepository,
)
from app.application.interfaces.services import IAccessTokenIssuer
from app.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class CascadeService:
    """Removes a company or department together with the records that depend on it."""

    def __init__(
        self,
        company_repo: ICompanyRepository,
        department_repo: IDepartmentRepository,
        role_repo: IRoleRepository,
        task_repo: ITaskRepository,
        objective_repo: IObjectiveRepository,
        company_role_repo: ICompanyRoleRepository,
        token_issuer: IAccessTokenIssuer,
    ) -> None:
        self.company_repo = company_repo
        self.department_repo = department_repo
        self.role_repo = role_repo
        self.task_repo = task_repo
        self.objective_repo = objective_repo
        self.company_role_repo = company_role_repo
        self.token_issuer = token_issuer

    async def delete_company(
        self, company_id: str, acting_user_id: str
    ) -> CompanyDeletionResult:
        """Delete a company: tasks/objectives, roles, departments, the acting
        user's memberships, then the company itself.

        Memberships held by other users are left in place. Returns counts and
        a re-issued access token for the acting user.
        """
        company = await self.company_repo.get_result(company_id)
        if company is None:
            raise ResourceNotFoundException(
                "Company", company_id, error="Invalid company ID."
            )

        department_ids = await self.department_repo.ids_for_company(company_id)
        role_ids = await self.role_repo.ids_for_departments(department_ids)

        tasks_deleted = await self.task_repo.delete_touching_roles(role_ids)
        objectives_deleted = await self.objective_repo.delete_touching_roles(role_ids)
        roles_deleted = await self.role_repo.delete_roles(role_ids)
        departments_deleted = await self.department_repo.delete_by_ids(department_ids)
        memberships_removed = await self.company_role_repo.remove_for_user_in_company(
            acting_user_id, company_id
        )
        logger.info(
            "Company %s cascade: %d tasks, %d objectives, %d roles, %d departments, "
            "%d memberships of user %s",
            company_id,
            tasks_deleted,
            objectives_deleted,
            roles_deleted,
            departments_deleted,
            memberships_removed,
            acting_user_id,
        )

        payload = await self.token_issuer.build_payload(acting_user_id)
        access_token = self.token_issuer.issue_access_token(payload)

        await self.company_repo.delete_company(company_id)
        logger.info("Deleted company %s", company_id)

        return CompanyDeletionResult(
            company_id=company_id,
            departments_deleted=departments_deleted,
            roles_deleted=roles_deleted,
            tasks_deleted=tasks_deleted,
            objectives_deleted=objectives_deleted,
            memberships_removed=memberships_removed,
            access_token=access_token,
        )

    async def delete_department(self, company_id: str, department_id: str) -> None:
        """Delete a department.

        Roles homed in it stay; membership entries for those roles keep the
        role but lose their department_id. The department leaves the
        company's department list.
        """
        department = await self.department_repo.get_in_company(company_id, department_id)
        if department is None:
            raise ResourceNotFoundException(
                "Department", department_id, error="Invalid company or department ID."
            )
        role_ids = await self.role_repo.ids_for_departments([department_id])
        await self.department_repo.delete_by_ids([department_id])
        unset = await self.company_role_repo.set_department_for_roles(role_ids, None)
        await self.company_repo.remove_department_entry(company_id, department_id)
        logger.info(
            "Deleted department %s of company %s (%d memberships detached)",
            department_id,
            company_id,
            unset,
        )
