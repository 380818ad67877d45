"""Integration tests for company and department cascade deletion."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleCreate
from app.application.services.cascade_service import CascadeService
from app.application.services.company_service import CompanyService
from app.application.services.department_service import DepartmentService
from app.application.services.hierarchy_service import HierarchyService
from app.application.services.objective_service import ObjectiveService
from app.application.services.task_service import TaskService
from app.application.services.token_service import TokenService
from app.core.config import get_settings
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories import (
    CompanyRepository,
    CompanyRoleRepository,
    DepartmentRepository,
    ObjectiveRepository,
    RoleRepository,
    TaskRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import verify_token


@pytest.fixture
def repos(db_session: AsyncSession) -> dict:
    return {
        "user": UserRepository(db_session),
        "company": CompanyRepository(db_session),
        "department": DepartmentRepository(db_session),
        "role": RoleRepository(db_session),
        "task": TaskRepository(db_session),
        "objective": ObjectiveRepository(db_session),
        "company_role": CompanyRoleRepository(db_session),
    }


@pytest.fixture
def tokens(repos: dict) -> TokenService:
    return TokenService(repos["user"], repos["company_role"], get_settings())


@pytest.fixture
def cascade(repos: dict, tokens: TokenService) -> CascadeService:
    return CascadeService(
        repos["company"],
        repos["department"],
        repos["role"],
        repos["task"],
        repos["objective"],
        repos["company_role"],
        tokens,
    )


@pytest.fixture
async def org(repos: dict, tokens: TokenService) -> dict:
    """Company with two departments, a staffed role, a task and an objective."""
    owner = await repos["user"].create_user("Ada", "Owner", "ada@example.com", "pw123456!")
    bob = await repos["user"].create_user("Bob", "Staff", "bob@example.com", "pw123456!")
    companies = CompanyService(
        repos["company"], repos["department"], repos["role"], repos["company_role"], tokens
    )
    created = await companies.create_company(owner.id, "Acme")
    company_id = created.company.id
    departments = DepartmentService(
        repos["company"], repos["department"], repos["role"], repos["company_role"]
    )
    sales = await departments.create_department(company_id, "Sales")
    hierarchy = HierarchyService(
        repos["role"], repos["department"], repos["user"], repos["company_role"]
    )
    seller = await hierarchy.create_role(
        sales.id,
        RoleCreate(
            hierarchy_level="EMPLOYEE",
            job_title="Seller",
            user_id=bob.id,
            supervised_by=[created.admin_role_id],
        ),
    )
    task = await TaskService(repos["task"]).create_task(
        created.admin_role_id, {"title": "Quarterly plan", "assigned_role_ids": [seller.id]}
    )
    objective = await ObjectiveService(repos["objective"]).create_objective(
        created.admin_role_id, {"name": "Grow revenue"}
    )
    return {
        "owner_id": owner.id,
        "bob_id": bob.id,
        "company_id": company_id,
        "main_department_id": created.department_id,
        "sales_department_id": sales.id,
        "admin_role_id": created.admin_role_id,
        "seller_role_id": seller.id,
        "task_id": task.id,
        "objective_id": objective.id,
    }


async def test_delete_company_removes_dependents(
    cascade: CascadeService, repos: dict, org: dict
) -> None:
    result = await cascade.delete_company(org["company_id"], org["owner_id"])

    assert result.departments_deleted == 2
    assert result.roles_deleted == 2
    assert result.tasks_deleted == 1
    assert result.objectives_deleted == 1
    assert result.memberships_removed == 1

    assert await repos["company"].get_result(org["company_id"]) is None
    assert await repos["department"].ids_for_company(org["company_id"]) == []
    assert await repos["role"].existing_ids(
        [org["admin_role_id"], org["seller_role_id"]]
    ) == set()
    assert await repos["task"].get_result(org["task_id"]) is None
    assert await repos["objective"].get_result(org["objective_id"]) is None
    assert await repos["company_role"].list_for_user(org["owner_id"]) == []


async def test_delete_company_reissues_token_without_membership(
    cascade: CascadeService, org: dict
) -> None:
    result = await cascade.delete_company(org["company_id"], org["owner_id"])
    claims = verify_token(result.access_token)
    assert claims["user_id"] == org["owner_id"]
    assert claims["company_roles"] == []


async def test_delete_company_leaves_other_users_memberships(
    cascade: CascadeService, repos: dict, org: dict
) -> None:
    await cascade.delete_company(org["company_id"], org["owner_id"])
    memberships = await repos["company_role"].list_for_user(org["bob_id"])
    assert [m.role_id for m in memberships] == [org["seller_role_id"]]


async def test_delete_missing_company(cascade: CascadeService, org: dict) -> None:
    with pytest.raises(ResourceNotFoundException):
        await cascade.delete_company("no-such-company", org["owner_id"])


async def test_delete_department_detaches_memberships(
    cascade: CascadeService, repos: dict, org: dict
) -> None:
    await cascade.delete_department(org["company_id"], org["sales_department_id"])

    assert await repos["department"].get_result(org["sales_department_id"]) is None
    company = await repos["company"].get_result(org["company_id"])
    assert [d["department_id"] for d in company.company_departments] == [
        org["main_department_id"]
    ]
    memberships = await repos["company_role"].list_for_user(org["bob_id"])
    assert len(memberships) == 1
    assert memberships[0].role_id == org["seller_role_id"]
    assert memberships[0].department_id is None
    assert await repos["role"].existing_ids([org["seller_role_id"]]) == {
        org["seller_role_id"]
    }


async def test_delete_department_of_other_company(
    cascade: CascadeService, org: dict
) -> None:
    with pytest.raises(ResourceNotFoundException):
        await cascade.delete_department("other-company", org["sales_department_id"])
