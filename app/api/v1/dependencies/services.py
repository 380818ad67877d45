"""Application service dependencies (composition root).

Routes depend on these builders only; repositories and storage are wired here.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from app.application.services import (
    CascadeService,
    CompanyService,
    DepartmentService,
    HierarchyService,
    ObjectiveService,
    TaskService,
    TokenService,
    UserService,
)
from app.application.interfaces.services import IObjectStorage
from app.core.config import get_settings
from app.infrastructure.external.storage import StorageFactory
from app.infrastructure.persistence.repositories import (
    CompanyRepository,
    CompanyRoleRepository,
    DepartmentRepository,
    ObjectiveRepository,
    RoleRepository,
    TaskRepository,
    UserRepository,
)

from . import db as db_deps
from .auth import get_token_service, get_token_service_for_write


def get_object_storage() -> IObjectStorage:
    """Object storage selected by STORAGE_BACKEND."""
    return StorageFactory.create_storage_service(get_settings())


async def get_hierarchy_service(
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo)],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo)
    ],
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo)
    ],
) -> HierarchyService:
    """Hierarchy service for reads."""
    return HierarchyService(role_repo, department_repo, user_repo, company_role_repo)


async def get_hierarchy_service_for_write(
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo_for_write)],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo_for_write)
    ],
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo_for_write)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo_for_write)
    ],
) -> HierarchyService:
    """Hierarchy service whose sub-updates share one transaction."""
    return HierarchyService(role_repo, department_repo, user_repo, company_role_repo)


async def get_cascade_service(
    company_repo: Annotated[
        CompanyRepository, Depends(db_deps.get_company_repo_for_write)
    ],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo_for_write)
    ],
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo_for_write)],
    task_repo: Annotated[TaskRepository, Depends(db_deps.get_task_repo_for_write)],
    objective_repo: Annotated[
        ObjectiveRepository, Depends(db_deps.get_objective_repo_for_write)
    ],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo_for_write)
    ],
    token_service: Annotated[TokenService, Depends(get_token_service_for_write)],
) -> CascadeService:
    """Cascade coordinator; all steps run on the request's transactional session."""
    return CascadeService(
        company_repo,
        department_repo,
        role_repo,
        task_repo,
        objective_repo,
        company_role_repo,
        token_service,
    )


async def get_company_service(
    company_repo: Annotated[CompanyRepository, Depends(db_deps.get_company_repo)],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo)
    ],
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo)
    ],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> CompanyService:
    """Company service for reads."""
    return CompanyService(
        company_repo, department_repo, role_repo, company_role_repo, token_service
    )


async def get_company_service_for_write(
    company_repo: Annotated[
        CompanyRepository, Depends(db_deps.get_company_repo_for_write)
    ],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo_for_write)
    ],
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo_for_write)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo_for_write)
    ],
    token_service: Annotated[TokenService, Depends(get_token_service_for_write)],
) -> CompanyService:
    """Company service for writes (transactional)."""
    return CompanyService(
        company_repo, department_repo, role_repo, company_role_repo, token_service
    )


async def get_department_service(
    company_repo: Annotated[CompanyRepository, Depends(db_deps.get_company_repo)],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo)
    ],
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo)
    ],
) -> DepartmentService:
    return DepartmentService(company_repo, department_repo, role_repo, company_role_repo)


async def get_department_service_for_write(
    company_repo: Annotated[
        CompanyRepository, Depends(db_deps.get_company_repo_for_write)
    ],
    department_repo: Annotated[
        DepartmentRepository, Depends(db_deps.get_department_repo_for_write)
    ],
    role_repo: Annotated[RoleRepository, Depends(db_deps.get_role_repo_for_write)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo_for_write)
    ],
) -> DepartmentService:
    return DepartmentService(company_repo, department_repo, role_repo, company_role_repo)


async def get_task_service(
    task_repo: Annotated[TaskRepository, Depends(db_deps.get_task_repo)],
    storage: Annotated[IObjectStorage, Depends(get_object_storage)],
) -> TaskService:
    settings = get_settings()
    return TaskService(
        task_repo,
        storage,
        presigned_url_ttl_seconds=settings.presigned_url_ttl_seconds,
        max_parallel_uploads=settings.max_parallel_uploads,
    )


async def get_task_service_for_write(
    task_repo: Annotated[TaskRepository, Depends(db_deps.get_task_repo_for_write)],
    storage: Annotated[IObjectStorage, Depends(get_object_storage)],
) -> TaskService:
    settings = get_settings()
    return TaskService(
        task_repo,
        storage,
        presigned_url_ttl_seconds=settings.presigned_url_ttl_seconds,
        max_parallel_uploads=settings.max_parallel_uploads,
    )


async def get_objective_service(
    objective_repo: Annotated[ObjectiveRepository, Depends(db_deps.get_objective_repo)],
) -> ObjectiveService:
    return ObjectiveService(objective_repo)


async def get_objective_service_for_write(
    objective_repo: Annotated[
        ObjectiveRepository, Depends(db_deps.get_objective_repo_for_write)
    ],
) -> ObjectiveService:
    return ObjectiveService(objective_repo)


async def get_user_service(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo)
    ],
    storage: Annotated[IObjectStorage, Depends(get_object_storage)],
) -> UserService:
    return UserService(
        user_repo,
        company_role_repo,
        storage,
        presigned_url_ttl_seconds=get_settings().presigned_url_ttl_seconds,
    )


async def get_user_service_for_write(
    user_repo: Annotated[UserRepository, Depends(db_deps.get_user_repo_for_write)],
    company_role_repo: Annotated[
        CompanyRoleRepository, Depends(db_deps.get_company_role_repo_for_write)
    ],
    storage: Annotated[IObjectStorage, Depends(get_object_storage)],
) -> UserService:
    return UserService(
        user_repo,
        company_role_repo,
        storage,
        presigned_url_ttl_seconds=get_settings().presigned_url_ttl_seconds,
    )
