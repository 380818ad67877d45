"""Repository dependencies (composition root).

get_x_repo uses the read session; get_x_repo_for_write uses the request's
transactional session, which FastAPI caches per request so every write
repository of one request shares a single unit of work.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    CompanyRepository,
    CompanyRoleRepository,
    DepartmentRepository,
    ObjectiveRepository,
    RoleRepository,
    TaskRepository,
    UserRepository,
)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


async def get_user_repo(db: ReadSession) -> UserRepository:
    """User repository for read operations."""
    return UserRepository(db)


async def get_user_repo_for_write(db: WriteSession) -> UserRepository:
    """User repository for writes (transactional)."""
    return UserRepository(db)


async def get_company_role_repo(db: ReadSession) -> CompanyRoleRepository:
    return CompanyRoleRepository(db)


async def get_company_role_repo_for_write(db: WriteSession) -> CompanyRoleRepository:
    return CompanyRoleRepository(db)


async def get_company_repo(db: ReadSession) -> CompanyRepository:
    return CompanyRepository(db)


async def get_company_repo_for_write(db: WriteSession) -> CompanyRepository:
    return CompanyRepository(db)


async def get_department_repo(db: ReadSession) -> DepartmentRepository:
    return DepartmentRepository(db)


async def get_department_repo_for_write(db: WriteSession) -> DepartmentRepository:
    return DepartmentRepository(db)


async def get_role_repo(db: ReadSession) -> RoleRepository:
    return RoleRepository(db)


async def get_role_repo_for_write(db: WriteSession) -> RoleRepository:
    return RoleRepository(db)


async def get_task_repo(db: ReadSession) -> TaskRepository:
    return TaskRepository(db)


async def get_task_repo_for_write(db: WriteSession) -> TaskRepository:
    return TaskRepository(db)


async def get_objective_repo(db: ReadSession) -> ObjectiveRepository:
    return ObjectiveRepository(db)


async def get_objective_repo_for_write(db: WriteSession) -> ObjectiveRepository:
    return ObjectiveRepository(db)
