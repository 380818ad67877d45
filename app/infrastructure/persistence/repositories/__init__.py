"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.company_repo import CompanyRepository
from app.infrastructure.persistence.repositories.company_role_repo import (
    CompanyRoleRepository,
)
from app.infrastructure.persistence.repositories.department_repo import (
    DepartmentRepository,
)
from app.infrastructure.persistence.repositories.objective_repo import (
    ObjectiveRepository,
)
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.role_scoped_repo import (
    RoleScopedRepository,
)
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "CompanyRoleRepository",
    "DepartmentRepository",
    "ObjectiveRepository",
    "RoleRepository",
    "RoleScopedRepository",
    "TaskRepository",
    "UserRepository",
]
