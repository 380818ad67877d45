"""Application DTOs (no ORM dependency)."""

from app.application.dtos.auth import (
    AuthPayload,
    RefreshResult,
    RefreshToken,
    TokenPair,
)
from app.application.dtos.company import (
    CompanyCreationResult,
    CompanyDeletionResult,
    CompanyResult,
    DepartmentResult,
)
from app.application.dtos.objective import ObjectiveResult, RoleObjectives
from app.application.dtos.role import RoleCreate, RoleResult
from app.application.dtos.task import FileUpload, RoleTasks, TaskResult
from app.application.dtos.user import CompanyRoleResult, StoredRefreshToken, UserResult

__all__ = [
    "AuthPayload",
    "CompanyCreationResult",
    "CompanyDeletionResult",
    "CompanyResult",
    "CompanyRoleResult",
    "DepartmentResult",
    "FileUpload",
    "ObjectiveResult",
    "RefreshResult",
    "RefreshToken",
    "RoleCreate",
    "RoleObjectives",
    "RoleResult",
    "RoleTasks",
    "StoredRefreshToken",
    "TaskResult",
    "TokenPair",
    "UserResult",
]
