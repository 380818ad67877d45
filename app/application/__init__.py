"""Application layer: interfaces, DTOs and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, storage).
"""

from app.application.interfaces import (
    IAccessTokenIssuer,
    ICompanyRepository,
    ICompanyRoleRepository,
    IDepartmentRepository,
    IObjectiveRepository,
    IObjectStorage,
    IRoleRepository,
    ITaskRepository,
    IUserRepository,
)

__all__ = [
    "IAccessTokenIssuer",
    "ICompanyRepository",
    "ICompanyRoleRepository",
    "IDepartmentRepository",
    "IObjectStorage",
    "IObjectiveRepository",
    "IRoleRepository",
    "ITaskRepository",
    "IUserRepository",
]
