"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    ICompanyRepository,
    ICompanyRoleRepository,
    IDepartmentRepository,
    IObjectiveRepository,
    IRoleRepository,
    ITaskRepository,
    IUserRepository,
)
from app.application.interfaces.services import IAccessTokenIssuer, IObjectStorage

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
