"""Application services: tokens, access control, hierarchy, cascades and resources."""

from app.application.services.access_control import AccessControlService
from app.application.services.auth_service import AuthService
from app.application.services.cascade_service import CascadeService
from app.application.services.company_service import CompanyService
from app.application.services.department_service import DepartmentService
from app.application.services.hierarchy_service import HierarchyService
from app.application.services.objective_service import ObjectiveService
from app.application.services.task_service import TaskService
from app.application.services.token_service import TokenService
from app.application.services.user_service import UserService

__all__ = [
    "AccessControlService",
    "AuthService",
    "CascadeService",
    "CompanyService",
    "DepartmentService",
    "HierarchyService",
    "ObjectiveService",
    "TaskService",
    "TokenService",
    "UserService",
]
