"""Presentation-layer dependency injection (composition root).

Routes import their Depends() targets from here only; repositories, storage
and application services are assembled in the submodules.
"""

from app.api.v1.dependencies.access import (
    get_access_control_service,
    require_company_admin,
    require_objective_manager,
    require_role_level,
    require_role_member,
    require_task_manager,
)
from app.api.v1.dependencies.auth import (
    get_auth_payload,
    get_auth_service,
    get_bearer_token,
    get_token_service,
    get_token_service_for_write,
    parse_bearer,
    payload_from_token,
)
from app.api.v1.dependencies.db import (
    get_company_repo,
    get_company_repo_for_write,
    get_company_role_repo,
    get_company_role_repo_for_write,
    get_department_repo,
    get_department_repo_for_write,
    get_objective_repo,
    get_objective_repo_for_write,
    get_role_repo,
    get_role_repo_for_write,
    get_task_repo,
    get_task_repo_for_write,
    get_user_repo,
    get_user_repo_for_write,
)
from app.api.v1.dependencies.services import (
    get_cascade_service,
    get_company_service,
    get_company_service_for_write,
    get_department_service,
    get_department_service_for_write,
    get_hierarchy_service,
    get_hierarchy_service_for_write,
    get_object_storage,
    get_objective_service,
    get_objective_service_for_write,
    get_task_service,
    get_task_service_for_write,
    get_user_service,
    get_user_service_for_write,
)

__all__ = [
    "get_access_control_service",
    "get_auth_payload",
    "get_auth_service",
    "get_bearer_token",
    "get_cascade_service",
    "get_company_repo",
    "get_company_repo_for_write",
    "get_company_role_repo",
    "get_company_role_repo_for_write",
    "get_company_service",
    "get_company_service_for_write",
    "get_department_repo",
    "get_department_repo_for_write",
    "get_department_service",
    "get_department_service_for_write",
    "get_hierarchy_service",
    "get_hierarchy_service_for_write",
    "get_object_storage",
    "get_objective_repo",
    "get_objective_repo_for_write",
    "get_objective_service",
    "get_objective_service_for_write",
    "get_role_repo",
    "get_role_repo_for_write",
    "get_task_repo",
    "get_task_repo_for_write",
    "get_task_service",
    "get_task_service_for_write",
    "get_token_service",
    "get_token_service_for_write",
    "get_user_repo",
    "get_user_repo_for_write",
    "get_user_service",
    "get_user_service_for_write",
    "parse_bearer",
    "payload_from_token",
    "require_company_admin",
    "require_objective_manager",
    "require_role_level",
    "require_role_member",
    "require_task_manager",
]
