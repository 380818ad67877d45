"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.company import CompanyResult, DepartmentResult
    from app.application.dtos.objective import ObjectiveResult
    from app.application.dtos.role import RoleResult
    from app.application.dtos.task import TaskResult
    from app.application.dtos.user import (
        CompanyRoleResult,
        StoredRefreshToken,
        UserResult,
    )


class IUserRepository(Protocol):
    """Protocol for the user (credential store) repository."""

    async def get_by_email(self, email: str) -> Any:
        """Return the user row for email, or None."""

    async def get_result(self, user_id: str) -> UserResult | None:
        """Return the user read-model, or None."""

    async def get_result_by_email(self, email: str) -> UserResult | None:
        """Return the user read-model for email, or None."""

    async def exists(self, user_id: str) -> bool:
        """Return True if a user with this id exists."""

    async def check_password(self, user: Any, password: str) -> bool:
        """Verify a plaintext password against the user's stored hash."""

    async def create_user(
        self, first_name: str, last_name: str, email: str, password: str
    ) -> UserResult:
        """Create a user; raise UserAlreadyExistsException on duplicate email."""

    async def update_profile(
        self, user_id: str, changes: dict[str, Any]
    ) -> UserResult | None:
        """Apply profile changes; None when the user does not exist."""

    async def set_image(self, user_id: str, image: str) -> int:
        """Set the profile image key; return matched rows."""

    async def get_refresh_token(self, user_id: str) -> StoredRefreshToken | None:
        """Return stored refresh token and expiry; None when the user does not exist."""

    async def set_refresh_token(
        self, user_id: str, token: str | None, expires_at: datetime | None
    ) -> int:
        """Write or clear refresh token fields; return matched rows."""

    async def delete_user(self, user_id: str) -> bool:
        """Delete the user; False when absent."""


class ICompanyRoleRepository(Protocol):
    """Protocol for user membership (company role) storage."""

    async def list_for_user(self, user_id: str) -> list[CompanyRoleResult]:
        """Return memberships of the user in insertion order."""

    async def has_membership(self, user_id: str, role_id: str) -> bool:
        """Return True if the user already holds role_id."""

    async def add(
        self, user_id: str, company_id: str, department_id: str | None, role_id: str
    ) -> CompanyRoleResult:
        """Append a membership."""

    async def user_ids_for_roles(self, role_ids: Iterable[str]) -> dict[str, list[str]]:
        """Map role id to the users holding it."""

    async def remove_for_role(
        self, role_id: str, user_ids: Iterable[str] | None = None
    ) -> int:
        """Remove memberships for role_id (optionally restricted to user_ids)."""

    async def remove_for_user_in_company(self, user_id: str, company_id: str) -> int:
        """Remove all of a user's memberships in a company."""

    async def remove_for_user(self, user_id: str) -> int:
        """Remove all memberships of a user."""

    async def set_department_for_roles(
        self, role_ids: Iterable[str], department_id: str | None
    ) -> int:
        """Set or unset department_id on memberships for these roles."""


class ICompanyRepository(Protocol):
    """Protocol for company storage (with denormalized department list)."""

    async def get_result(self, company_id: str) -> CompanyResult | None:
        """Return company read-model or None."""

    async def list_results(self, company_ids: Iterable[str]) -> list[CompanyResult]:
        """Return companies for the given ids."""

    async def create_company(
        self, name: str, subscription_plan: str | None = None
    ) -> CompanyResult:
        """Create a company with an empty department list."""

    async def update_company(
        self, company_id: str, changes: dict[str, Any]
    ) -> CompanyResult | None:
        """Update name/subscription plan; None when absent."""

    async def add_department_entry(
        self, company_id: str, department_id: str, department_name: str
    ) -> bool:
        """Append {department_id, department_name} to the company list."""

    async def rename_department_entry(
        self, company_id: str, department_id: str, department_name: str
    ) -> bool:
        """Rename a department in the company list."""

    async def remove_department_entry(self, company_id: str, department_id: str) -> bool:
        """Remove a department from the company list."""

    async def delete_company(self, company_id: str) -> bool:
        """Delete the company row."""


class IDepartmentRepository(Protocol):
    """Protocol for department storage."""

    async def get_result(self, department_id: str) -> DepartmentResult | None:
        """Return department read-model (with role ids) or None."""

    async def get_in_company(
        self, company_id: str, department_id: str
    ) -> DepartmentResult | None:
        """Return the department only if it belongs to company_id."""

    async def list_for_company(self, company_id: str) -> list[DepartmentResult]:
        """Return all departments of a company."""

    async def ids_for_company(self, company_id: str) -> list[str]:
        """Return department ids of a company."""

    async def create_department(self, company_id: str, name: str) -> DepartmentResult:
        """Create a department."""

    async def rename(self, department_id: str, name: str) -> bool:
        """Rename a department."""

    async def delete_by_ids(self, entity_ids: Iterable[str]) -> int:
        """Delete departments by id."""


class IRoleRepository(Protocol):
    """Protocol for role storage and supervision edges."""

    async def get_result(self, role_id: str) -> RoleResult | None:
        """Return role read-model with edges and users, or None."""

    async def get_in_department(self, department_id: str, role_id: str) -> Any:
        """Return the role row if it is homed in department_id."""

    async def list_for_department(self, department_id: str) -> list[RoleResult]:
        """Return roles of a department."""

    async def levels_for(self, role_ids: Iterable[str]) -> dict[str, str]:
        """Map role id to hierarchy level for existing roles."""

    async def existing_ids(self, role_ids: Iterable[str]) -> set[str]:
        """Return the subset of role_ids that exist."""

    async def ids_in_company(self, role_ids: Iterable[str], company_id: str) -> set[str]:
        """Return the subset of role_ids homed in a department of company_id."""

    async def ids_for_departments(self, department_ids: Iterable[str]) -> list[str]:
        """Return ids of roles homed in any of the departments."""

    async def create_role(self, department_id: str, fields: dict[str, Any]) -> Any:
        """Create a role row."""

    async def apply_fields(self, role: Any, fields: dict[str, Any]) -> Any:
        """Apply scalar fields to a role row."""

    async def move_to_department(self, role_ids: Iterable[str], department_id: str) -> int:
        """Re-home roles into a department."""

    async def supervised_ids(self, role_id: str) -> set[str]:
        """Ids of roles supervised by role_id."""

    async def supervisor_ids(self, role_id: str) -> set[str]:
        """Ids of roles supervising role_id."""

    async def add_supervision(self, supervisor_id: str, supervised_id: str) -> bool:
        """Add an edge if absent."""

    async def remove_supervision(self, supervisor_id: str, supervised_id: str) -> int:
        """Remove an edge."""

    async def delete_roles(self, role_ids: Iterable[str]) -> int:
        """Delete roles and all their edges."""


class ITaskRepository(Protocol):
    """Protocol for task storage."""

    async def get_result(self, task_id: str) -> TaskResult | None:
        """Return task read-model or None."""

    async def list_for_role(self, role_id: str) -> list[TaskResult]:
        """Return tasks owned by or assigned to role_id."""

    async def get_owned(self, role_id: str, task_id: str) -> Any:
        """Return the task row if owned by role_id."""

    async def create_task(
        self,
        owner_role_id: str,
        fields: dict[str, Any],
        assigned_role_ids: list[str] | None = None,
    ) -> TaskResult:
        """Create a task."""

    async def update_task(
        self,
        task: Any,
        fields: dict[str, Any],
        assigned_role_ids: list[str] | None = None,
    ) -> TaskResult:
        """Update a task row."""

    async def set_file_list(self, task_id: str, field: str, names: list[str]) -> None:
        """Replace task_resources or task_outputs."""

    async def delete_with_links(self, record_ids: Iterable[str]) -> int:
        """Delete tasks and their assignment links."""

    async def delete_touching_roles(self, role_ids: Iterable[str]) -> int:
        """Delete tasks whose owner or any assignee is in role_ids."""


class IObjectiveRepository(Protocol):
    """Protocol for objective storage."""

    async def get_result(self, objective_id: str) -> ObjectiveResult | None:
        """Return objective read-model or None."""

    async def list_for_role(self, role_id: str) -> list[ObjectiveResult]:
        """Return objectives owned by or assigned to role_id."""

    async def get_owned(self, role_id: str, objective_id: str) -> Any:
        """Return the objective row if owned by role_id."""

    async def create_objective(
        self,
        owner_role_id: str,
        fields: dict[str, Any],
        assigned_role_ids: list[str] | None = None,
    ) -> ObjectiveResult:
        """Create an objective."""

    async def update_objective(
        self,
        objective: Any,
        fields: dict[str, Any],
        assigned_role_ids: list[str] | None = None,
    ) -> ObjectiveResult:
        """Update an objective row."""

    async def delete_with_links(self, record_ids: Iterable[str]) -> int:
        """Delete objectives and their assignment links."""

    async def delete_touching_roles(self, role_ids: Iterable[str]) -> int:
        """Delete objectives whose owner or any assignee is in role_ids."""
