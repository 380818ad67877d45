"""Tests for domain enums and read-model helpers."""

from app.application.dtos.auth import AuthPayload
from app.application.dtos.task import TaskResult
from app.application.dtos.user import CompanyRoleResult
from app.domain.enums import (
    OBJECTIVE_MANAGEMENT_LEVELS,
    TASK_MANAGEMENT_LEVELS,
    HierarchyLevel,
    SubscriptionPlan,
    WebAppRole,
)


class TestEnums:
    def test_hierarchy_levels(self) -> None:
        assert HierarchyLevel.values() == [
            "COMPANY_ADMIN",
            "TOP_LEVEL_MANAGER",
            "MANAGER",
            "EMPLOYEE",
        ]

    def test_employees_cannot_manage(self) -> None:
        assert HierarchyLevel.EMPLOYEE not in TASK_MANAGEMENT_LEVELS
        assert HierarchyLevel.MANAGER not in OBJECTIVE_MANAGEMENT_LEVELS
        assert OBJECTIVE_MANAGEMENT_LEVELS < TASK_MANAGEMENT_LEVELS

    def test_str_values(self) -> None:
        assert SubscriptionPlan.FREE == "FREE"
        assert WebAppRole.values() == ["WEB_APP_ADMIN", "CUSTOMER_SUPPORT", "USER"]


class TestAuthPayload:
    def test_from_claims_skips_malformed_entries(self) -> None:
        payload = AuthPayload.from_claims(
            {
                "user_id": "u1",
                "web_app_role": "USER",
                "company_roles": [
                    {"company_id": "c1", "department_id": "d1", "role_id": "r1"},
                    "garbage",
                ],
            }
        )
        assert payload.company_roles == (CompanyRoleResult("c1", "d1", "r1"),)

    def test_memberships_in(self) -> None:
        payload = AuthPayload(
            user_id="u1",
            web_app_role="USER",
            company_roles=(
                CompanyRoleResult("c1", "d1", "r1"),
                CompanyRoleResult("c2", None, "r2"),
            ),
        )
        assert [m.role_id for m in payload.memberships_in("c2")] == ["r2"]
        assert payload.has_role("r1")
        assert not payload.has_role("r3")


class TestTaskVisibility:
    def test_owner_and_assignees_see_task(self) -> None:
        task = TaskResult(
            id="t1",
            owner_role_id="r1",
            assigned_role_ids=("r2",),
            objective_id=None,
            title="Ship",
            description=None,
        )
        assert task.is_visible_to("r1")
        assert task.is_visible_to("r2")
        assert not task.is_visible_to("r3")
