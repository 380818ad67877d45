"""Domain enumerations for Cascade.

Enums represent fixed sets of domain values (role levels, plans, priorities).
Values are stored as strings in the database and exposed as-is in the API.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WebAppRole(_ValuesMixin, str, Enum):
    """Application-wide role of a user (independent of any company)."""

    WEB_APP_ADMIN = "WEB_APP_ADMIN"
    CUSTOMER_SUPPORT = "CUSTOMER_SUPPORT"
    USER = "USER"


class HierarchyLevel(_ValuesMixin, str, Enum):
    """Rank of a role inside a company, highest first.

    Used for coarse access gating; not a numeric order in the data.
    """

    COMPANY_ADMIN = "COMPANY_ADMIN"
    TOP_LEVEL_MANAGER = "TOP_LEVEL_MANAGER"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class SubscriptionPlan(_ValuesMixin, str, Enum):
    """Company subscription plan."""

    FREE = "FREE"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class Priority(_ValuesMixin, str, Enum):
    """Priority of a task or objective."""

    VERY_HIGH = "VERY_HIGH"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    VERY_LOW = "VERY_LOW"


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    BLOCKED = "BLOCKED"


# Allow-lists for role-gated routes.
TASK_MANAGEMENT_LEVELS = frozenset(
    {
        HierarchyLevel.MANAGER,
        HierarchyLevel.TOP_LEVEL_MANAGER,
        HierarchyLevel.COMPANY_ADMIN,
    }
)
OBJECTIVE_MANAGEMENT_LEVELS = frozenset(
    {HierarchyLevel.TOP_LEVEL_MANAGER, HierarchyLevel.COMPANY_ADMIN}
)
