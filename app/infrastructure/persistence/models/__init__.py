"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata.
"""

from app.infrastructure.persistence.models.company import Company, Department
from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    EntityModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.objective import (
    Objective,
    ObjectiveAssignedRole,
)
from app.infrastructure.persistence.models.role import Role, RoleSupervision
from app.infrastructure.persistence.models.task import Task, TaskAssignedRole
from app.infrastructure.persistence.models.user import CompanyRole, User

__all__ = [
    "Company",
    "CompanyRole",
    "CuidMixin",
    "Department",
    "EntityModel",
    "Objective",
    "ObjectiveAssignedRole",
    "Role",
    "RoleSupervision",
    "Task",
    "TaskAssignedRole",
    "TimestampMixin",
    "User",
]
