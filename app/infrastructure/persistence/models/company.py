"""Company and department ORM models."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import SubscriptionPlan
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel, values_check


class Company(EntityModel, Base):
    """Company (tenant root). Table: company.

    company_departments is a denormalized list of
    {"department_id", "department_name"} kept in sync by the department
    service. JSON columns are reassigned, never mutated in place.
    """

    __tablename__ = "company"

    name: Mapped[str] = mapped_column(String, nullable=False)
    subscription_plan: Mapped[str] = mapped_column(
        String, nullable=False, default=SubscriptionPlan.FREE.value
    )
    company_departments: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )

    __table_args__ = (
        values_check(
            "subscription_plan", SubscriptionPlan.values(), "company_subscription_plan_check"
        ),
    )


class Department(EntityModel, Base):
    """Department of a company. Table: department.

    Its roles are the Role rows whose department_id points here.
    """

    __tablename__ = "department"

    company_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
