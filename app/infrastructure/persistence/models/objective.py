"""Objective ORM model and its assigned-role link table."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import Priority
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel, values_check


class Objective(EntityModel, Base):
    """Objective owned by a role. Table: objective.

    KPIs, milestones and goal progress are JSON lists of plain objects.
    """

    __tablename__ = "objective"

    owner_role_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    objective_kpis: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    milestones: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    goal_progress: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    objective_start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    objective_due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    accountable_departments: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    priority: Mapped[str] = mapped_column(
        String(16), nullable=False, default=Priority.MEDIUM.value
    )
    objective_resources: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    objective_documents: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    recent_comments: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    feedbacks: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (values_check("priority", Priority.values(), "objective_priority_check"),)


class ObjectiveAssignedRole(Base):
    """Role an objective is assigned to. Table: objective_assigned_role."""

    __tablename__ = "objective_assigned_role"

    objective_id: Mapped[str] = mapped_column(
        String, ForeignKey("objective.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
