"""Task ORM model and its assigned-role link table."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import Priority, TaskStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel, values_check


class Task(EntityModel, Base):
    """Task owned by a role and optionally assigned to other roles. Table: task.

    task_resources / task_outputs hold file names; the object key is
    "{task_id}/{file_name}".
    """

    __tablename__ = "task"

    owner_role_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    objective_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    task_rubric: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    priority: Mapped[str] = mapped_column(
        String(16), nullable=False, default=Priority.MEDIUM.value
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=TaskStatus.NOT_STARTED.value
    )
    task_resources: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    task_outputs: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    recent_comments: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    feedbacks: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        values_check("priority", Priority.values(), "task_priority_check"),
        values_check("status", TaskStatus.values(), "task_status_check"),
    )


class TaskAssignedRole(Base):
    """Role a task is assigned to. Table: task_assigned_role."""

    __tablename__ = "task_assigned_role"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[str] = mapped_column(String, primary_key=True, index=True)
