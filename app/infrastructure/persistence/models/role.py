"""Role and supervision-edge ORM models."""

from sqlalchemy import JSON, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import HierarchyLevel
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    EntityModel,
    TimestampMixin,
    values_check,
)


class Role(EntityModel, Base):
    """Role node in a department's hierarchy. Table: role.

    supervises / supervised_by are not columns: both are read from
    role_supervision so the two directions cannot disagree.
    """

    __tablename__ = "role"

    department_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    user_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    hierarchy_level: Mapped[str] = mapped_column(String, nullable=False)
    job_title: Mapped[str] = mapped_column(String, nullable=False)
    job_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        values_check("hierarchy_level", HierarchyLevel.values(), "role_hierarchy_level_check"),
    )


class RoleSupervision(TimestampMixin, Base):
    """Directed edge: supervisor_role_id supervises supervised_role_id. Table: role_supervision.

    Primary key on the pair; the secondary index serves "who supervises me".
    """

    __tablename__ = "role_supervision"

    supervisor_role_id: Mapped[str] = mapped_column(String, primary_key=True)
    supervised_role_id: Mapped[str] = mapped_column(String, primary_key=True)

    __table_args__ = (Index("ix_role_supervision_supervised", "supervised_role_id"),)
