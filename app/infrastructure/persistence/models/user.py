"""User and company-role membership ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import DEFAULT_USER_IMAGE
from app.domain.enums import WebAppRole
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel, values_check


class User(EntityModel, Base):
    """User model. Table: app_user. Email is unique across the application.

    Holds the single active refresh token (value + expiry); issuing a new one
    overwrites the previous pair.
    """

    __tablename__ = "app_user"

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    web_app_role: Mapped[str] = mapped_column(
        String, nullable=False, default=WebAppRole.USER.value
    )
    image: Mapped[str] = mapped_column(
        String, nullable=False, default=DEFAULT_USER_IMAGE
    )
    refresh_token: Mapped[str | None] = mapped_column(String, nullable=True)
    refresh_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        values_check("web_app_role", WebAppRole.values(), "app_user_web_app_role_check"),
    )


class CompanyRole(EntityModel, Base):
    """Membership of a user in a company through a role. Table: company_role.

    Ordered by created_at. company_id/department_id/role_id are plain
    references (integrity enforced by services); department_id is nulled
    when the department is deleted.
    """

    __tablename__ = "company_role"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    company_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    department_id: Mapped[str | None] = mapped_column(String, nullable=True)
    role_id: Mapped[str] = mapped_column(String, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("user_id", "company_id", "role_id", name="uq_company_role_membership"),
        Index("ix_company_role_user_created", "user_id", "created_at"),
    )
