"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class CompanyRoleResponse(BaseModel):
    """One membership of a user."""

    model_config = ConfigDict(from_attributes=True)

    company_id: str
    department_id: str | None
    role_id: str


class UserUpdate(BaseModel):
    """Request body for updating the current user (partial)."""

    first_name: str | None = Field(default=None, min_length=1, max_length=50)
    last_name: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8)


class UserResponse(BaseModel):
    """User response (no password or refresh token)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    web_app_role: str
    image: str
    company_roles: list[CompanyRoleResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserSearchResponse(BaseModel):
    """Public subset returned by GET /users/search."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    image: str


class ImageUrlResponse(BaseModel):
    """Presigned URL of a user's profile image."""

    url: str
