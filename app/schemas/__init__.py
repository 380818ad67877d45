"""API request/response schemas."""

from app.schemas.auth import LoginRequest, RegisterRequest
from app.schemas.common import AccessTokenData, EmptyData, Envelope, ErrorEnvelope
from app.schemas.company import (
    CompanyCreatedResponse,
    CompanyCreateRequest,
    CompanyDeletedResponse,
    CompanyResponse,
    CompanyUpdate,
    DepartmentCreateRequest,
    DepartmentResponse,
    DepartmentUpdate,
)
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.objective import (
    ObjectiveCreateRequest,
    ObjectiveResponse,
    ObjectiveUpdate,
    RoleObjectivesResponse,
)
from app.schemas.role import RoleCreateRequest, RoleResponse, RoleUpdate
from app.schemas.task import (
    FileUrlResponse,
    RoleTasksResponse,
    TaskCreateRequest,
    TaskFilesResponse,
    TaskResponse,
    TaskUpdate,
)
from app.schemas.user import (
    CompanyRoleResponse,
    ImageUrlResponse,
    UserResponse,
    UserSearchResponse,
    UserUpdate,
)

__all__ = [
    "AccessTokenData",
    "CompanyCreateRequest",
    "CompanyCreatedResponse",
    "CompanyDeletedResponse",
    "CompanyResponse",
    "CompanyRoleResponse",
    "CompanyUpdate",
    "DepartmentCreateRequest",
    "DepartmentResponse",
    "DepartmentUpdate",
    "EmptyData",
    "Envelope",
    "ErrorEnvelope",
    "FileUrlResponse",
    "HealthResponse",
    "ImageUrlResponse",
    "LoginRequest",
    "ObjectiveCreateRequest",
    "ObjectiveResponse",
    "ObjectiveUpdate",
    "ReadinessResponse",
    "RegisterRequest",
    "RoleCreateRequest",
    "RoleObjectivesResponse",
    "RoleResponse",
    "RoleTasksResponse",
    "RoleUpdate",
    "TaskCreateRequest",
    "TaskFilesResponse",
    "TaskResponse",
    "TaskUpdate",
    "UserResponse",
    "UserSearchResponse",
    "UserUpdate",
]
