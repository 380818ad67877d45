"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    companies,
    health,
    objectives,
    roles,
    storage,
    tasks,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(roles.router, prefix="/departments", tags=["roles"])
api_router.include_router(tasks.router, prefix="/roles", tags=["tasks"])
api_router.include_router(objectives.router, prefix="/roles", tags=["objectives"])
api_router.include_router(storage.router, prefix="/storage", tags=["storage"])
