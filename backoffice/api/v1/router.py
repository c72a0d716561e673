"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from backoffice.api.v1.dependencies.
"""

from fastapi import APIRouter

from backoffice.api.v1.endpoints import applications, health, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(applications.router, prefix="/applications", tags=["applications"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
