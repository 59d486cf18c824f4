"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from authdemo.api.dependencies.
"""

from fastapi import APIRouter

from authdemo.api.endpoints import admin, health, me

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(me.router, prefix="/me", tags=["me"])
