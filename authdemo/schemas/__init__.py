"""Pydantic request/response schemas for the API."""

from authdemo.schemas.admin import AdminActionResponse, ManagedUserResponse
from authdemo.schemas.health import HealthResponse, ReadinessResponse
from authdemo.schemas.profile import (
    MeResponse,
    PhotoUploadPlanRequest,
    PhotoUploadPlanResponse,
    ProfileResponse,
    ProfileUpdate,
    SettingsUpdate,
)

__all__ = [
    "AdminActionResponse",
    "HealthResponse",
    "ManagedUserResponse",
    "MeResponse",
    "PhotoUploadPlanRequest",
    "PhotoUploadPlanResponse",
    "ProfileResponse",
    "ProfileUpdate",
    "ReadinessResponse",
    "SettingsUpdate",
]
