"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /api/health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class ReadinessResponse(BaseModel):
    """Response for GET /api/health/ready."""

    status: str = Field(default="ok", description="Readiness status")
    privileged_access: bool = Field(
        ..., description="Whether the service account is configured (admin endpoints usable)"
    )
