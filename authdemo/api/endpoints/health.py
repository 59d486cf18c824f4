"""Health check endpoints. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter, Request

from authdemo.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(request: Request) -> ReadinessResponse:
    """Always 200; reports whether privileged Firebase access is configured."""
    return ReadinessResponse(
        privileged_access=getattr(request.app.state, "firebase", None) is not None
    )
