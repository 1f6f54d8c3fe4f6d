# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from app.dependencies import SettingsDep
from app.responses import envelope_model, handle_service_response
from core.models.service_response import ServiceResponse

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class ChecksResponse(BaseModel):
    """Individual component checks."""
    store: str
    record_count: int


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    environment: str
    version: str
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=envelope_model("HealthResponse", None))
async def health_check():
    """
    Health check endpoint.

    Returns the standard envelope with "Service is healthy".
    """
    return handle_service_response(ServiceResponse.succeed("Service is healthy", None))


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request, app_settings: SettingsDep):
    """
    Readiness check endpoint.

    Ready once the seed data has been loaded into the store.
    """
    store = getattr(request.app.state, "store", None)

    checks = ChecksResponse(
        store="healthy" if store is not None else "not loaded",
        record_count=len(store) if store is not None else 0,
    )

    return ReadinessResponse(
        status="ready" if store is not None else "starting",
        checks=checks,
        environment=app_settings.ENVIRONMENT,
        version=API_VERSION,
        timestamp=_now(),
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    Used by Kubernetes/Docker for restart decisions.
    """
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
