"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status

from backend.app.core.config import Settings, get_settings
from backend.app.core.exceptions import BadFixtureError
from backend.app.schemas.network import HealthResponse, ReadinessResponse
from backend.app.services.base_data_store import load_base_snapshot

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic liveness check."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        service=settings.app_name,
        version=settings.app_version,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(response: Response, settings: Settings = Depends(get_settings)):
    """
    Readiness check - verify the base data fixture can be loaded.
    Every data endpoint depends on it, so a broken fixture means not ready.
    """
    health_status = ReadinessResponse(status="ready", checks={"base_data": "unknown"})

    try:
        load_base_snapshot(settings.data_path)
        health_status.checks["base_data"] = "ok"
    except BadFixtureError as e:
        health_status.checks["base_data"] = f"failed: {e}"
        health_status.status = "not_ready"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return health_status
