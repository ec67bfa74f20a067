"""Health check and metrics endpoints."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel

from classica.config import Settings, get_settings
from classica.infrastructure.database import ping_db
from classica.infrastructure.telemetry import get_logger

logger = get_logger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    version: str
    environment: str
    checks: dict[str, Any]


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    checks: dict[str, bool]


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Basic health check endpoint.

    Reports configured collaborators without calling them.
    Use /ready for a dependency check.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC).isoformat(),
        version=settings.version,
        environment=settings.environment,
        checks={
            "generation_configured": bool(settings.openai_api_key),
            "speech_configured": bool(settings.elevenlabs_api_key),
        },
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Readiness check endpoint: verifies the database is reachable."""
    checks: dict[str, bool] = {}

    try:
        checks["database"] = await ping_db()
    except Exception as e:
        logger.warning("Database readiness check failed", extra={"error": str(e)})
        checks["database"] = False

    return ReadinessResponse(ready=all(checks.values()), checks=checks)


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """Liveness probe endpoint."""
    return {"status": "alive"}


@router.get("/metrics")
async def metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
