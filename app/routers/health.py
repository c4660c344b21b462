# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# Mounted under /api/v1, which the access gate leaves open.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.config import settings
from core.services.storage_service import AVATARS_BUCKET, CITY_IMAGES_BUCKET, POST_IMAGES_BUCKET
from lib.supabase_client import SupabaseClient

router = APIRouter()

REQUIRED_BUCKETS = (AVATARS_BUCKET, POST_IMAGES_BUCKET, CITY_IMAGES_BUCKET)


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str = "unknown"
    storage: str = "unknown"
    missing_buckets: list[str] = Field(default_factory=list)


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version="1.0.0",
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Checks that the `cities` table answers and that the image buckets
    (avatars, post-images, city-images) exist.
    """
    checks = ChecksResponse()

    try:
        client = SupabaseClient.get_client()
        client.table("cities").select("id").limit(1).execute()
        checks.database = "healthy"
    except Exception as e:
        checks.database = f"unhealthy: {str(e)[:50]}"

    try:
        client = SupabaseClient.get_client()
        bucket_names = {getattr(b, "name", None) or getattr(b, "id", None) for b in client.storage.list_buckets()}
        checks.missing_buckets = [b for b in REQUIRED_BUCKETS if b not in bucket_names]
        checks.storage = "healthy" if not checks.missing_buckets else "missing buckets"
    except Exception as e:
        checks.storage = f"unhealthy: {str(e)[:50]}"

    all_healthy = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Liveness check; the process answers, nothing else is checked."""
    return LivenessResponse(status="alive", timestamp=_now())
