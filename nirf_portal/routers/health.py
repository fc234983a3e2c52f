"""
Health Check Router - NIRF Submission Portal
nirf_portal/routers/health.py

The scoring engine has no external dependencies, so health reports the
service identity plus a smoke-test scoring of an empty snapshot.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from nirf_portal.config import get_settings
from nirf_portal.core.dependencies import get_scoring_engine
from nirf_portal.models.metrics import InstitutionMetrics

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    dependencies: Dict[str, str]


def check_scoring_engine() -> str:
    """An all-zero snapshot must score exactly 0."""
    try:
        result = get_scoring_engine().score(InstitutionMetrics())
    except Exception as e:
        return f"unhealthy: {e}"
    return "healthy" if result.final_score == 0 else "unhealthy: non-zero empty score"


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health_check():
    settings = get_settings()
    engine_status = check_scoring_engine()
    healthy = engine_status == "healthy"

    body = HealthResponse(
        status="healthy" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        dependencies={"scoring_engine": engine_status},
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json"),
    )
