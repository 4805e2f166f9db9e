# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints: health, readiness, metrics."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import JSONResponse, Response

from intake.core.dependencies import Container, get_container, get_settings
from intake.core.logging import get_logger
from intake.schemas import failure, success

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/api/health")
def health_check(request: Request):
    config = get_settings(request)
    return success(
        {
            "service": config.SERVICE_NAME,
            "version": config.SERVICE_VERSION,
            "environment": config.ENVIRONMENT,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        f"{config.COMPANY_NAME} API is running",
    )


@router.get("/api/health/ready")
def readiness_check(container: Container = Depends(get_container)):
    try:
        container.database.verify_connection()
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(status_code=503, content=failure("Database unavailable"))
    return success({"database": "connected"})


@router.get("/metrics")
def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
