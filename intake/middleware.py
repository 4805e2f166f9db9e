# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP Middleware: request ID propagation, access log, Prometheus metrics.
"""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from intake.core.logging import get_logger
from intake.metrics import REQUEST_COUNT, REQUEST_LATENCY, HTTP_ERRORS

logger = get_logger("intake.access")

ROUTE_SEGMENTS: set[str] = {
    "api", "contact", "demo", "meetings", "schedule", "status",
    "services", "statistics", "user", "health", "ready", "metrics",
}

UNTRACKED_PATHS: tuple[str, ...] = (
    "/api/health", "/api/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc",
)


def route_template(path: str) -> str:
    """Collapse ids in a path so metric label cardinality stays bounded."""
    parts = path.strip("/").split("/")
    if parts == [""]:
        return path
    return "/" + "/".join(p if p in ROUTE_SEGMENTS else "{id}" for p in parts)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate or generate X-Request-ID and write one access-log line per request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        if request.url.path not in UNTRACKED_PATHS:
            logger.info(
                "%s %s -> %d (%.1f ms)",
                request.method, request.url.path, response.status_code,
                (time.perf_counter() - start) * 1000,
                extra={"request_id": request_id},
            )
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Track request count, latency, and error rate via Prometheus."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        if request.url.path in UNTRACKED_PATHS:
            return response

        endpoint = route_template(request.url.path)
        status = str(response.status_code)
        REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(duration)
        if response.status_code >= 400:
            HTTP_ERRORS.labels(method=request.method, endpoint=endpoint, status=status).inc()
        return response
