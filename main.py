# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Lead Intake Service
===================
Backend for the company marketing site: accepts contact enquiries, demo
bookings and meeting requests from the public, persists them, sends best-effort
email notices, and gives staff an API-key-protected admin surface for triage,
user accounts and per-service statistics.

Every response uses the envelope ``{status, message?, data?, errors?}``.

Port: 5000
"""
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from intake.controllers import (
    contact_controller,
    demo_controller,
    meeting_controller,
    service_controller,
    system_controller,
    user_controller,
)
from intake.core.config import Settings, settings
from intake.core.database import Database
from intake.core.dependencies import build_container, close_container
from intake.core.errors import IntakeError
from intake.core.logging import get_logger
from intake.middleware import MetricsMiddleware, RequestIDMiddleware
from intake.schemas import failure
from intake.services.notifier import Notifier
from intake.services.validation import violations_from

logger = get_logger(__name__)


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def create_app(config: Settings = settings, database: Optional[Database] = None,
               notifier: Optional[Notifier] = None) -> FastAPI:
    """Build the application. ``database`` and ``notifier`` are injectable for tests."""

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        application.state.container = build_container(config, database=database, notifier=notifier)
        logger.info("%s v%s started (env=%s)",
                    config.SERVICE_NAME, config.SERVICE_VERSION, config.ENVIRONMENT)
        yield
        close_container(application.state.container)
        logger.info("%s stopped", config.SERVICE_NAME)

    application = FastAPI(
        title=f"{config.COMPANY_NAME} Lead Intake",
        version=config.SERVICE_VERSION,
        lifespan=lifespan,
    )
    application.state.settings = config

    # Middleware (order matters: last added = first executed)
    application.add_middleware(MetricsMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ──
    @application.exception_handler(IntakeError)
    async def intake_error_handler(request: Request, exc: IntakeError):
        if exc.status_code >= 500:
            logger.error("%s: %s", type(exc).__name__, exc.message,
                         extra={"request_id": _request_id(request)})
        return JSONResponse(status_code=exc.status_code, content=failure(exc.message, exc.errors()))

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [{"field": v.field, "reason": v.reason} for v in violations_from(exc.errors())]
        return JSONResponse(status_code=400, content=failure("Validation failed", errors))

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = f"Route {request.url.path} not found"
        else:
            message = str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content=failure(message),
                            headers=getattr(exc, "headers", None))

    @application.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception", extra={"request_id": _request_id(request)})
        extra = {}
        if config.DEBUG:
            extra = {
                "error": str(exc),
                "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            }
        return JSONResponse(status_code=500, content=failure("Internal server error", **extra))

    # ── Routers ──
    application.include_router(system_controller.router)
    application.include_router(contact_controller.router)
    application.include_router(demo_controller.router)
    application.include_router(meeting_controller.router)
    application.include_router(service_controller.router)
    application.include_router(user_controller.router)

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=5000, reload=settings.DEBUG)
