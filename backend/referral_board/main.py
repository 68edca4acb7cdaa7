"""
Referral Board API - Main Application Entry Point

This module initializes the FastAPI application with:
- Database connection and schema initialization
- Background cleanup of expired rejected referrals
- CORS, request logging and Prometheus middleware
- Error handlers mapping domain errors to JSON responses
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup/shutdown)
    ├── Middleware (CORS, request logging, metrics)
    └── API Router (/api)
        ├── /users - Registration
        ├── /auth - Login and current user
        ├── /profile - Own profile
        ├── /jobs - Job postings
        └── /referrals - Referral workflow and cleanup sweeps
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from referral_board.api import api_router
from referral_board.config import get_settings
from referral_board.database import init_db
from referral_board.errors import ReferralBoardError
from referral_board.middleware import RequestLoggingMiddleware, configure_logging, setup_metrics
from referral_board.scheduler import CleanupScheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Initialize database tables
        2. Start the rejected-referral cleanup scheduler (runs once
           immediately, then hourly) unless disabled in settings

    Shutdown:
        1. Stop the scheduler
    """
    settings = get_settings()
    await init_db()

    cleanup = CleanupScheduler(settings=settings)
    if settings.cleanup_enabled:
        cleanup.start()
    app.state.cleanup_scheduler = cleanup
    yield
    cleanup.stop()


async def handle_domain_error(request: Request, exc: ReferralBoardError):
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        msg = f"Invalid value for {field}: {first.get('msg')}" if field else first.get("msg")
    else:
        msg = "Invalid request"
    return JSONResponse(status_code=400, content={"msg": msg})


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and request.url.path.startswith("/api/"):
        msg = f"Route not found: {request.method} {request.url.path}"
    else:
        msg = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"msg": msg}, headers=getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = {"msg": "Server Error"}
    if get_settings().expose_error_details:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Referral Board API",
        description="Job seekers post jobs, employers send referrals",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    setup_metrics(app)

    app.add_exception_handler(ReferralBoardError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
