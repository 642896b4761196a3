"""
FastAPI application entry point.

Uses structured logging from core.logging and the shared database manager
from core.db.
"""

import os

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.db import db
from core.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import profile as profile_router

settings = get_settings()
log_level = "DEBUG" if settings.debug else "INFO"
configure_logging(level=log_level)
logger = get_logger("api")


def _is_production() -> bool:
    return os.getenv("ENV", "development").lower() in ("production", "prod")


def validate_config_on_startup() -> None:
    """Log configuration warnings; refuse to start on errors in production."""
    errors, warnings = settings.validate_production_config()
    for warning in warnings:
        logger.warning("config_warning", message=warning)

    if not errors:
        return
    for error in errors:
        logger.error("config_error", error=error)
    if _is_production():
        raise RuntimeError("Invalid configuration for production: " + "; ".join(errors))


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Accept-Encoding",
            "Origin",
            "X-Requested-With",
            "X-Auth-Token",
            "X-Request-ID",
        ],
        expose_headers=["X-Request-ID"],
    )

    # GZip compression for responses > 500 bytes
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Request ID middleware (for tracing)
    app.add_middleware(RequestIDMiddleware)

    # Structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize services on startup."""
        logger.info("app_startup", app_name=settings.app_name)

        validate_config_on_startup()

        db.initialize(settings.database_url)
        db.create_all_tables()
        logger.info("database_initialized")

        health = db.health_check()
        if not health["healthy"]:
            logger.error("database_unreachable", error=health["error"])
            raise RuntimeError("Database unreachable. Check DATABASE_URL.")
        logger.info("database_health_check_passed", latency_ms=health["latency_ms"])

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown."""
        logger.info("app_shutdown")

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness probe.

        Returns 200 when the database answers, 503 otherwise.
        """
        health = db.health_check()
        checks = {"database": health["healthy"]}
        if not health["healthy"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )
        return {"status": "ready", "checks": checks}

    app.include_router(profile_router.router, prefix=settings.api_prefix)

    return app


app = create_app()
