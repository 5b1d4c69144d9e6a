"""
Registration Service - FastAPI Application

Account registration over HTTP:
- Create, edit, delete, fetch and list registrations
- Prometheus metrics at /metrics
- Liveness/readiness probes
"""

import logging
import structlog
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from mud import __version__
from mud.api.middleware import AccessControlMiddleware, RequestIDMiddleware
from mud.api.routes import health
from mud.config import get_settings
from mud.db.client import close_db, init_db
from mud.kernel.http.errors import register_exception_handlers
from mud.kernel.http.responses import JSONUTF8Response
from mud.monitoring.metrics import Metrics, get_metrics
from mud.registration import build_registration_service
from mud.registration.repository import SqlRegistrationRepository
from mud.registration.service import RegistrationService
from mud.registration.transport import make_router

# Map log level string to logging constant
_LOG_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _get_log_level() -> int:
    """Get numeric log level from settings."""
    level_str = get_settings().log_level.lower()
    return _LOG_LEVEL_MAP.get(level_str, logging.INFO)


def configure_logging() -> None:
    """Configure structured logging."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer()
            if get_settings().log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_get_log_level()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()

logger = structlog.get_logger()


def create_app(
    service: RegistrationService | None = None,
    *,
    metrics: Metrics | None = None,
) -> FastAPI:
    """
    Build the application.

    Without an explicit `service`, the standard decorated service is built on
    the SQL repository and the lifespan owns the database pool.
    """
    settings = get_settings()
    metrics = metrics or get_metrics()
    owns_database = service is None

    if service is None:
        repository = SqlRegistrationRepository(page_size=settings.registration_page_size)
        service = build_registration_service(repository, metrics=metrics)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan - startup and shutdown."""
        logger.info(
            "Starting registration service",
            version=__version__,
            environment=settings.environment,
        )
        if owns_database:
            await init_db()

        yield

        logger.info("Shutting down registration service")
        if owns_database:
            await close_db()

    app = FastAPI(
        title="Registration API",
        description="Account registration service",
        version=__version__,
        lifespan=lifespan,
        default_response_class=JSONUTF8Response,
    )

    register_exception_handlers(app)

    # Order matters - last added runs first.
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(AccessControlMiddleware, allow_origin=settings.cors_allow_origin)

    @app.get("/metrics", include_in_schema=False)
    async def prometheus_metrics() -> Response:
        """Prometheus text exposition of the service metrics."""
        return Response(generate_latest(metrics.registry), media_type=CONTENT_TYPE_LATEST)

    app.include_router(health.router, tags=["Health"])
    app.include_router(make_router(service))

    return app


app = create_app()
