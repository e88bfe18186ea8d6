"""Registrar for FastAPI application setup."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from aerotrack.api.system import router as system_router
from aerotrack.core.config import Environment, Settings, get_settings
from aerotrack.core.errors import http_error_handler, validation_error_handler
from aerotrack.core.middleware import (
    RequestTimingMiddleware,
    TimingHeadersMiddleware,
    setup_cors,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan manager for startup and shutdown events.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting %s %s (%s)",
        settings.PROJECT_NAME,
        settings.PROJECT_VERSION,
        settings.ENVIRONMENT.value,
    )
    try:
        yield
    finally:
        logger.info("Shutting down %s", settings.PROJECT_NAME)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Application settings, defaults to the cached environment settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    is_production = settings.ENVIRONMENT == Environment.PRODUCTION

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        description=settings.PROJECT_DESCRIPTION,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_exception_handlers(app)
    register_routers(app)
    register_middleware(app, settings)

    return app


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware.

    Args:
        app: FastAPI application
        settings: Application settings

    Note:
        Middleware is applied in reverse order, so the first middleware registered
        will be the last to run, and the last middleware registered will be the
        first to run.

        Order of execution (first to last):
        1. Request Timing (log line)
        2. Timing Headers (headers)
        3. CORS (cross-origin)
    """
    setup_cors(app, settings)
    if settings.TIMING_HEADERS_ENABLED:
        app.add_middleware(TimingHeadersMiddleware)
    if settings.TIMING_LOG_ENABLED:
        app.add_middleware(
            RequestTimingMiddleware,
            use_colors=settings.TIMING_LOG_COLORS,
        )


def register_routers(app: FastAPI) -> None:
    """Register API routers.

    Args:
        app: FastAPI application
    """
    app.include_router(system_router)


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
