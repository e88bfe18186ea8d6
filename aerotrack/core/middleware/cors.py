"""CORS configuration for the browser UI."""

from typing import Final

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aerotrack.core.config import Environment, Settings
from aerotrack.core.middleware.response_time import TIMING_HEADERS

CORS_MAX_AGE: Final[int] = 3600


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware, exposing the timing headers to browsers."""
    assert settings.CORS_ORIGINS, "CORS origins must be configured"
    if settings.ENVIRONMENT == Environment.PRODUCTION:
        assert all(origin.startswith("https://") for origin in settings.CORS_ORIGINS), (
            "CORS origins must use HTTPS in production"
        )
    assert settings.CORS_ALLOW_METHODS, "CORS methods must be configured"
    assert settings.CORS_ALLOW_HEADERS, "CORS headers must be configured"

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
        max_age=CORS_MAX_AGE,
        expose_headers=list(TIMING_HEADERS),
    )
