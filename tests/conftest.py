"""Test configuration and fixtures."""

from collections.abc import AsyncGenerator

import httpx
import pytest
from fastapi import FastAPI

from aerotrack.core.config import Settings
from aerotrack.core.registrar import create_app
from aerotrack.core.timing import RequestTimingContext


class FakeClock:
    """Deterministic clock advanced manually by tests."""

    def __init__(self, start_ns: int = 1_000_000_000, wall_ms: int = 1_700_000_000_000) -> None:
        self.ns = start_ns
        self.wall_ms = wall_ms

    def now(self) -> int:
        return self.ns

    def timestamp_ms(self) -> int:
        return self.wall_ms

    def advance(self, ms: float) -> None:
        self.ns += int(ms * 1_000_000)
        self.wall_ms += int(ms)


class RecordingSend:
    """ASGI send callable collecting every message it receives."""

    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)


@pytest.fixture
def clock() -> FakeClock:
    """Create a deterministic clock."""
    return FakeClock()


@pytest.fixture
def recording_send() -> RecordingSend:
    """Create a recording ASGI send callable."""
    return RecordingSend()


@pytest.fixture
def timing_context(clock: FakeClock) -> RequestTimingContext:
    """Create a timing context for a request arriving now."""
    return RequestTimingContext(
        arrival=clock.now(),
        received_at_ms=clock.timestamp_ms(),
        processing_start=clock.now(),
    )


@pytest.fixture
def test_settings() -> Settings:
    """Create settings independent of the environment."""
    return Settings(
        ENVIRONMENT="development",
        TIMING_LOG_COLORS=False,
        CORS_ORIGINS=["http://localhost:3000"],
    )


@pytest.fixture
def test_app(test_settings: Settings) -> FastAPI:
    """Create a test FastAPI application."""
    return create_app(test_settings)


@pytest.fixture
async def test_client(test_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    """Create test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=test_app),
        base_url="http://test",
    ) as client:
        yield client
