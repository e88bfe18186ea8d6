"""Tests for request interval calculation."""

import pytest

from aerotrack.core.timing import (
    UNKNOWN_SIZE,
    RequestTimingContext,
    build_report,
    compute_intervals,
)

MS = 1_000_000


def test_intervals_with_body_write() -> None:
    """Test processing and transmission split the total at the first write."""
    ctx = RequestTimingContext(
        arrival=0,
        received_at_ms=0,
        processing_start=0,
        first_write=30 * MS,
        completion=50 * MS,
    )

    total, processing, transmission = compute_intervals(ctx)

    assert total == 50.0
    assert processing == 30.0
    assert transmission == 20.0
    assert total == processing + transmission


def test_intervals_without_body_write() -> None:
    """Test processing absorbs the total when nothing was written."""
    ctx = RequestTimingContext(
        arrival=0,
        received_at_ms=0,
        processing_start=MS,
        completion=25 * MS,
    )

    total, processing, transmission = compute_intervals(ctx)

    assert total == 25.0
    assert processing == total
    assert transmission == 0.0


def test_intervals_without_processing_start() -> None:
    """Test a missing processing start falls back to the total."""
    ctx = RequestTimingContext(
        arrival=0,
        received_at_ms=0,
        first_write=5 * MS,
        completion=10 * MS,
    )

    assert compute_intervals(ctx) == (10.0, 10.0, 0.0)


def test_intervals_never_negative() -> None:
    """Test out-of-order instants are clamped to zero."""
    ctx = RequestTimingContext(
        arrival=10 * MS,
        received_at_ms=0,
        processing_start=10 * MS,
        first_write=12 * MS,
        completion=5 * MS,
    )

    total, processing, transmission = compute_intervals(ctx)

    assert total == 0.0
    assert processing == 2.0
    assert transmission == 0.0


def test_intervals_require_completion() -> None:
    """Test computing intervals of an unfinished request fails."""
    ctx = RequestTimingContext(arrival=0, received_at_ms=0, processing_start=0)

    assert not ctx.is_complete
    with pytest.raises(ValueError):
        compute_intervals(ctx)


def test_build_report() -> None:
    """Test report carries durations and response metadata."""
    ctx = RequestTimingContext(
        arrival=0,
        received_at_ms=0,
        processing_start=0,
        first_write=4 * MS,
        completion=6 * MS,
    )

    report = build_report(ctx, method="POST", path="/api/aircraft", status_code=201)

    assert report.total_ms == 6.0
    assert report.processing_ms == 4.0
    assert report.transmission_ms == 2.0
    assert report.method == "POST"
    assert report.path == "/api/aircraft"
    assert report.status_code == 201
    assert report.response_size == UNKNOWN_SIZE
