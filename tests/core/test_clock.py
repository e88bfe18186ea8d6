"""Tests for timing clock sources."""

import time

from aerotrack.core.clock import SystemClock, elapsed_ms


def test_system_clock_is_monotonic() -> None:
    """Test successive instants never decrease."""
    clock = SystemClock()
    instants = [clock.now() for _ in range(100)]
    assert instants == sorted(instants)


def test_system_clock_timestamp_is_wall_clock_ms() -> None:
    """Test wall-clock timestamp is close to time.time in milliseconds."""
    clock = SystemClock()
    assert abs(clock.timestamp_ms() - int(time.time() * 1000)) < 1000


def test_elapsed_ms_converts_nanoseconds() -> None:
    """Test elapsed time is reported in fractional milliseconds."""
    assert elapsed_ms(0, 1_500_000) == 1.5
    assert elapsed_ms(10, 10) == 0.0


def test_elapsed_ms_clamps_inverted_instants() -> None:
    """Test a clock anomaly never yields a negative duration."""
    assert elapsed_ms(2_000_000, 1_000_000) == 0.0
