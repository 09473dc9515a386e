"""Pytest configuration and fixtures.

This file sets up the Python path so tests can import from the backend package,
and provides a controllable clock for cooldown and scheduling tests.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add backend directory to Python path for imports
backend_path = Path(__file__).parent / "backend"
sys.path.insert(0, str(backend_path))

from app.rate_monitor.domain.services.clock import Clock  # noqa: E402


class FakeClock(Clock):
    """Clock that only moves when a test advances it."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a fake clock starting at a fixed UTC time."""
    return FakeClock(datetime(2026, 1, 15, 12, 30, tzinfo=timezone.utc))
