"""Time source abstraction so cooldown logic can be driven by tests."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current timezone-aware time."""
        ...


class SystemClock(Clock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
