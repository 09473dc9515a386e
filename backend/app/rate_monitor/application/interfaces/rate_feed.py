"""Rate feed interface for fetching the current exchange rate."""

from abc import ABC, abstractmethod
from typing import Optional

from app.rate_monitor.domain.value_objects.rate_reading import RateReading


class RateFeed(ABC):
    """Abstract base class for exchange rate providers.

    Implementations must enforce their own request timeout and must never
    raise for expected failures: any transport, HTTP, or parsing problem is
    reported by returning None.
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the name of the data provider."""
        ...

    @abstractmethod
    async def fetch_current_rate(self) -> Optional[RateReading]:
        """Fetch the latest rate for the configured currency pair.

        Returns:
            A RateReading, or None if no usable data could be obtained.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
