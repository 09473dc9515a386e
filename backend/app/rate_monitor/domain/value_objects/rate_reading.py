"""Rate reading value object for a single observed exchange rate."""

import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True)
class RateReading:
    """Immutable snapshot of one currency pair rate as returned by a rate feed.

    Attributes:
        base_currency: ISO 4217 code of the base currency (e.g., "EUR").
        target_currency: ISO 4217 code of the target currency (e.g., "CNY").
        conversion_rate: Units of target currency per one unit of base currency.
        observed_at: When the provider last updated the rate.
        source: Name of the data provider.
    """

    base_currency: str
    target_currency: str
    conversion_rate: Decimal
    observed_at: datetime
    source: str

    def __post_init__(self) -> None:
        """Validate currency codes and rate after initialization."""
        for code in (self.base_currency, self.target_currency):
            if not CURRENCY_CODE_PATTERN.match(code):
                raise ValueError(f"Invalid currency code: {code!r}")
        if self.conversion_rate <= 0:
            raise ValueError("Conversion rate must be positive")

    @property
    def pair(self) -> str:
        """Return the pair in BASE/TARGET notation."""
        return f"{self.base_currency}/{self.target_currency}"

    def __str__(self) -> str:
        return f"{self.pair} {self.conversion_rate:.4f}"
