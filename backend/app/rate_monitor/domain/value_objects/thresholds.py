"""Threshold configuration value object."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ThresholdConfig:
    """Upper and lower bounds of the acceptable rate range.

    Attributes:
        upper: Rates strictly above this value trigger an alert.
        lower: Rates strictly below this value trigger an alert.
    """

    upper: Decimal
    lower: Decimal

    def __post_init__(self) -> None:
        """Validate that the bounds form a non-empty range."""
        if self.lower >= self.upper:
            raise ValueError(
                f"Lower threshold ({self.lower}) must be less than "
                f"upper threshold ({self.upper})"
            )

    def contains(self, rate: Decimal) -> bool:
        """Check if a rate lies inside the range, bounds included."""
        return self.lower <= rate <= self.upper
