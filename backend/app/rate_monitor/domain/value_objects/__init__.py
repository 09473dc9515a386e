"""Domain value objects for the rate monitor.

This module exports immutable value objects used throughout the domain layer:
- RateReading: One observed exchange rate for a currency pair
- ThresholdConfig: Upper/lower bounds of the acceptable rate range
"""

from app.rate_monitor.domain.value_objects.rate_reading import RateReading
from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig

__all__ = ["RateReading", "ThresholdConfig"]
