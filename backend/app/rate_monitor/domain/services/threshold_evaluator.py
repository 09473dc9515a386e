"""Threshold evaluator domain service.

Decides whether an observed rate warrants a notification:
- Rate strictly above the upper bound -> notify ABOVE_UPPER
- Rate strictly below the lower bound -> notify BELOW_LOWER
- Anything else, bounds included -> no action
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from app.rate_monitor.domain.entities.notification_record import ConditionTag
from app.rate_monitor.domain.value_objects.rate_reading import RateReading
from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig


@dataclass(frozen=True)
class ThresholdDecision:
    """Outcome of evaluating one rate reading.

    Attributes:
        should_notify: Whether a threshold was breached.
        condition: Which threshold was breached (None when no action).
        message: Human-readable description of the breach.
    """

    should_notify: bool
    condition: Optional[ConditionTag] = None
    message: Optional[str] = None

    @classmethod
    def no_action(cls) -> "ThresholdDecision":
        return cls(should_notify=False)

    @classmethod
    def notify(cls, condition: ConditionTag, message: str) -> "ThresholdDecision":
        return cls(should_notify=True, condition=condition, message=message)


class ThresholdEvaluator:
    """Pure domain service mapping a rate reading to a notification decision.

    Holds no state and performs no I/O. Relies on ``ThresholdConfig``
    guaranteeing ``lower < upper``.
    """

    def evaluate(
        self,
        reading: RateReading,
        thresholds: ThresholdConfig,
    ) -> ThresholdDecision:
        """Evaluate a reading against the configured bounds.

        Equality to either bound counts as within range; only strict
        inequality triggers a notification.

        Args:
            reading: The observed rate.
            thresholds: The acceptable range.

        Returns:
            A ThresholdDecision describing whether and why to notify.
        """
        rate = reading.conversion_rate

        if thresholds.contains(rate):
            return ThresholdDecision.no_action()

        if rate > thresholds.upper:
            return ThresholdDecision.notify(
                ConditionTag.ABOVE_UPPER,
                self._format_message(reading, ConditionTag.ABOVE_UPPER, thresholds),
            )

        return ThresholdDecision.notify(
            ConditionTag.BELOW_LOWER,
            self._format_message(reading, ConditionTag.BELOW_LOWER, thresholds),
        )

    @staticmethod
    def breached_threshold(condition: ConditionTag, thresholds: ThresholdConfig) -> Decimal:
        """Return the bound that the given condition refers to."""
        if condition is ConditionTag.ABOVE_UPPER:
            return thresholds.upper
        return thresholds.lower

    def _format_message(
        self,
        reading: RateReading,
        condition: ConditionTag,
        thresholds: ThresholdConfig,
    ) -> str:
        threshold = self.breached_threshold(condition, thresholds)
        return (
            f"{reading.pair} rate {reading.conversion_rate:.4f} is "
            f"{condition.label} {threshold:.4f}"
        )
