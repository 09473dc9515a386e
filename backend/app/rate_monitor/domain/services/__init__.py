"""Domain services implementing core business rules.

These are pure domain services with no infrastructure dependencies:
- ThresholdEvaluator / ThresholdDecision: Threshold breach detection
- NotificationCache: Per-condition notification cooldown
- Clock / SystemClock: Injectable time source
"""

from app.rate_monitor.domain.services.clock import Clock, SystemClock
from app.rate_monitor.domain.services.notification_cache import NotificationCache
from app.rate_monitor.domain.services.threshold_evaluator import (
    ThresholdDecision,
    ThresholdEvaluator,
)

__all__ = [
    "Clock",
    "NotificationCache",
    "SystemClock",
    "ThresholdDecision",
    "ThresholdEvaluator",
]
