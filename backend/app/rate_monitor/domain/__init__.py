# Domain layer - pure business rules, no framework dependencies

from app.rate_monitor.domain.entities.notification_record import (
    ConditionTag,
    NotificationRecord,
)
from app.rate_monitor.domain.value_objects.rate_reading import RateReading
from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig

__all__ = [
    "ConditionTag",
    "NotificationRecord",
    "RateReading",
    "ThresholdConfig",
]
