"""Notification record entity tracking the last alert sent per condition."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class ConditionTag(Enum):
    """Which threshold a rate has breached."""

    ABOVE_UPPER = "above_upper"
    BELOW_LOWER = "below_lower"

    @property
    def label(self) -> str:
        """Human-readable description used in messages and emails."""
        if self is ConditionTag.ABOVE_UPPER:
            return "above upper threshold"
        return "below lower threshold"


@dataclass
class NotificationRecord:
    """When a notification for a given condition was last delivered.

    Attributes:
        condition: The breached threshold the notification was about.
        sent_at: Timestamp of the successful delivery.
    """

    condition: ConditionTag
    sent_at: datetime

    def age(self, now: datetime) -> timedelta:
        """Time elapsed since the notification was sent."""
        return now - self.sent_at

    def is_expired(self, now: datetime, cooldown_minutes: float) -> bool:
        """Check if the cooldown window has fully elapsed.

        The boundary is inclusive: a record exactly ``cooldown_minutes`` old
        is expired.
        """
        return self.age(now) >= timedelta(minutes=cooldown_minutes)
