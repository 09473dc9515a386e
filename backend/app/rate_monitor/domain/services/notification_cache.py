"""In-memory notification cooldown tracking.

Records when an alert was last delivered for each threshold condition and
answers whether another alert for the same condition may be sent yet.
State lives only for the lifetime of the process.
"""

from typing import Optional

from app.rate_monitor.domain.entities.notification_record import (
    ConditionTag,
    NotificationRecord,
)
from app.rate_monitor.domain.services.clock import Clock, SystemClock


class NotificationCache:
    """Cooldown-aware record of the last notification per condition.

    Each condition has at most one record. Conditions never affect each
    other: recording ``ABOVE_UPPER`` leaves ``BELOW_LOWER`` untouched.

    Attributes:
        _records: Latest notification record keyed by condition.
        _clock: Time source used for every age computation.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        """Initialize an empty cache.

        Args:
            clock: Time source (defaults to the UTC system clock).
        """
        self._records: dict[ConditionTag, NotificationRecord] = {}
        self._clock = clock or SystemClock()

    def can_send(self, condition: ConditionTag, cooldown_minutes: float) -> bool:
        """Check if a notification for the condition is allowed right now.

        Args:
            condition: The breached threshold.
            cooldown_minutes: Minimum minutes between two notifications
                for the same condition.

        Returns:
            True if nothing was sent yet for the condition, or if at least
            ``cooldown_minutes`` have elapsed since the last send.
        """
        record = self._records.get(condition)
        if record is None:
            return True
        return record.is_expired(self._clock.now(), cooldown_minutes)

    def record(self, condition: ConditionTag) -> NotificationRecord:
        """Mark a notification for the condition as sent now.

        Overwrites any previous record, restarting that condition's cooldown.
        """
        notification = NotificationRecord(condition=condition, sent_at=self._clock.now())
        self._records[condition] = notification
        return notification

    def cleanup(self, cooldown_minutes: float) -> int:
        """Drop records whose cooldown has elapsed.

        Args:
            cooldown_minutes: Cooldown window in minutes.

        Returns:
            Number of records removed.
        """
        now = self._clock.now()
        expired = [
            condition
            for condition, record in self._records.items()
            if record.is_expired(now, cooldown_minutes)
        ]
        for condition in expired:
            del self._records[condition]
        return len(expired)

    def get(self, condition: ConditionTag) -> Optional[NotificationRecord]:
        """Return the current record for a condition, if any."""
        return self._records.get(condition)

    def records(self) -> list[NotificationRecord]:
        """Return all live records."""
        return list(self._records.values())

    def size(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()
