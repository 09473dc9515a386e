"""Domain entities for the rate monitor.

This module exports the core business entities used throughout the domain layer.
"""

from app.rate_monitor.domain.entities.notification_record import (
    ConditionTag,
    NotificationRecord,
)

__all__ = ["ConditionTag", "NotificationRecord"]
