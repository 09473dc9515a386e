"""Application layer - use cases and orchestration.

This layer contains:
- DTOs: Check cycle results and monitor status
- Interfaces: Ports for the rate feed, email composer and email sender
- Use Cases: Alert dispatch with cooldown and retry
- Exceptions: Application-level error types
"""

from app.rate_monitor.application.dto import (
    CheckResultDTO,
    CycleStatus,
    DispatchOutcome,
    MonitorStatusDTO,
    NotificationRecordDTO,
)
from app.rate_monitor.application.exceptions import (
    AlertDeliveryError,
    ApplicationError,
    InvalidPollingIntervalError,
)
from app.rate_monitor.application.use_cases import AlertDispatcher

__all__ = [
    # DTOs
    "CheckResultDTO",
    "CycleStatus",
    "DispatchOutcome",
    "MonitorStatusDTO",
    "NotificationRecordDTO",
    # Use Cases
    "AlertDispatcher",
    # Exceptions
    "ApplicationError",
    "AlertDeliveryError",
    "InvalidPollingIntervalError",
]
