"""Data transfer objects for application layer."""

from app.rate_monitor.application.dto.check_dto import (
    CheckResultDTO,
    CycleStatus,
    DispatchOutcome,
    MonitorStatusDTO,
    NotificationRecordDTO,
)

__all__ = [
    "CheckResultDTO",
    "CycleStatus",
    "DispatchOutcome",
    "MonitorStatusDTO",
    "NotificationRecordDTO",
]
