"""Data Transfer Objects for check cycle results and monitor status.

These DTOs describe what a check cycle did and are exposed through the
status endpoint. They are decoupled from domain entities and optimized for
JSON serialization.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.rate_monitor.domain.entities.notification_record import ConditionTag


class DispatchOutcome(Enum):
    """Result of handing a threshold breach to the alert dispatcher."""

    SENT = "sent"
    SENT_AFTER_RETRY = "sent_after_retry"
    SUPPRESSED = "suppressed"

    @property
    def delivered(self) -> bool:
        return self is not DispatchOutcome.SUPPRESSED


class CycleStatus(Enum):
    """How a single check cycle ended."""

    NO_DATA = "no_data"
    WITHIN_RANGE = "within_range"
    SENT = "sent"
    SUPPRESSED = "suppressed"
    DELIVERY_FAILED = "delivery_failed"
    ERROR = "error"


class CheckResultDTO(BaseModel):
    """Summary of one fetch -> evaluate -> dispatch pass."""

    model_config = ConfigDict(
        json_encoders={Decimal: lambda v: float(v)},
    )

    status: CycleStatus = Field(description="How the cycle ended")
    started_at: datetime = Field(description="When the cycle started (UTC)")
    finished_at: datetime = Field(description="When the cycle finished (UTC)")
    pair: Optional[str] = Field(default=None, description="Currency pair, e.g. 'EUR/CNY'")
    rate: Optional[Decimal] = Field(default=None, description="Observed conversion rate")
    condition: Optional[ConditionTag] = Field(default=None, description="Breached threshold, if any")
    message: Optional[str] = Field(default=None, description="Human-readable outcome")
    error: Optional[str] = Field(default=None, description="Error detail for failed cycles")


class NotificationRecordDTO(BaseModel):
    """A live cooldown record."""

    condition: ConditionTag = Field(description="Threshold the alert was about")
    sent_at: datetime = Field(description="When the alert was delivered (UTC)")
    cooldown_ends_at: datetime = Field(description="When another alert becomes possible (UTC)")


class MonitorStatusDTO(BaseModel):
    """Current monitor configuration and state for the status endpoint."""

    model_config = ConfigDict(
        json_encoders={Decimal: lambda v: float(v)},
    )

    running: bool = Field(description="Whether periodic checks are scheduled")
    pair: str = Field(description="Monitored currency pair")
    upper_threshold: Decimal = Field(description="Upper bound of the acceptable range")
    lower_threshold: Decimal = Field(description="Lower bound of the acceptable range")
    polling_interval_hours: int = Field(description="Hours between scheduled checks")
    cooldown_minutes: int = Field(description="Minimum minutes between alerts per condition")
    last_check: Optional[CheckResultDTO] = Field(default=None, description="Most recent cycle result")
    notifications: list[NotificationRecordDTO] = Field(
        default_factory=list,
        description="Conditions currently in cooldown"
    )
