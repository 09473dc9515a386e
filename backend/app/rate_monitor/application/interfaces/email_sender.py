"""Email ports: message composition and delivery."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from app.rate_monitor.domain.entities.notification_record import ConditionTag
from app.rate_monitor.domain.value_objects.rate_reading import RateReading
from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig


@dataclass(frozen=True)
class EmailMessage:
    """A fully rendered email ready for delivery.

    Attributes:
        subject: Subject line.
        html_body: HTML alternative of the body.
        text_body: Plain-text alternative of the body.
    """

    subject: str
    html_body: str
    text_body: str


class AlertComposer(ABC):
    """Builds the alert email for a threshold breach."""

    @abstractmethod
    def compose(
        self,
        reading: RateReading,
        condition: ConditionTag,
        thresholds: ThresholdConfig,
        detected_at: datetime,
    ) -> EmailMessage:
        """Render the alert for a reading.

        Args:
            reading: The rate that breached a threshold.
            condition: Which threshold was breached.
            thresholds: Configured bounds (the breached one is shown).
            detected_at: When the breach was detected, not when the
                provider updated the rate.

        Returns:
            The rendered EmailMessage.
        """
        ...


class EmailSender(ABC):
    """Delivers rendered emails to the configured recipient."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> bool:
        """Deliver a message.

        Returns:
            True if the provider accepted the message, False otherwise.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
