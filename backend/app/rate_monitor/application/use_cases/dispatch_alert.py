"""Use case for delivering a threshold alert.

Implements alert dispatch by orchestrating:
- Cooldown gating via NotificationCache
- Message rendering via AlertComposer
- Delivery via EmailSender with a single fixed-delay retry
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from app.rate_monitor.application.dto.check_dto import DispatchOutcome
from app.rate_monitor.application.exceptions import AlertDeliveryError
from app.rate_monitor.application.interfaces.email_sender import (
    AlertComposer,
    EmailMessage,
    EmailSender,
)
from app.rate_monitor.domain.entities.notification_record import ConditionTag
from app.rate_monitor.domain.services.clock import Clock, SystemClock
from app.rate_monitor.domain.services.notification_cache import NotificationCache
from app.rate_monitor.domain.value_objects.rate_reading import RateReading
from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig

logger = logging.getLogger(__name__)

# Fixed backoff between the first delivery attempt and the retry
RETRY_DELAY_SECONDS = 5 * 60

Sleeper = Callable[[float], Awaitable[None]]


class AlertDispatcher:
    """Application service gating, rendering and delivering alert emails.

    A breach is delivered at most once per cooldown window per condition.
    A failed delivery is retried exactly once after ``RETRY_DELAY_SECONDS``;
    if the retry fails too, AlertDeliveryError is raised to the caller.
    """

    def __init__(
        self,
        email_sender: EmailSender,
        composer: AlertComposer,
        cache: NotificationCache,
        thresholds: ThresholdConfig,
        cooldown_minutes: int,
        clock: Optional[Clock] = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """Initialize the use case with required dependencies.

        Args:
            email_sender: Delivers rendered messages.
            composer: Renders the alert message.
            cache: Per-condition cooldown state (owned by the caller).
            thresholds: Configured bounds, shown in the message.
            cooldown_minutes: Minimum minutes between alerts per condition.
            clock: Source of the detection timestamp.
            sleep: Coroutine used to wait before the retry.
        """
        self._email_sender = email_sender
        self._composer = composer
        self._cache = cache
        self._thresholds = thresholds
        self._cooldown_minutes = cooldown_minutes
        self._clock = clock or SystemClock()
        self._sleep = sleep

    @property
    def cooldown_minutes(self) -> int:
        return self._cooldown_minutes

    async def dispatch(
        self,
        reading: RateReading,
        condition: ConditionTag,
    ) -> DispatchOutcome:
        """Deliver an alert for a breached threshold unless it is in cooldown.

        Args:
            reading: The rate that breached the threshold.
            condition: Which threshold was breached.

        Returns:
            SUPPRESSED if the condition is still in cooldown, otherwise SENT
            or SENT_AFTER_RETRY.

        Raises:
            AlertDeliveryError: If both delivery attempts failed.
        """
        # 1. Cooldown gate
        if not self._cache.can_send(condition, self._cooldown_minutes):
            logger.info(
                f"Alert for {condition.value} is in cooldown "
                f"({self._cooldown_minutes} min), skipping"
            )
            return DispatchOutcome.SUPPRESSED

        # 2. Render with the detection time, not the provider's update time
        message = self._composer.compose(
            reading=reading,
            condition=condition,
            thresholds=self._thresholds,
            detected_at=self._clock.now(),
        )

        # 3. First attempt
        if await self._attempt_delivery(message, attempt=1):
            outcome = DispatchOutcome.SENT
        else:
            # 4. Single retry after the fixed backoff
            logger.warning(
                f"Alert delivery failed, retrying in {RETRY_DELAY_SECONDS // 60} minutes"
            )
            await self._sleep(RETRY_DELAY_SECONDS)

            if not await self._attempt_delivery(message, attempt=2):
                logger.error(f"Alert delivery for {condition.value} failed after retry")
                raise AlertDeliveryError(condition.value, attempts=2)
            outcome = DispatchOutcome.SENT_AFTER_RETRY

        # 5. Start the cooldown only after a successful delivery
        self._cache.record(condition)
        logger.info(f"Alert sent for {condition.value}: {reading}")
        return outcome

    async def _attempt_delivery(self, message: EmailMessage, attempt: int) -> bool:
        """Send once, converting unexpected sender errors into a failure."""
        try:
            return await self._email_sender.send(message)
        except Exception as e:
            logger.exception(f"Email sender raised on attempt {attempt}: {e}")
            return False
