"""Periodic rate check scheduling.

Runs one check cycle immediately on startup and then on a cron cadence
derived from the polling interval. Each cycle fetches the current rate,
evaluates it against the thresholds and dispatches an alert if needed.
Nothing raised inside a cycle reaches the scheduler loop.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from celery.schedules import crontab

from app.rate_monitor.application.dto.check_dto import (
    CheckResultDTO,
    CycleStatus,
    DispatchOutcome,
    NotificationRecordDTO,
)
from app.rate_monitor.application.exceptions import (
    AlertDeliveryError,
    InvalidPollingIntervalError,
)
from app.rate_monitor.application.interfaces.rate_feed import RateFeed
from app.rate_monitor.application.use_cases.dispatch_alert import AlertDispatcher, Sleeper
from app.rate_monitor.domain.services.clock import Clock, SystemClock
from app.rate_monitor.domain.services.notification_cache import NotificationCache
from app.rate_monitor.domain.services.threshold_evaluator import ThresholdEvaluator
from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig

logger = logging.getLogger(__name__)

MIN_INTERVAL_HOURS = 1
MAX_INTERVAL_HOURS = 24

# Wait before polling the schedule again after it failed to evaluate
SCHEDULE_RETRY_SECONDS = 60


def build_check_schedule(
    interval_hours: float,
    nowfun: Optional[Callable[[], datetime]] = None,
) -> crontab:
    """Translate a polling interval into a cron schedule.

    - Below one hour: every N minutes.
    - Divisor of 24: minute 0 of every Nth hour.
    - Anything else: the same hourly expression as an approximation, so
      firing times stay on fixed absolute hours (e.g. 5 -> 00, 05, 10, 15,
      20) rather than every N hours from startup.

    Args:
        interval_hours: Polling interval in hours.
        nowfun: Optional time source for the schedule.

    Returns:
        A Celery crontab schedule.
    """
    interval_minutes = int(interval_hours * 60)
    if interval_minutes < 60:
        return crontab(minute=f"*/{interval_minutes}", nowfun=nowfun)

    hours = int(interval_hours)
    if 24 % hours != 0:
        logger.warning(
            f"Polling interval of {hours} hours does not divide 24; "
            f"checks will run at fixed hours (*/{hours}) instead of every {hours} hours"
        )
    return crontab(minute=0, hour=f"*/{hours}", nowfun=nowfun)


class CheckCycleOrchestrator:
    """Drives fetch -> evaluate -> dispatch cycles on a schedule.

    State machine: stopped -> running on ``start()``, running -> stopped on
    ``stop()``. Both transitions are idempotent. Cycles are not guarded
    against overlap; the interval is expected to be far longer than a cycle.

    Attributes:
        _schedule: Cron schedule polled like Celery beat polls its entries.
        _schedule_task: Background task firing scheduled cycles.
        _inflight: Cycle tasks still running; ``stop()`` leaves them alone.
        last_result: Result of the most recent completed cycle.
    """

    def __init__(
        self,
        rate_feed: RateFeed,
        evaluator: ThresholdEvaluator,
        dispatcher: AlertDispatcher,
        cache: NotificationCache,
        thresholds: ThresholdConfig,
        polling_interval_hours: int,
        clock: Optional[Clock] = None,
        schedule: Optional[Any] = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            rate_feed: Source of rate readings.
            evaluator: Threshold evaluation service.
            dispatcher: Alert dispatch use case.
            cache: Cooldown cache shared with the dispatcher (swept after each cycle).
            thresholds: Configured bounds.
            polling_interval_hours: Hours between scheduled checks (1-24).
            clock: Time source for result timestamps and the schedule.
            schedule: Optional schedule overriding the one derived from the
                interval; must provide ``is_due(last_run_at)``.
            sleep: Coroutine used to wait between schedule polls.

        Raises:
            InvalidPollingIntervalError: If the interval is outside 1-24 hours.
        """
        if (
            isinstance(polling_interval_hours, bool)
            or not isinstance(polling_interval_hours, int)
            or not MIN_INTERVAL_HOURS <= polling_interval_hours <= MAX_INTERVAL_HOURS
        ):
            raise InvalidPollingIntervalError(
                polling_interval_hours, MIN_INTERVAL_HOURS, MAX_INTERVAL_HOURS
            )

        self._rate_feed = rate_feed
        self._evaluator = evaluator
        self._dispatcher = dispatcher
        self._cache = cache
        self._thresholds = thresholds
        self._interval_hours = polling_interval_hours
        self._clock = clock or SystemClock()
        self._sleep = sleep
        self._schedule = schedule or build_check_schedule(
            polling_interval_hours, nowfun=self._clock.now
        )
        self._schedule_task: Optional[asyncio.Task] = None
        self._inflight: set[asyncio.Task] = set()
        self._running = False
        self.last_result: Optional[CheckResultDTO] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def polling_interval_hours(self) -> int:
        return self._interval_hours

    @property
    def schedule(self) -> Any:
        return self._schedule

    @property
    def thresholds(self) -> ThresholdConfig:
        return self._thresholds

    @property
    def cooldown_minutes(self) -> int:
        return self._dispatcher.cooldown_minutes

    async def start(self) -> None:
        """Run one check now, then schedule periodic checks."""
        if self._running:
            logger.warning("Scheduler is already running")
            return

        logger.info("Starting scheduler...")
        self._running = True

        logger.info("Executing immediate rate check on startup")
        await self.execute_check()

        logger.info(
            f"Scheduling periodic checks every {self._interval_hours} hour(s): "
            f"{self._schedule}"
        )
        self._schedule_task = asyncio.create_task(self._run_schedule())
        logger.info("Scheduler started successfully")

    async def stop(self) -> None:
        """Cancel future scheduled checks.

        A cycle already in progress, including a pending delivery retry,
        is allowed to finish.
        """
        if not self._running:
            logger.warning("Scheduler is not running")
            return

        logger.info("Stopping scheduler...")
        self._running = False

        task, self._schedule_task = self._schedule_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                logger.debug("Schedule task cancelled")

        logger.info("Scheduler stopped successfully")

    async def wait_idle(self) -> None:
        """Wait until every cycle fired by the schedule has finished.

        Called after ``stop()`` and before the HTTP clients are closed, so a
        cycle sitting in the retry backoff can still deliver its alert.
        """
        if not self._inflight:
            return

        logger.info(f"Waiting for {len(self._inflight)} in-flight check cycle(s)")
        await asyncio.gather(*self._inflight)

    async def _run_schedule(self) -> None:
        """Poll the schedule and fire cycles when due, like Celery beat."""
        last_run_at = self._clock.now()
        while self._running:
            try:
                is_due, next_check_seconds = self._schedule.is_due(last_run_at)
            except Exception as e:
                logger.exception(f"Error evaluating check schedule: {e}")
                is_due, next_check_seconds = False, SCHEDULE_RETRY_SECONDS

            if is_due:
                last_run_at = self._clock.now()
                self._fire_cycle()
            await self._sleep(next_check_seconds)

    def _fire_cycle(self) -> None:
        task = asyncio.create_task(self.execute_check())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def execute_check(self) -> CheckResultDTO:
        """Run one fetch -> evaluate -> dispatch cycle.

        Never raises; every failure is logged and captured in the result.

        Returns:
            CheckResultDTO describing how the cycle ended.
        """
        started_at = self._clock.now()
        logger.info("Starting rate check cycle")

        try:
            result = await self._run_cycle(started_at)
        except Exception as e:
            logger.exception(f"Error during rate check cycle: {e}")
            result = self._result(started_at, CycleStatus.ERROR, error=str(e))

        try:
            removed = self._cache.cleanup(self._dispatcher.cooldown_minutes)
            if removed:
                logger.debug(f"Removed {removed} expired notification record(s)")
        except Exception as e:
            logger.error(f"Notification cache cleanup failed: {e}")

        self.last_result = result
        return result

    async def _run_cycle(self, started_at: datetime) -> CheckResultDTO:
        # 1. Fetch
        reading = await self._rate_feed.fetch_current_rate()
        if reading is None:
            logger.error("Failed to fetch rate data, skipping this check cycle")
            return self._result(started_at, CycleStatus.NO_DATA)

        logger.info(
            f"Rate check: {reading.pair} = {reading.conversion_rate:.4f} "
            f"(source={reading.source})"
        )

        # 2. Evaluate
        decision = self._evaluator.evaluate(reading, self._thresholds)

        # 3. Within range
        if not decision.should_notify:
            logger.info(
                f"Rate {reading.conversion_rate:.4f} is within thresholds "
                f"[{self._thresholds.lower}, {self._thresholds.upper}], "
                f"no notification needed"
            )
            return self._result(
                started_at,
                CycleStatus.WITHIN_RANGE,
                pair=reading.pair,
                rate=reading.conversion_rate,
            )

        # 4. Dispatch
        logger.info(f"Threshold exceeded ({decision.condition.value}): {decision.message}")
        details = {
            "pair": reading.pair,
            "rate": reading.conversion_rate,
            "condition": decision.condition,
            "message": decision.message,
        }
        try:
            outcome = await self._dispatcher.dispatch(reading, decision.condition)
        except AlertDeliveryError as e:
            logger.error(f"Alert delivery failed: {e.message}")
            return self._result(
                started_at, CycleStatus.DELIVERY_FAILED, error=e.message, **details
            )

        if outcome is DispatchOutcome.SUPPRESSED:
            logger.info(f"Notification for {decision.condition.value} suppressed by cooldown")
            return self._result(started_at, CycleStatus.SUPPRESSED, **details)

        logger.info(
            f"Email notification sent for {decision.condition.value} "
            f"at rate {reading.conversion_rate:.4f} ({outcome.value})"
        )
        return self._result(started_at, CycleStatus.SENT, **details)

    def _result(
        self,
        started_at: datetime,
        status: CycleStatus,
        **fields: Any,
    ) -> CheckResultDTO:
        return CheckResultDTO(
            status=status,
            started_at=started_at,
            finished_at=self._clock.now(),
            **fields,
        )

    def notification_records(self) -> list[NotificationRecordDTO]:
        """Describe the conditions currently tracked by the cooldown cache."""
        cooldown = timedelta(minutes=self._dispatcher.cooldown_minutes)
        return [
            NotificationRecordDTO(
                condition=record.condition,
                sent_at=record.sent_at,
                cooldown_ends_at=record.sent_at + cooldown,
            )
            for record in self._cache.records()
        ]
