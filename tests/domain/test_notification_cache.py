"""Unit tests for NotificationCache cooldown tracking."""

from datetime import timedelta

import pytest

from app.rate_monitor.domain.entities.notification_record import ConditionTag
from app.rate_monitor.domain.services.notification_cache import NotificationCache


@pytest.fixture
def cache(fake_clock) -> NotificationCache:
    """Create an empty cache driven by the fake clock."""
    return NotificationCache(clock=fake_clock)


class TestCanSend:
    """Tests for NotificationCache.can_send."""

    def test_fresh_cache_allows_every_condition(self, cache: NotificationCache) -> None:
        """Test that nothing is suppressed before the first notification."""
        assert cache.can_send(ConditionTag.ABOVE_UPPER, 60) is True
        assert cache.can_send(ConditionTag.BELOW_LOWER, 60) is True

    def test_recorded_condition_is_suppressed_within_cooldown(
        self, cache: NotificationCache, fake_clock
    ) -> None:
        """Test that a recent notification blocks the same condition."""
        cache.record(ConditionTag.ABOVE_UPPER)
        fake_clock.advance(minutes=59)

        assert cache.can_send(ConditionTag.ABOVE_UPPER, 60) is False

    def test_cooldown_boundary_is_inclusive(
        self, cache: NotificationCache, fake_clock
    ) -> None:
        """Test that sending is allowed exactly when the cooldown ends."""
        cache.record(ConditionTag.ABOVE_UPPER)
        fake_clock.advance(minutes=60)

        assert cache.can_send(ConditionTag.ABOVE_UPPER, 60) is True

    def test_allowed_after_cooldown(self, cache: NotificationCache, fake_clock) -> None:
        """Test that sending is allowed again once the cooldown elapsed."""
        cache.record(ConditionTag.BELOW_LOWER)
        fake_clock.advance(minutes=61)

        assert cache.can_send(ConditionTag.BELOW_LOWER, 60) is True

    def test_zero_cooldown_never_suppresses(self, cache: NotificationCache) -> None:
        """Test that a zero cooldown allows back-to-back notifications."""
        cache.record(ConditionTag.ABOVE_UPPER)

        assert cache.can_send(ConditionTag.ABOVE_UPPER, 0) is True

    def test_conditions_are_independent(self, cache: NotificationCache) -> None:
        """Test that recording one condition leaves the other sendable."""
        cache.record(ConditionTag.ABOVE_UPPER)

        assert cache.can_send(ConditionTag.ABOVE_UPPER, 60) is False
        assert cache.can_send(ConditionTag.BELOW_LOWER, 60) is True

    def test_can_send_has_no_side_effects(self, cache: NotificationCache) -> None:
        """Test that querying never creates a record."""
        cache.can_send(ConditionTag.ABOVE_UPPER, 60)

        assert cache.size() == 0


class TestRecord:
    """Tests for NotificationCache.record."""

    def test_record_overwrites_and_restarts_cooldown(
        self, cache: NotificationCache, fake_clock
    ) -> None:
        """Test that recording again resets the clock for that condition only."""
        first = cache.record(ConditionTag.ABOVE_UPPER)
        fake_clock.advance(minutes=50)
        second = cache.record(ConditionTag.ABOVE_UPPER)
        fake_clock.advance(minutes=20)

        assert cache.size() == 1
        assert cache.get(ConditionTag.ABOVE_UPPER) == second
        assert second.sent_at - first.sent_at == timedelta(minutes=50)
        assert cache.can_send(ConditionTag.ABOVE_UPPER, 60) is False

    def test_record_uses_clock_time(self, cache: NotificationCache, fake_clock) -> None:
        """Test that the record carries the current clock time."""
        record = cache.record(ConditionTag.BELOW_LOWER)

        assert record.condition == ConditionTag.BELOW_LOWER
        assert record.sent_at == fake_clock.now()


class TestCleanup:
    """Tests for NotificationCache.cleanup."""

    def test_cleanup_removes_only_expired_records(
        self, cache: NotificationCache, fake_clock
    ) -> None:
        """Test that records at or past the cooldown are removed, others kept."""
        cache.record(ConditionTag.ABOVE_UPPER)
        fake_clock.advance(minutes=30)
        cache.record(ConditionTag.BELOW_LOWER)
        fake_clock.advance(minutes=30)

        removed = cache.cleanup(60)

        assert removed == 1
        assert cache.get(ConditionTag.ABOVE_UPPER) is None
        assert cache.get(ConditionTag.BELOW_LOWER) is not None

    def test_cleanup_does_not_change_can_send(
        self, cache: NotificationCache, fake_clock
    ) -> None:
        """Test that cleanup is purely housekeeping."""
        cache.record(ConditionTag.ABOVE_UPPER)
        fake_clock.advance(minutes=30)
        cache.record(ConditionTag.BELOW_LOWER)
        fake_clock.advance(minutes=45)

        before = {tag: cache.can_send(tag, 60) for tag in ConditionTag}
        cache.cleanup(60)
        after = {tag: cache.can_send(tag, 60) for tag in ConditionTag}

        assert before == after == {
            ConditionTag.ABOVE_UPPER: True,
            ConditionTag.BELOW_LOWER: False,
        }

    def test_cleanup_on_empty_cache(self, cache: NotificationCache) -> None:
        """Test that cleanup is safe when nothing was recorded."""
        assert cache.cleanup(60) == 0

    def test_clear_removes_everything(self, cache: NotificationCache) -> None:
        """Test that clear empties the cache."""
        cache.record(ConditionTag.ABOVE_UPPER)
        cache.record(ConditionTag.BELOW_LOWER)

        cache.clear()

        assert cache.records() == []
