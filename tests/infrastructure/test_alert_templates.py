"""Tests for alert email rendering."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from app.rate_monitor.domain.entities.notification_record import ConditionTag
from app.rate_monitor.domain.value_objects.rate_reading import RateReading
from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig
from app.rate_monitor.infrastructure.email.alert_templates import AlertEmailComposer

DETECTED_AT = datetime(2026, 1, 15, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def thresholds() -> ThresholdConfig:
    return ThresholdConfig(upper=Decimal("8.5"), lower=Decimal("8.0"))


def make_reading(rate: str, source: str = "ExchangeRate-API") -> RateReading:
    return RateReading(
        base_currency="EUR",
        target_currency="CNY",
        conversion_rate=Decimal(rate),
        observed_at=datetime(2026, 1, 15, 0, 0, tzinfo=timezone.utc),
        source=source,
    )


class TestAlertEmailComposer:
    """Tests for AlertEmailComposer.compose."""

    def test_above_upper_message(self, thresholds: ThresholdConfig) -> None:
        composer = AlertEmailComposer()

        message = composer.compose(
            make_reading("8.6"), ConditionTag.ABOVE_UPPER, thresholds, DETECTED_AT
        )

        assert message.subject == "Rate alert: EUR/CNY above upper threshold"
        assert "Currency pair: EUR/CNY" in message.text_body
        assert "Current rate: 8.6000" in message.text_body
        assert "Condition: above upper threshold (threshold: 8.5000)" in message.text_body
        assert "Detected at: 2026-01-15 12:30:00 UTC" in message.text_body
        assert "Data source: ExchangeRate-API" in message.text_body
        assert "8.6000" in message.html_body
        assert "EUR/CNY" in message.html_body

    def test_below_lower_message(self, thresholds: ThresholdConfig) -> None:
        composer = AlertEmailComposer()

        message = composer.compose(
            make_reading("7.9"), ConditionTag.BELOW_LOWER, thresholds, DETECTED_AT
        )

        assert message.subject == "Rate alert: EUR/CNY below lower threshold"
        assert "Condition: below lower threshold (threshold: 8.0000)" in message.text_body

    def test_detection_time_in_display_timezone(self, thresholds: ThresholdConfig) -> None:
        """Test that the detection time is converted for the reader."""
        composer = AlertEmailComposer(display_timezone="Asia/Shanghai")

        message = composer.compose(
            make_reading("8.6"), ConditionTag.ABOVE_UPPER, thresholds, DETECTED_AT
        )

        assert "Detected at: 2026-01-15 20:30:00 CST" in message.text_body

    def test_naive_timestamp_treated_as_utc(self) -> None:
        composer = AlertEmailComposer()

        assert composer.format_timestamp(datetime(2026, 1, 15, 8, 0)) == "2026-01-15 08:00:00 UTC"

    def test_html_body_is_escaped(self, thresholds: ThresholdConfig) -> None:
        """Test that values are escaped in HTML but left as-is in plain text."""
        composer = AlertEmailComposer()

        message = composer.compose(
            make_reading("8.6", source="<b>feed</b>"),
            ConditionTag.ABOVE_UPPER,
            thresholds,
            DETECTED_AT,
        )

        assert "&lt;b&gt;feed&lt;/b&gt;" in message.html_body
        assert "<b>feed</b>" not in message.html_body
        assert "Data source: <b>feed</b>" in message.text_body
