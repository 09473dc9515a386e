"""Jinja2-based rendering of threshold alert emails."""

import os
from datetime import datetime

import pytz
from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.rate_monitor.application.interfaces.email_sender import (
    AlertComposer,
    EmailMessage,
)
from app.rate_monitor.domain.entities.notification_record import ConditionTag
from app.rate_monitor.domain.services.threshold_evaluator import ThresholdEvaluator
from app.rate_monitor.domain.value_objects.rate_reading import RateReading
from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig

# Templates directory - next to this module
_TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")

DETECTED_AT_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


class AlertEmailComposer(AlertComposer):
    """Renders the subject, HTML body and text body of an alert email.

    The detection time is shown in ``display_timezone`` so recipients read
    local time, while all internal timestamps stay in UTC.
    """

    def __init__(self, display_timezone: str = "UTC") -> None:
        self._timezone = pytz.timezone(display_timezone)
        self._env = Environment(
            loader=FileSystemLoader(_TEMPLATES_DIR),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=False,
        )

    def compose(
        self,
        reading: RateReading,
        condition: ConditionTag,
        thresholds: ThresholdConfig,
        detected_at: datetime,
    ) -> EmailMessage:
        threshold = ThresholdEvaluator.breached_threshold(condition, thresholds)
        context = {
            "pair": reading.pair,
            "rate": f"{reading.conversion_rate:.4f}",
            "condition_label": condition.label,
            "threshold": f"{threshold:.4f}",
            "detected_at": self.format_timestamp(detected_at),
            "source": reading.source,
        }

        return EmailMessage(
            subject=f"Rate alert: {reading.pair} {condition.label}",
            html_body=self._env.get_template("alert_email.html").render(**context).strip(),
            text_body=self._env.get_template("alert_email.txt").render(**context).strip(),
        )

    def format_timestamp(self, moment: datetime) -> str:
        """Format a timezone-aware timestamp in the display timezone."""
        if moment.tzinfo is None:
            moment = pytz.utc.localize(moment)
        return moment.astimezone(self._timezone).strftime(DETECTED_AT_FORMAT)
