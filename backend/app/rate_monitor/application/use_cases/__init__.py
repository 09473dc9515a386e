"""Application use cases for orchestrating domain logic."""

from app.rate_monitor.application.use_cases.dispatch_alert import (
    RETRY_DELAY_SECONDS,
    AlertDispatcher,
)

__all__ = [
    "AlertDispatcher",
    "RETRY_DELAY_SECONDS",
]
