"""Application-layer exceptions for use case error handling.

These exceptions represent failures that can occur while running the
monitor. Delivery failures are caught by the check cycle and turned into a
logged outcome; polling interval errors are fatal at startup.
"""


class ApplicationError(Exception):
    """Base class for all application-layer exceptions."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class AlertDeliveryError(ApplicationError):
    """Raised when an alert email could not be delivered, even after retry."""

    def __init__(self, condition: str, attempts: int) -> None:
        super().__init__(
            message=f"Failed to deliver '{condition}' alert after {attempts} attempts",
            code="ALERT_DELIVERY_FAILED"
        )
        self.condition = condition
        self.attempts = attempts


class InvalidPollingIntervalError(ApplicationError):
    """Raised when the polling interval is outside the supported range."""

    def __init__(self, interval_hours: float, minimum: int, maximum: int) -> None:
        super().__init__(
            message=(
                f"Invalid polling interval: {interval_hours} hours. "
                f"Must be between {minimum} and {maximum} hours."
            ),
            code="INVALID_POLLING_INTERVAL"
        )
        self.interval_hours = interval_hours
