"""Application configuration using Pydantic Settings."""

import re
from decimal import Decimal
from functools import lru_cache
from typing import Any, Literal

import pytz
from pydantic import EmailStr, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.rate_monitor.domain.value_objects.thresholds import ThresholdConfig

APP_VERSION = "0.1.0"

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")

MIN_POLLING_INTERVAL_HOURS = 1
MAX_POLLING_INTERVAL_HOURS = 24


class ConfigurationError(Exception):
    """Raised when required settings are missing or invalid."""

    def __init__(self, errors: list[str]) -> None:
        message = "\n".join(
            [
                "Configuration validation failed:",
                *(f"  - {error}" for error in errors),
                "",
                "Please check your .env file and ensure all required parameters are set correctly.",
            ]
        )
        super().__init__(message)
        self.errors = errors


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)

    # ExchangeRate-API
    exchange_api_url: str = Field(default="https://v6.exchangerate-api.com/v6")
    exchange_api_key: str = Field(min_length=1)
    base_currency: str
    target_currency: str
    http_timeout_seconds: float = Field(default=10.0, gt=0)

    # Thresholds
    rate_upper_threshold: Decimal
    rate_lower_threshold: Decimal

    # Polling
    polling_interval_hours: int = Field(
        ge=MIN_POLLING_INTERVAL_HOURS,
        le=MAX_POLLING_INTERVAL_HOURS,
    )

    # Email (Resend)
    resend_api_key: str = Field(min_length=1)
    from_email: EmailStr
    to_email: EmailStr
    notification_cooldown_minutes: int = Field(default=60, ge=0)
    alert_display_timezone: str = Field(default="UTC")

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("base_currency", "target_currency", mode="before")
    @classmethod
    def normalize_currency(cls, v: Any) -> Any:
        """Accept lower-case codes, reject anything but three letters."""
        if isinstance(v, str):
            v = v.strip().upper()
            if not CURRENCY_CODE_PATTERN.match(v):
                raise ValueError("must be a 3-letter currency code (e.g., EUR, USD)")
        return v

    @field_validator("alert_display_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError as e:
            raise ValueError(f"unknown timezone '{v}'") from e
        return v

    @model_validator(mode="after")
    def check_threshold_order(self) -> "Settings":
        if self.rate_lower_threshold >= self.rate_upper_threshold:
            raise ValueError(
                "RATE_LOWER_THRESHOLD must be less than RATE_UPPER_THRESHOLD"
            )
        return self

    @property
    def thresholds(self) -> ThresholdConfig:
        return ThresholdConfig(
            upper=self.rate_upper_threshold,
            lower=self.rate_lower_threshold,
        )

    @property
    def currency_pair(self) -> str:
        return f"{self.base_currency}/{self.target_currency}"

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


def _format_validation_error(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors into one line per problem, keyed by env name."""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]).upper()
        message = error["msg"]
        if error["type"] == "missing":
            message = "is required"
        errors.append(f"{location} {message}" if location else message)
    return errors


def load_settings(**overrides: Any) -> Settings:
    """Load and validate settings.

    Args:
        overrides: Explicit values taking precedence over the environment.

    Returns:
        A validated Settings instance.

    Raises:
        ConfigurationError: If any setting is missing or invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e)) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
