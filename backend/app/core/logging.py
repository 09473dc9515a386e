"""Logging configuration for the application."""

import logging
import sys
from typing import Any, Literal, Mapping

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

REDACTED = "***REDACTED***"
SENSITIVE_KEY_PARTS = ("key", "secret", "password", "token")


def setup_logging(level: LogLevel = "INFO") -> None:
    """Configure application logging.

    Args:
        level: The logging level to use.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name.

    Args:
        name: The name for the logger (typically __name__).

    Returns:
        A configured logger instance.
    """
    return logging.getLogger(name)


def redact_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of a configuration mapping safe to write to logs.

    Values whose key contains "key", "secret", "password" or "token" are
    masked; nested mappings are handled recursively.

    Args:
        config: Configuration values, e.g. ``settings.model_dump()``.

    Returns:
        A new dict with sensitive values replaced.
    """
    redacted: dict[str, Any] = {}
    for key, value in config.items():
        if any(part in key.lower() for part in SENSITIVE_KEY_PARTS):
            redacted[key] = REDACTED
        elif isinstance(value, Mapping):
            redacted[key] = redact_config(value)
        else:
            redacted[key] = value
    return redacted
