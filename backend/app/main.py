"""FastAPI application factory and main entry point."""

import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from app.core.config import APP_VERSION, ConfigurationError, Settings, get_settings
from app.core.logging import get_logger, redact_config, setup_logging
from app.rate_monitor.application.use_cases.dispatch_alert import AlertDispatcher
from app.rate_monitor.domain.services.notification_cache import NotificationCache
from app.rate_monitor.domain.services.threshold_evaluator import ThresholdEvaluator
from app.rate_monitor.infrastructure.email.alert_templates import AlertEmailComposer
from app.rate_monitor.infrastructure.email.resend_client import ResendEmailSender
from app.rate_monitor.infrastructure.external.exchange_rate_client import (
    ExchangeRateApiClient,
)
from app.rate_monitor.infrastructure.tasks.scheduler import CheckCycleOrchestrator
from app.rate_monitor.presentation.api import health

logger = get_logger(__name__)


@dataclass
class MonitorComponents:
    """Everything the lifespan has to start and shut down."""

    orchestrator: CheckCycleOrchestrator
    rate_feed: ExchangeRateApiClient
    email_sender: ResendEmailSender

    async def close(self) -> None:
        await self.rate_feed.close()
        await self.email_sender.close()


def build_monitor(settings: Settings) -> MonitorComponents:
    """Wire the rate monitor from settings.

    Raises:
        InvalidPollingIntervalError: If the polling interval is out of range.
    """
    rate_feed = ExchangeRateApiClient(
        api_key=settings.exchange_api_key,
        base_currency=settings.base_currency,
        target_currency=settings.target_currency,
        api_url=settings.exchange_api_url,
        timeout=settings.http_timeout_seconds,
    )
    email_sender = ResendEmailSender(
        api_key=settings.resend_api_key,
        from_email=settings.from_email,
        to_email=settings.to_email,
        timeout=settings.http_timeout_seconds,
    )
    cache = NotificationCache()
    dispatcher = AlertDispatcher(
        email_sender=email_sender,
        composer=AlertEmailComposer(settings.alert_display_timezone),
        cache=cache,
        thresholds=settings.thresholds,
        cooldown_minutes=settings.notification_cooldown_minutes,
    )
    orchestrator = CheckCycleOrchestrator(
        rate_feed=rate_feed,
        evaluator=ThresholdEvaluator(),
        dispatcher=dispatcher,
        cache=cache,
        thresholds=settings.thresholds,
        polling_interval_hours=settings.polling_interval_hours,
    )
    return MonitorComponents(
        orchestrator=orchestrator,
        rate_feed=rate_feed,
        email_sender=email_sender,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    settings: Settings = app.state.settings
    setup_logging(level="DEBUG" if settings.debug else settings.log_level)
    logger.info("Currency Rate Monitor starting up...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Configuration: {redact_config(settings.model_dump(mode='json'))}")

    components = build_monitor(settings)
    app.state.orchestrator = components.orchestrator

    logger.info(
        f"Monitoring {settings.currency_pair} every {settings.polling_interval_hours} hour(s), "
        f"thresholds: lower={settings.rate_lower_threshold}, upper={settings.rate_upper_threshold}"
    )
    await components.orchestrator.start()

    yield

    # Shutdown
    logger.info("Currency Rate Monitor shutting down...")
    await components.orchestrator.stop()
    await components.orchestrator.wait_idle()
    await components.close()
    logger.info("Application shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Currency Rate Monitor",
        description="Exchange rate threshold monitoring with email alerts",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.is_development else None,
        redoc_url="/api/redoc" if settings.is_development else None,
    )
    app.state.settings = settings
    app.state.orchestrator = None

    # API routes
    app.include_router(health.router, prefix="/api", tags=["Health"])

    return app


def main() -> None:
    """Load configuration and serve the monitor; exit 1 on misconfiguration."""
    import uvicorn

    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"Failed to start application:\n{e}", file=sys.stderr)
        sys.exit(1)

    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
