"""Health check and monitor status endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from app.core.config import APP_VERSION
from app.rate_monitor.application.dto.check_dto import MonitorStatusDTO
from app.rate_monitor.infrastructure.tasks.scheduler import CheckCycleOrchestrator

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str


def get_orchestrator(request: Request) -> CheckCycleOrchestrator:
    """Return the orchestrator wired up by the application lifespan.

    Raises:
        HTTPException: 503 if the monitor has not been initialized.
    """
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Rate monitor is not initialized",
        )
    return orchestrator


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check application health status.

    Returns:
        Health status with timestamp and version.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=APP_VERSION,
    )


@router.get("/ready")
async def readiness_check(
    orchestrator: CheckCycleOrchestrator = Depends(get_orchestrator),
) -> dict[str, str]:
    """Check if periodic rate checks are scheduled.

    Returns:
        Readiness status.

    Raises:
        HTTPException: 503 if the scheduler is stopped.
    """
    if not orchestrator.is_running:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Scheduler is not running",
        )
    return {"status": "ready"}


@router.get("/status", response_model=MonitorStatusDTO)
async def monitor_status(
    request: Request,
    orchestrator: CheckCycleOrchestrator = Depends(get_orchestrator),
) -> MonitorStatusDTO:
    """Report monitor configuration, the last check result and active cooldowns.

    Returns:
        MonitorStatusDTO snapshot.
    """
    thresholds = orchestrator.thresholds
    return MonitorStatusDTO(
        running=orchestrator.is_running,
        pair=request.app.state.settings.currency_pair,
        upper_threshold=thresholds.upper,
        lower_threshold=thresholds.lower,
        polling_interval_hours=orchestrator.polling_interval_hours,
        cooldown_minutes=orchestrator.cooldown_minutes,
        last_check=orchestrator.last_result,
        notifications=orchestrator.notification_records(),
    )
