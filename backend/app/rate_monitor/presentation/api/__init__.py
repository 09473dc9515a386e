# FastAPI routers - health, readiness, monitor status
from app.rate_monitor.presentation.api import health

__all__ = ["health"]
