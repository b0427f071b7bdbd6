# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: health, readiness, metrics, notifications and settings endpoints.
Pure HTTP layer: no business logic.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from geyser_remote.core.config import settings
from geyser_remote.core.dependencies import (
    change_base_url,
    get_notification_repo,
    get_schedule_repo,
    get_schedule_service,
    services_ready,
)
from geyser_remote.repositories.notification_repository import NotificationRepository
from geyser_remote.schemas.panel import BaseUrlRequest
from geyser_remote.services.schedule_service import ScheduleService

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "schedules_count": get_schedule_repo().count(),
    }


@router.get("/health/ready")
def readiness_check():
    """Readiness probe: the HTTP client is up and the last load succeeded."""
    if not services_ready():
        return {"status": "starting", "service": settings.SERVICE_NAME, "schedules_loaded": False}
    service = get_schedule_service()
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "controller": service.base_url,
        "schedules_loaded": service.error is None,
        "last_error": service.error,
        "last_notification": get_notification_repo().latest(),
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/api/v1/notifications")
def list_notifications(
    level: Optional[str] = Query(default=None, pattern="^(success|error)$"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    repo: NotificationRepository = Depends(get_notification_repo),
):
    """Most recent success/error toasts, oldest first."""
    return repo.get_recent(level=level, limit=limit)


@router.get("/api/v1/settings/base-url")
def get_base_url(service: ScheduleService = Depends(get_schedule_service)):
    return {"base_url": service.base_url}


@router.put("/api/v1/settings/base-url")
async def set_base_url(payload: BaseUrlRequest):
    """Point the panel at another controller; schedules reload on change."""
    changed = await change_base_url(payload.base_url)
    service = get_schedule_service()
    return {
        "base_url": service.base_url,
        "changed": changed,
        "schedules_count": len(service.list_schedules()),
        "error": service.error,
    }
