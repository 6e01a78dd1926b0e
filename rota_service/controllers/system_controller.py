# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Operational endpoints — liveness, readiness, Prometheus scrape,
and the audit history of roster and schedule changes.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from rota_service.core.config import settings
from rota_service.core.dependencies import (
    get_enhancement_client,
    get_history_repo,
    get_member_repo,
    get_schedule_repo,
)
from rota_service.repositories.history_repository import HistoryRepository

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness plus a glance at how much state the process holds."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "members_count": get_member_repo().count(),
        "schedule_days": get_schedule_repo().count_days(),
    }


@router.get("/health/ready")
def readiness_check():
    """Ready once a roster exists; also reports whether the enhancer is wired."""
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "roster_loaded": get_member_repo().count() > 0,
        "enhancer_configured": get_enhancement_client().enabled,
    }


@router.get("/metrics")
def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/api/v1/history", tags=["History"])
def get_history(
    event_type: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=1, description="Max results"),
    history_repo: HistoryRepository = Depends(get_history_repo),
):
    """Audit log for all rota events."""
    return history_repo.get_all(event_type=event_type, limit=limit)
