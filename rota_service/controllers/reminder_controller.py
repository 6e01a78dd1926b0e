# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Reminder settings, reminder scans and the notification feed.
Thin HTTP layer — delegates ALL logic to ReminderService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from rota_service.core.dependencies import get_reminder_service
from rota_service.models.domain import Notification, ReminderSettings
from rota_service.schemas.rota import ReminderCheckRequest
from rota_service.services.reminder_service import ReminderService

router = APIRouter(prefix="/api/v1", tags=["Reminders"])


@router.get("/reminders/settings", response_model=ReminderSettings)
def get_reminder_settings(service: ReminderService = Depends(get_reminder_service)):
    return service.get_settings()


@router.put("/reminders/settings", response_model=ReminderSettings)
def update_reminder_settings(
    payload: ReminderSettings,
    service: ReminderService = Depends(get_reminder_service),
):
    return service.update_settings(payload)


@router.post("/reminders/check", response_model=list[Notification])
def check_reminders(
    payload: Optional[ReminderCheckRequest] = None,
    service: ReminderService = Depends(get_reminder_service),
):
    """Raise notifications for tasks due ``days_before`` days from today."""
    today = payload.today if payload else None
    return service.check(today)


@router.get("/notifications")
def list_notifications(service: ReminderService = Depends(get_reminder_service)):
    """Notification feed, newest first, with the unread count."""
    return service.list_notifications()


@router.post("/notifications/read-all")
def mark_all_notifications_read(service: ReminderService = Depends(get_reminder_service)):
    return service.mark_all_read()


@router.delete("/notifications/{notification_id}")
def dismiss_notification(
    notification_id: str,
    service: ReminderService = Depends(get_reminder_service),
):
    try:
        return service.dismiss(notification_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
