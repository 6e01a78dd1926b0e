# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Reminders and the in-app notification feed.
Scans the stored schedule for tasks falling ``days_before`` days ahead and
raises one notification per task, never twice for the same task id.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from rota_service.core.logging import get_logger
from rota_service.metrics.prometheus import REMINDERS_SENT
from rota_service.models.domain import Notification, ReminderSettings
from rota_service.repositories.member_repository import MemberRepository
from rota_service.repositories.notification_repository import NotificationRepository
from rota_service.repositories.schedule_repository import ScheduleRepository
from rota_service.services.notification_client import NotificationClient

logger = get_logger(__name__)


class ReminderService:
    """Business logic for reminder scans and notification housekeeping."""

    def __init__(
        self,
        schedule_repo: ScheduleRepository,
        member_repo: MemberRepository,
        notification_repo: NotificationRepository,
        notification_client: NotificationClient,
    ) -> None:
        self._schedule = schedule_repo
        self._members = member_repo
        self._notifications = notification_repo
        self._client = notification_client

    # ── Settings ──

    def get_settings(self) -> ReminderSettings:
        return self._notifications.get_settings()

    def update_settings(self, reminder_settings: ReminderSettings) -> ReminderSettings:
        self._notifications.save_settings(reminder_settings)
        logger.info(
            "Reminder settings updated: enabled=%s, days_before=%d",
            reminder_settings.enabled, reminder_settings.days_before,
        )
        return reminder_settings

    # ── Scan ──

    def check(self, today: Optional[date] = None) -> list[Notification]:
        """Create notifications for due, unfinished, not-yet-reminded tasks."""
        cfg = self._notifications.get_settings()
        days = self._schedule.get_days()
        # ids from replaced schedules can never come due again
        self._notifications.retain_notified(t.id for d in days for t in d.tasks)
        if not cfg.enabled or not days:
            return []

        today = today or date.today()
        target = (today + timedelta(days=cfg.days_before)).isoformat()
        created: list[Notification] = []

        for day in days:
            if day.iso_date != target:
                continue
            for task in day.tasks:
                if (
                    task.type not in cfg.task_types
                    or task.assignee_id is None
                    or task.completed
                    or self._notifications.was_notified(task.id)
                ):
                    continue
                assignee = self._members.get_by_id(task.assignee_id)
                assignee_name = assignee.name if assignee else "Someone"
                title = f"Upcoming: {task.type.value}"
                message = (
                    f"{assignee_name} has {task.type.value} on "
                    f"{day.display_date} ({day.day_of_week})."
                )
                notification = Notification(
                    title=title,
                    message=message,
                    timestamp=datetime.now(timezone.utc).isoformat(),
                )
                self._notifications.add(notification)
                self._notifications.mark_notified(task.id)
                created.append(notification)
                REMINDERS_SENT.inc()

                if cfg.email_enabled and cfg.email:
                    self._client.send_reminder(
                        recipient=cfg.email,
                        title=title,
                        message=message,
                        task_id=task.id,
                    )

        if created:
            logger.info("Reminders created: count=%d, target=%s", len(created), target)
        return created

    # ── Feed ──

    def list_notifications(self) -> dict:
        return {
            "unread": self._notifications.unread_count(),
            "notifications": self._notifications.get_all(),
        }

    def mark_all_read(self) -> dict[str, int]:
        return {"marked_read": self._notifications.mark_all_read()}

    def dismiss(self, notification_id: str) -> dict[str, str]:
        if self._notifications.delete(notification_id) is None:
            raise KeyError(f"No notification found with id '{notification_id}'")
        return {"status": "dismissed", "notification_id": notification_id}
