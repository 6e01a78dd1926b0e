# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: In-app notifications, reminder settings and the set of
tasks already reminded about.
"""

from typing import Iterable, Optional

from rota_service.core.config import settings
from rota_service.models.domain import Notification, ReminderSettings


class NotificationRepository:
    """In-memory notification feed, newest first, bounded."""

    def __init__(self) -> None:
        self._feed: list[Notification] = []
        self._notified_tasks: set[str] = set()
        self._settings = ReminderSettings()

    # ── Notifications ──

    def get_all(self) -> list[Notification]:
        return list(self._feed)

    def add(self, notification: Notification) -> None:
        self._feed.insert(0, notification)
        del self._feed[settings.MAX_NOTIFICATIONS:]

    def mark_all_read(self) -> int:
        changed = 0
        for n in self._feed:
            if not n.read:
                n.read = True
                changed += 1
        return changed

    def delete(self, notification_id: str) -> Optional[Notification]:
        for idx, n in enumerate(self._feed):
            if n.id == notification_id:
                return self._feed.pop(idx)
        return None

    def unread_count(self) -> int:
        return sum(1 for n in self._feed if not n.read)

    # ── Reminder bookkeeping ──

    def was_notified(self, task_id: str) -> bool:
        return task_id in self._notified_tasks

    def mark_notified(self, task_id: str) -> None:
        self._notified_tasks.add(task_id)

    def retain_notified(self, task_ids: Iterable[str]) -> None:
        """Forget reminded ids that are not in ``task_ids``."""
        self._notified_tasks.intersection_update(task_ids)

    def notified_count(self) -> int:
        return len(self._notified_tasks)

    def get_settings(self) -> ReminderSettings:
        return self._settings

    def save_settings(self, reminder_settings: ReminderSettings) -> None:
        self._settings = reminder_settings

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._feed.clear()
        self._notified_tasks.clear()
        self._settings = ReminderSettings()
