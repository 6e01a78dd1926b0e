# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Notification client — e-mails reminders through the notification
service. Delivery is best effort: a reminder already sits in the in-app feed,
so a failed e-mail is logged and reported, never raised.
"""

import httpx

from rota_service.core.config import settings
from rota_service.core.logging import get_logger
from rota_service.metrics.prometheus import NOTIFICATIONS_SENT

logger = get_logger(__name__)


class NotificationClient:
    """Outbound sender for reminder e-mails."""

    def send_reminder(self, recipient: str, title: str, message: str, task_id: str) -> bool:
        """POST one reminder; True when the notification service accepted it."""
        body = {
            "channel": "email",
            "recipient": recipient,
            "subject": title,
            "message": message,
            "category": "reminder",
            "reference_id": task_id,
        }
        try:
            with httpx.Client(timeout=settings.NOTIFICATION_TIMEOUT) as client:
                resp = client.post(
                    f"{settings.NOTIFICATION_SERVICE_URL}/api/v1/notify", json=body
                )
        except httpx.HTTPError as exc:
            NOTIFICATIONS_SENT.labels(channel="email", outcome="error").inc()
            logger.warning(
                "Reminder e-mail not delivered: %s", exc, extra={"task_id": task_id}
            )
            return False

        delivered = resp.status_code < 300
        NOTIFICATIONS_SENT.labels(
            channel="email", outcome="sent" if delivered else "rejected"
        ).inc()
        logger.info(
            "Reminder e-mail %s: status=%d",
            "sent" if delivered else "rejected",
            resp.status_code,
            extra={"task_id": task_id},
        )
        return delivered
