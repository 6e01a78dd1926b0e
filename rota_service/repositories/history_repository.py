# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Audit history for roster, schedule and task events.
Oldest entries fall off once MAX_HISTORY_SIZE is reached.
"""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Optional

from rota_service.core.config import settings


class HistoryRepository:
    """In-memory append-only event log."""

    def __init__(self) -> None:
        self._events: deque[dict[str, Any]] = deque(maxlen=settings.MAX_HISTORY_SIZE)

    def get_all(
        self,
        event_type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Most recent ``limit`` events, oldest first."""
        events = [
            e for e in self._events
            if event_type is None or e["event_type"] == event_type
        ]
        return events[-(limit or settings.DEFAULT_HISTORY_LIMIT):]

    def record_event(self, event_type: str, details: dict[str, Any]) -> dict[str, Any]:
        event = {
            "event_id": str(uuid.uuid4()),
            "event_type": event_type,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "details": details,
        }
        self._events.append(event)
        return event

    def clear(self) -> None:
        self._events.clear()
