# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Current schedule data access.
Holds exactly one schedule; every save replaces it wholesale.
"""

from typing import Any, Optional

from rota_service.models.domain import DaySchedule, Task


class ScheduleRepository:
    """In-memory store for the current schedule and its run metadata."""

    def __init__(self) -> None:
        self._days: list[DaySchedule] = []
        self._meta: dict[str, Any] = {}

    # ── Read ──

    def get_days(self) -> list[DaySchedule]:
        return list(self._days)

    def get_meta(self) -> dict[str, Any]:
        return dict(self._meta)

    def find_task(self, task_id: str) -> Optional[tuple[DaySchedule, Task]]:
        for day in self._days:
            for task in day.tasks:
                if task.id == task_id:
                    return day, task
        return None

    def count_days(self) -> int:
        return len(self._days)

    # ── Write ──

    def replace(self, days: list[DaySchedule], meta: dict[str, Any]) -> None:
        self._days = list(days)
        self._meta = dict(meta)

    # ── Bulk / internal ──

    def clear(self) -> None:
        self._days = []
        self._meta = {}
