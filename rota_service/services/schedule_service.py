# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Schedule generation and queries.

Runs the baseline scheduler against the current roster, optionally passes
the result through the external enhancement transform, and replaces the
stored schedule with whichever result survived. Also answers the read-side
questions (filters, per-member upcoming tasks, load stats) and tracks task
completion.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional

from rota_service.core.config import settings
from rota_service.core.logging import get_logger
from rota_service.metrics.prometheus import (
    BUSY_DAY_VIOLATIONS,
    ENHANCEMENT_FALLBACKS,
    SCHEDULE_DAYS,
    SCHEDULES_GENERATED,
    UNASSIGNED_TASKS,
)
from rota_service.models.dates import to_day
from rota_service.models.domain import DaySchedule, Task, TaskType
from rota_service.repositories.absence_repository import AbsenceRepository
from rota_service.repositories.history_repository import HistoryRepository
from rota_service.repositories.member_repository import MemberRepository
from rota_service.repositories.schedule_repository import ScheduleRepository
from rota_service.services import baseline_scheduler
from rota_service.services.enhancement_client import EnhancementClient, EnhancementError
from rota_service.services.reconcile import busy_day_violations, reconcile

logger = get_logger(__name__)


class ScheduleService:
    """Business logic for generating and querying the duty schedule."""

    def __init__(
        self,
        member_repo: MemberRepository,
        absence_repo: AbsenceRepository,
        schedule_repo: ScheduleRepository,
        history_repo: HistoryRepository,
        enhancement_client: EnhancementClient,
    ) -> None:
        self._members = member_repo
        self._absences = absence_repo
        self._schedule = schedule_repo
        self._history = history_repo
        self._enhancer = enhancement_client

    # ── Commands ──

    def generate_baseline(
        self, start_date: Optional[date] = None, days: Optional[int] = None
    ) -> dict[str, Any]:
        """Generate and store a baseline schedule. Raises ValueError on bad input."""
        start, horizon = self._resolve_run(start_date, days, settings.DEFAULT_HORIZON_DAYS)
        schedule = self._run_baseline(start, horizon)
        return self._store(schedule, start, source="baseline", fallback=False)

    def generate_enhanced(self, start_date: Optional[date] = None) -> dict[str, Any]:
        """
        Generate a baseline and hand it to the enhancement transform.

        Any failure of the transform, or any output that does not reconcile,
        keeps the baseline unmodified.
        """
        start, horizon = self._resolve_run(start_date, None, settings.ENHANCED_HORIZON_DAYS)
        members = self._members.get_all()
        baseline = self._run_baseline(start, horizon)

        if not self._enhancer.enabled:
            logger.info("Enhancer not configured; storing baseline schedule")
            return self._store(baseline, start, source="baseline", fallback=True,
                               reason="disabled")
        if not baseline:
            return self._store(baseline, start, source="baseline", fallback=True,
                               reason="empty_roster")

        try:
            payload = self._enhancer.enhance(baseline, members)
            enhanced = reconcile(
                payload, start, horizon, members, self._absences.get_all()
            )
        except EnhancementError as exc:
            ENHANCEMENT_FALLBACKS.labels(reason=exc.reason).inc()
            logger.warning(
                "Enhancement discarded: %s", exc, extra={"reason": exc.reason}
            )
            return self._store(baseline, start, source="baseline", fallback=True,
                               reason=exc.reason)

        violations = busy_day_violations(enhanced, members)
        if violations:
            BUSY_DAY_VIOLATIONS.inc(len(violations))
            logger.warning(
                "Enhanced schedule places %d proxy task(s) on busy days", len(violations)
            )
        return self._store(enhanced, start, source="enhanced", fallback=False,
                           busy_day_violations=len(violations))

    def set_task_completed(self, task_id: str, completed: bool) -> Task:
        """Mark a task done or not done. Raises KeyError."""
        found = self._schedule.find_task(task_id)
        if found is None:
            raise KeyError(f"No task found with id '{task_id}'")
        day, task = found
        if task.completed != completed:
            task.completed = completed
            self._history.record_event(
                "task_completed" if completed else "task_reopened",
                {"task_id": task_id, "iso_date": day.iso_date, "task_type": task.type.value},
            )
        return task

    # ── Queries ──

    def get_schedule(
        self,
        day: Optional[str] = None,
        task_type: Optional[TaskType] = None,
        assignee_id: Optional[str] = None,
    ) -> list[DaySchedule]:
        """Current schedule; when filtered, days left with no tasks are dropped."""
        days = self._schedule.get_days()
        if day is None and task_type is None and assignee_id is None:
            return days

        result: list[DaySchedule] = []
        for d in days:
            if day is not None and d.day_of_week != day:
                continue
            tasks = [
                t for t in d.tasks
                if (task_type is None or t.type == task_type)
                and (assignee_id is None or t.assignee_id == assignee_id)
            ]
            if tasks:
                result.append(d.model_copy(update={"tasks": tasks}))
        return result

    def get_run_info(self) -> dict[str, Any]:
        return self._schedule.get_meta()

    def upcoming_tasks(self, member_id: str) -> list[dict[str, Any]]:
        """Pending tasks for one member, soonest first. Raises KeyError."""
        if not self._members.exists(member_id):
            raise KeyError(f"No member found with id '{member_id}'")
        upcoming = [
            {
                **task.model_dump(mode="json", by_alias=True),
                "dayDisplay": d.display_date,
                "dayName": d.day_of_week,
                "isoDate": d.iso_date,
            }
            for d in self._schedule.get_days()
            for task in d.tasks
            if task.assignee_id == member_id and not task.completed
        ]
        return sorted(upcoming, key=lambda t: t["isoDate"])

    def get_stats(self) -> dict[str, Any]:
        """Per-member assignment counts by duty, plus totals."""
        per_member: dict[str, dict[str, Any]] = {
            m.id: {
                "member_id": m.id,
                "name": m.name,
                "counts": {t.value: 0 for t in TaskType},
                "total": 0,
            }
            for m in self._members.get_all()
        }
        total_tasks = unassigned = completed = 0
        for d in self._schedule.get_days():
            for task in d.tasks:
                total_tasks += 1
                completed += int(task.completed)
                if task.assignee_id is None:
                    unassigned += 1
                    continue
                entry = per_member.get(task.assignee_id)
                if entry is not None:
                    entry["counts"][task.type.value] += 1
                    entry["total"] += 1
        return {
            "days": self._schedule.count_days(),
            "total_tasks": total_tasks,
            "unassigned_tasks": unassigned,
            "completed_tasks": completed,
            "members": list(per_member.values()),
        }

    # ── Internal ──

    def _resolve_run(
        self, start_date: Optional[date], days: Optional[int], default_days: int
    ) -> tuple[date, int]:
        start = to_day(start_date) if start_date is not None else date.today()
        horizon = default_days if days is None else days
        if horizon < 0 or horizon > settings.MAX_HORIZON_DAYS:
            raise ValueError(
                f"days must be between 0 and {settings.MAX_HORIZON_DAYS}, got {horizon}"
            )
        return start, horizon

    def _run_baseline(self, start: date, horizon: int) -> list[DaySchedule]:
        return baseline_scheduler.generate(
            self._members.get_all(), start, horizon, self._absences.get_all()
        )

    def _store(
        self,
        schedule: list[DaySchedule],
        start: date,
        source: str,
        fallback: bool,
        **details: Any,
    ) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "source": source,
            "fallback": fallback,
            "start_date": start.isoformat(),
            "days": len(schedule),
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }
        self._schedule.replace(schedule, meta)

        for d in schedule:
            for task in d.tasks:
                if task.assignee_id is None:
                    UNASSIGNED_TASKS.labels(task_type=task.type.value).inc()
        SCHEDULES_GENERATED.labels(source=source).inc()
        SCHEDULE_DAYS.set(len(schedule))
        self._history.record_event("schedule_generated", {**meta, **details})
        logger.info(
            "Schedule stored: start=%s, days=%d, fallback=%s",
            meta["start_date"], len(schedule), fallback,
            extra={"source": source, "reason": details.get("reason")},
        )
        return {**meta, "schedule": schedule}
