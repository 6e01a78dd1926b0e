# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Reconciliation of enhancement-transform output.

Parses whatever the transform returned against the DaySchedule shape,
re-derives the calendar fields from the run's start date, backfills task
ids and completion flags, and rejects the whole payload on any mismatch.
A rejected payload leaves nothing behind: results are built into a fresh
list and only returned once every day has passed.
"""

from datetime import date
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from rota_service.models.dates import add_days, day_code, display_date
from rota_service.models.domain import (
    BUSY_DAY_DUTIES,
    AbsenceInterval,
    DaySchedule,
    Member,
    Task,
    TaskType,
    new_id,
)
from rota_service.services.availability import is_active
from rota_service.services.enhancement_client import EnhancementError


class ReconcileError(EnhancementError):
    """Transform output does not fit the schedule it claims to describe."""


class _RawTask(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    id: Optional[str] = None
    type: TaskType
    assignee_id: Optional[str]
    note: Optional[str] = None
    completed: Optional[bool] = None


class _RawDay(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    date: int = Field(..., ge=1)
    day_of_week: Optional[str] = None
    tasks: list[_RawTask]


_RAW_SCHEDULE = TypeAdapter(list[_RawDay])


def reconcile(
    payload: Any,
    start_date: date,
    number_of_days: int,
    members: Sequence[Member],
    absences: Sequence[AbsenceInterval] = (),
) -> list[DaySchedule]:
    """
    Turn a transform payload into a DaySchedule list or raise ReconcileError.

    Accepts a bare JSON array or an object carrying it under "schedule".
    Day numbers must cover 1..number_of_days exactly once; every assignee
    must be a known member who is active on that day. Calendar fields are
    always derived from the day number, and repeated or missing task ids
    are replaced with fresh ones.
    """
    if isinstance(payload, dict) and "schedule" in payload:
        payload = payload["schedule"]

    try:
        raw_days = _RAW_SCHEDULE.validate_python(payload)
    except ValidationError as exc:
        raise ReconcileError(
            "schema", f"Enhanced schedule failed validation: {exc.error_count()} error(s)"
        ) from exc

    day_numbers = sorted(d.date for d in raw_days)
    if day_numbers != list(range(1, number_of_days + 1)):
        raise ReconcileError(
            "day_mismatch",
            f"Enhanced schedule must cover days 1..{number_of_days} exactly once",
        )

    by_id = {m.id: m for m in members}
    seen_ids: set[str] = set()
    reconciled: list[DaySchedule] = []
    for raw in sorted(raw_days, key=lambda d: d.date):
        day = add_days(start_date, raw.date - 1)
        tasks: list[Task] = []
        for raw_task in raw.tasks:
            if raw_task.assignee_id is not None:
                member = by_id.get(raw_task.assignee_id)
                if member is None:
                    raise ReconcileError(
                        "unknown_assignee",
                        f"Day {raw.date}: unknown assignee '{raw_task.assignee_id}'",
                    )
                if not is_active(member, day, absences):
                    raise ReconcileError(
                        "inactive_assignee",
                        f"Day {raw.date}: '{member.id}' is not active on {day.isoformat()}",
                    )
            task_id = raw_task.id
            if not task_id or task_id in seen_ids:
                task_id = new_id()
            seen_ids.add(task_id)
            tasks.append(
                Task(
                    id=task_id,
                    type=raw_task.type,
                    assignee_id=raw_task.assignee_id,
                    note=raw_task.note,
                    completed=bool(raw_task.completed),
                )
            )
        reconciled.append(
            DaySchedule(
                date=raw.date,
                display_date=display_date(day),
                iso_date=day.isoformat(),
                day_of_week=day_code(day),
                tasks=tasks,
            )
        )
    return reconciled


def busy_day_violations(
    days: Sequence[DaySchedule], members: Sequence[Member]
) -> list[dict[str, str]]:
    """Proxy tasks that land on their assignee's busy day."""
    busy = {m.id: set(m.busy_days) for m in members}
    violations: list[dict[str, str]] = []
    for day in days:
        for task in day.tasks:
            if task.type not in BUSY_DAY_DUTIES or task.assignee_id is None:
                continue
            if day.day_of_week in busy.get(task.assignee_id, ()):
                violations.append(
                    {
                        "iso_date": day.iso_date,
                        "task_type": task.type.value,
                        "assignee_id": task.assignee_id,
                    }
                )
    return violations
