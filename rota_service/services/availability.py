# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Availability resolution — pure computation, no side effects.

A member is *active* on a day once they have joined and while no logged
absence covers that day. An active member is *available* for a duty unless
the duty honours busy days and the day is one of theirs.
"""

from datetime import date
from typing import Iterable, Sequence

from rota_service.models.dates import day_code, to_day
from rota_service.models.domain import (
    BUSY_DAY_DUTIES,
    AbsenceInterval,
    Member,
    TaskType,
)


def is_away(
    member_id: str, day: date, absences: Iterable[AbsenceInterval]
) -> bool:
    """True if any absence for the member covers ``day`` (inclusive bounds)."""
    day = to_day(day)
    return any(
        a.member_id == member_id
        and to_day(a.start_date) <= day <= to_day(a.end_date)
        for a in absences
    )


def is_active(
    member: Member, day: date, absences: Iterable[AbsenceInterval]
) -> bool:
    day = to_day(day)
    return to_day(member.start_date) <= day and not is_away(member.id, day, absences)


def is_available(
    member: Member,
    day: date,
    absences: Iterable[AbsenceInterval],
    task_type: TaskType,
) -> bool:
    """Active, and not on a busy day when the duty honours busy days."""
    if not is_active(member, day, absences):
        return False
    if task_type in BUSY_DAY_DUTIES:
        return day_code(to_day(day)) not in member.busy_days
    return True


def active_members(
    members: Sequence[Member], day: date, absences: Sequence[AbsenceInterval]
) -> list[Member]:
    """Active subset of ``members`` for ``day``, in roster order."""
    return [m for m in members if is_active(m, day, absences)]


def available_members(
    active: Sequence[Member], day: date, task_type: TaskType
) -> list[Member]:
    """Narrow an already-active subset to those free for ``task_type``."""
    if task_type not in BUSY_DAY_DUTIES:
        return list(active)
    code = day_code(to_day(day))
    return [m for m in active if code not in m.busy_days]
