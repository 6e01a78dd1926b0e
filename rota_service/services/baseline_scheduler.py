# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Baseline duty scheduler — pure computation, no side effects.

Walks the horizon one day at a time. Proxy lunch and dinner go to the
least-loaded available member (earliest roster position wins ties);
drinks and weekend prep round-robin over the day's active members.
No I/O, no metrics, no logging.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from rota_service.models.dates import DateLike, add_days, day_code, display_date, to_day
from rota_service.models.domain import (
    AbsenceInterval,
    DaySchedule,
    Member,
    Task,
    TaskType,
)
from rota_service.services.availability import active_members, available_members

# Advisory only: assignments past this count are still made, but flagged.
PROXY_SOFT_LIMIT = 8

NOTE_NO_MEMBERS = "No members available"
NOTE_ALL_BUSY = "All active members busy"
NOTE_OVER_LIMIT = "Over limit (fallback)"

# Weekday code -> (pointer key, note) for weekend prep days.
WEEKEND_PREP_DAYS: dict[str, tuple[str, str]] = {
    "Thu": ("thu_prep", "Thu Dinner Prep"),
    "Fri": ("fri_prep", "Fri All-Day Prep"),
}

_PROXY_COUNTER = {
    TaskType.PROXY_LUNCH: "lunch",
    TaskType.PROXY_DINNER: "dinner",
}


@dataclass
class RotationState:
    """Working state of one run. Built fresh per call, never shared."""
    counts: dict[str, dict[str, int]]
    pointers: dict[str, int] = field(
        default_factory=lambda: {"drinks": 0, "thu_prep": 0, "fri_prep": 0}
    )

    @classmethod
    def for_roster(cls, members: Sequence[Member]) -> "RotationState":
        return cls(counts={m.id: {"lunch": 0, "dinner": 0} for m in members})

    def rotate(self, key: str, pool: Sequence[Member]) -> Member:
        """Pick ``pool[pointer % len(pool)]`` and advance that pointer."""
        chosen = pool[self.pointers[key] % len(pool)]
        self.pointers[key] += 1
        return chosen


def _least_loaded(pool: Sequence[Member], state: RotationState, counter: str) -> Member:
    # min() keeps the first of equal keys, so roster order breaks ties
    return min(pool, key=lambda m: state.counts[m.id][counter])


def _assign_proxy(
    task_type: TaskType,
    active: Sequence[Member],
    day,
    state: RotationState,
) -> Task:
    pool = available_members(active, day, task_type)
    if not pool:
        return Task(type=task_type, assignee_id=None, note=NOTE_ALL_BUSY)

    counter = _PROXY_COUNTER[task_type]
    chosen = _least_loaded(pool, state, counter)
    state.counts[chosen.id][counter] += 1
    note: Optional[str] = None
    if state.counts[chosen.id][counter] > PROXY_SOFT_LIMIT:
        note = NOTE_OVER_LIMIT
    return Task(type=task_type, assignee_id=chosen.id, note=note)


def generate(
    members: Sequence[Member],
    start_date: DateLike,
    number_of_days: int,
    absences: Sequence[AbsenceInterval] = (),
) -> list[DaySchedule]:
    """
    Build the baseline schedule for ``number_of_days`` days from ``start_date``.

    Returns one DaySchedule per day, in order. An empty roster yields an
    empty list. Days nobody can cover get unassigned tasks carrying a note;
    this function never raises for that. Raises ValueError only for a
    negative horizon or an unparseable start date.
    """
    if number_of_days < 0:
        raise ValueError(f"number_of_days must be >= 0, got {number_of_days}")
    start = to_day(start_date)
    if not members:
        return []

    roster = list(members)
    absences = list(absences)
    state = RotationState.for_roster(roster)
    schedule: list[DaySchedule] = []

    for i in range(number_of_days):
        day = add_days(start, i)
        code = day_code(day)
        active = active_members(roster, day, absences)

        tasks: list[Task] = []
        if not active:
            tasks.append(
                Task(type=TaskType.PROXY_LUNCH, assignee_id=None, note=NOTE_NO_MEMBERS)
            )
        else:
            tasks.append(_assign_proxy(TaskType.PROXY_LUNCH, active, day, state))
            tasks.append(_assign_proxy(TaskType.PROXY_DINNER, active, day, state))

            drinks = state.rotate("drinks", active)
            tasks.append(Task(type=TaskType.BUY_DRINKS, assignee_id=drinks.id))

            if code in WEEKEND_PREP_DAYS:
                key, note = WEEKEND_PREP_DAYS[code]
                prep = state.rotate(key, active)
                tasks.append(
                    Task(type=TaskType.WEEKEND_PREP, assignee_id=prep.id, note=note)
                )

        schedule.append(
            DaySchedule(
                date=i + 1,
                display_date=display_date(day),
                iso_date=day.isoformat(),
                day_of_week=code,
                tasks=tasks,
            )
        )

    return schedule
