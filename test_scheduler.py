# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false

"""
Tests for the availability resolver and the baseline duty scheduler.
Pure computation: no HTTP client, no repositories.
"""

from datetime import date, datetime

import pytest

from rota_service.models.dates import DAYS, day_code, display_date, to_day
from rota_service.models.domain import AbsenceInterval, Member, ProxyCounts, TaskType
from rota_service.services.availability import (
    active_members,
    available_members,
    is_active,
    is_available,
    is_away,
)
from rota_service.services.baseline_scheduler import (
    NOTE_ALL_BUSY,
    NOTE_NO_MEMBERS,
    NOTE_OVER_LIMIT,
    PROXY_SOFT_LIMIT,
    generate,
)

MONDAY = date(2024, 1, 1)


def _member(member_id, busy=(), start="2023-01-01"):
    return Member(id=member_id, name=member_id, start_date=start, busy_days=list(busy))


def _absence(member_id, start, end):
    return AbsenceInterval(member_id=member_id, start_date=start, end_date=end)


def _assignees(schedule, task_type):
    return [
        next((t.assignee_id for t in d.tasks if t.type == task_type), None)
        for d in schedule
    ]


# ============================================
# Calendar helpers
# ============================================
class TestCalendarHelpers:
    def test_days_are_monday_first(self):
        assert DAYS == ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

    def test_day_code_monday(self):
        assert day_code(date(2024, 1, 1)) == "Mon"

    def test_day_code_sunday_is_last(self):
        assert day_code(date(2024, 1, 7)) == "Sun"

    def test_to_day_drops_time_component(self):
        assert to_day("2024-01-07T23:59:59") == date(2024, 1, 7)
        assert to_day("2024-01-07T00:00:00Z") == date(2024, 1, 7)
        assert to_day(datetime(2024, 1, 7, 18, 30)) == date(2024, 1, 7)

    def test_to_day_plain_date(self):
        assert to_day("2024-01-07") == date(2024, 1, 7)
        assert to_day(date(2024, 1, 7)) == date(2024, 1, 7)

    def test_to_day_rejects_garbage(self):
        with pytest.raises(ValueError):
            to_day("not-a-date")
        with pytest.raises(ValueError):
            to_day("2024-13-01")
        with pytest.raises(ValueError):
            to_day(12345)

    def test_display_date(self):
        assert display_date(date(2024, 1, 5)) == "Jan 5"
        assert display_date(date(2024, 10, 19)) == "Oct 19"


# ============================================
# Availability resolver
# ============================================
class TestAvailability:
    def test_inactive_before_start_date(self):
        m = _member("A", start="2024-01-03")
        assert is_active(m, date(2024, 1, 2), []) is False
        assert is_active(m, date(2024, 1, 3), []) is True

    def test_absence_boundaries_are_inclusive(self):
        m = _member("A")
        absences = [_absence("A", "2024-01-05", "2024-01-07")]
        assert is_active(m, date(2024, 1, 4), absences) is True
        assert is_active(m, date(2024, 1, 5), absences) is False
        assert is_active(m, date(2024, 1, 6), absences) is False
        assert is_active(m, date(2024, 1, 7), absences) is False
        assert is_active(m, date(2024, 1, 8), absences) is True

    def test_absence_boundaries_ignore_time_of_day(self):
        m = _member("A")
        absences = [_absence("A", "2024-01-05T21:00:00", "2024-01-07T06:15:00")]
        assert absences[0].start_date == date(2024, 1, 5)
        assert absences[0].end_date == date(2024, 1, 7)
        assert is_active(m, date(2024, 1, 5), absences) is False
        assert is_active(m, date(2024, 1, 7), absences) is False
        assert is_active(m, datetime(2024, 1, 7, 23, 59), absences) is False
        assert is_active(m, datetime(2024, 1, 8, 0, 1), absences) is True

    def test_absence_of_other_member_ignored(self):
        m = _member("A")
        absences = [_absence("B", "2024-01-05", "2024-01-07")]
        assert is_away("A", date(2024, 1, 6), absences) is False
        assert is_away("B", date(2024, 1, 6), absences) is True

    def test_inverted_interval_never_matches(self):
        absences = [_absence("A", "2024-01-07", "2024-01-05")]
        assert is_away("A", date(2024, 1, 6), absences) is False

    def test_busy_day_blocks_proxy_duties_only(self):
        m = _member("A", busy=["Mon"])
        assert is_available(m, MONDAY, [], TaskType.PROXY_LUNCH) is False
        assert is_available(m, MONDAY, [], TaskType.PROXY_DINNER) is False
        assert is_available(m, MONDAY, [], TaskType.BUY_DRINKS) is True
        assert is_available(m, MONDAY, [], TaskType.WEEKEND_PREP) is True

    def test_absent_member_unavailable_for_everything(self):
        m = _member("A")
        absences = [_absence("A", "2024-01-01", "2024-01-01")]
        for task_type in TaskType:
            assert is_available(m, MONDAY, absences, task_type) is False

    def test_active_members_keeps_roster_order(self):
        roster = [_member("C"), _member("A"), _member("B", start="2025-01-01")]
        assert [m.id for m in active_members(roster, MONDAY, [])] == ["C", "A"]

    def test_available_members_narrows_active_subset(self):
        active = [_member("A", busy=["Mon"]), _member("B")]
        assert [m.id for m in available_members(active, MONDAY, TaskType.PROXY_LUNCH)] == ["B"]
        assert [m.id for m in available_members(active, MONDAY, TaskType.BUY_DRINKS)] == ["A", "B"]


# ============================================
# Baseline scheduler — shape
# ============================================
class TestScheduleShape:
    def test_length_and_day_numbers(self):
        schedule = generate([_member("A"), _member("B")], MONDAY, 30)
        assert len(schedule) == 30
        assert [d.date for d in schedule] == list(range(1, 31))

    def test_iso_dates_strictly_increase(self):
        schedule = generate([_member("A")], "2024-02-27", 5)
        assert [d.iso_date for d in schedule] == [
            "2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01", "2024-03-02",
        ]
        assert [d.day_of_week for d in schedule] == ["Tue", "Wed", "Thu", "Fri", "Sat"]
        assert schedule[0].display_date == "Feb 27"

    def test_empty_roster_yields_no_days(self):
        assert generate([], MONDAY, 14) == []

    def test_zero_days(self):
        assert generate([_member("A")], MONDAY, 0) == []

    def test_negative_days_rejected(self):
        with pytest.raises(ValueError):
            generate([_member("A")], MONDAY, -1)

    def test_malformed_start_date_rejected(self):
        with pytest.raises(ValueError):
            generate([_member("A")], "01/01/2024", 3)

    def test_task_order_within_day(self):
        schedule = generate([_member("A"), _member("B")], MONDAY, 7)
        thursday = schedule[3]
        assert [t.type for t in thursday.tasks] == [
            TaskType.PROXY_LUNCH,
            TaskType.PROXY_DINNER,
            TaskType.BUY_DRINKS,
            TaskType.WEEKEND_PREP,
        ]

    def test_task_ids_unique_and_fresh_per_run(self):
        roster = [_member("A"), _member("B"), _member("C")]
        first = generate(roster, MONDAY, 14)
        second = generate(roster, MONDAY, 14)
        ids_first = [t.id for d in first for t in d.tasks]
        ids_second = [t.id for d in second for t in d.tasks]
        assert len(set(ids_first)) == len(ids_first)
        assert not set(ids_first) & set(ids_second)

    def test_decisions_are_deterministic(self):
        roster = [_member("A", busy=["Tue"]), _member("B", busy=["Fri"]), _member("C")]
        absences = [_absence("C", "2024-01-03", "2024-01-04")]
        first = generate(roster, MONDAY, 21, absences)
        second = generate(roster, MONDAY, 21, absences)
        strip = lambda s: [[(t.type, t.assignee_id, t.note) for t in d.tasks] for d in s]
        assert strip(first) == strip(second)

    def test_tasks_start_incomplete(self):
        schedule = generate([_member("A")], MONDAY, 3)
        assert all(not t.completed for d in schedule for t in d.tasks)


# ============================================
# Baseline scheduler — assignment policy
# ============================================
class TestAssignmentPolicy:
    def test_example_busy_member_skipped_for_proxy_but_buys_drinks(self):
        roster = [_member("A", busy=["Mon"]), _member("B"), _member("C")]
        [day] = generate(roster, MONDAY, 1)
        by_type = {t.type: t for t in day.tasks}
        assert by_type[TaskType.PROXY_LUNCH].assignee_id in ("B", "C")
        assert by_type[TaskType.PROXY_DINNER].assignee_id in ("B", "C")
        assert by_type[TaskType.BUY_DRINKS].assignee_id == "A"
        assert TaskType.WEEKEND_PREP not in by_type

    def test_least_loaded_ties_go_to_roster_order(self):
        schedule = generate([_member("A"), _member("B")], MONDAY, 4)
        assert _assignees(schedule, TaskType.PROXY_LUNCH) == ["A", "B", "A", "B"]
        assert _assignees(schedule, TaskType.PROXY_DINNER) == ["A", "B", "A", "B"]

    def test_least_loaded_invariant_holds_every_day(self):
        roster = [
            _member("A", busy=["Mon", "Wed"]),
            _member("B", busy=["Tue", "Thu"]),
            _member("C", busy=["Fri"]),
            _member("D", busy=["Mon", "Tue"]),
        ]
        absences = [_absence("C", "2024-01-08", "2024-01-12")]
        schedule = generate(roster, MONDAY, 30, absences)
        counts = {m.id: 0 for m in roster}
        order = [m.id for m in roster]
        for d in schedule:
            day = date.fromisoformat(d.iso_date)
            pool = [
                m.id for m in roster
                if is_available(m, day, absences, TaskType.PROXY_LUNCH)
            ]
            lunch = d.tasks[0]
            assert lunch.type == TaskType.PROXY_LUNCH
            if not pool:
                assert lunch.assignee_id is None
                continue
            chosen = lunch.assignee_id
            assert chosen in pool
            assert all(counts[chosen] <= counts[other] for other in pool)
            tied = [mid for mid in pool if counts[mid] == counts[chosen]]
            assert chosen == min(tied, key=order.index)
            counts[chosen] += 1

    def test_lunch_and_dinner_counters_are_independent(self):
        roster = [_member("A"), _member("B", busy=["Mon"])]
        schedule = generate(roster, MONDAY, 2)
        # Mon: only A is free for both; Tue: B is least loaded for both
        assert _assignees(schedule, TaskType.PROXY_LUNCH) == ["A", "B"]
        assert _assignees(schedule, TaskType.PROXY_DINNER) == ["A", "B"]

    def test_everyone_busy_leaves_proxy_unassigned(self):
        roster = [_member("A", busy=["Mon"]), _member("B", busy=["Mon"])]
        [day] = generate(roster, MONDAY, 1)
        lunch, dinner, drinks = day.tasks
        assert lunch.assignee_id is None and lunch.note == NOTE_ALL_BUSY
        assert dinner.assignee_id is None and dinner.note == NOTE_ALL_BUSY
        assert drinks.type == TaskType.BUY_DRINKS
        assert drinks.assignee_id == "A"

    def test_over_limit_note_is_advisory(self):
        schedule = generate([_member("A")], MONDAY, PROXY_SOFT_LIMIT + 2)
        lunch_notes = [d.tasks[0].note for d in schedule]
        assert lunch_notes[:PROXY_SOFT_LIMIT] == [None] * PROXY_SOFT_LIMIT
        assert lunch_notes[PROXY_SOFT_LIMIT:] == [NOTE_OVER_LIMIT, NOTE_OVER_LIMIT]
        assert all(d.tasks[0].assignee_id == "A" for d in schedule)

    def test_caller_counters_ignored_and_untouched(self):
        a = _member("A")
        a.proxy_counts = ProxyCounts(lunch=5, dinner=5)
        b = _member("B")
        schedule = generate([a, b], MONDAY, 3)
        # run counters start at zero, so A (first in roster) still wins day 1
        assert _assignees(schedule, TaskType.PROXY_LUNCH) == ["A", "B", "A"]
        assert a.proxy_counts.lunch == 5
        assert b.proxy_counts.lunch == 0

    def test_roster_list_not_mutated(self):
        roster = [_member("A"), _member("B")]
        snapshot = [m.model_dump() for m in roster]
        generate(roster, MONDAY, 10)
        assert [m.model_dump() for m in roster] == snapshot


# ============================================
# Baseline scheduler — rotations
# ============================================
class TestRotations:
    def test_drinks_cycles_through_constant_roster(self):
        roster = [_member("A"), _member("B"), _member("C")]
        schedule = generate(roster, MONDAY, 7)
        assert _assignees(schedule, TaskType.BUY_DRINKS) == ["A", "B", "C", "A", "B", "C", "A"]

    def test_drinks_pointer_indexes_days_active_subset(self):
        roster = [_member("A"), _member("B"), _member("C")]
        absences = [_absence("B", "2024-01-02", "2024-01-02")]
        schedule = generate(roster, MONDAY, 3, absences)
        # pointer 0 over [A,B,C], 1 over [A,C], 2 over [A,B,C]
        assert _assignees(schedule, TaskType.BUY_DRINKS) == ["A", "C", "C"]

    def test_weekend_prep_only_thursday_and_friday(self):
        roster = [_member(x) for x in "ABCD"]
        schedule = generate(roster, MONDAY, 7)
        prep_days = [
            d.date for d in schedule
            if any(t.type == TaskType.WEEKEND_PREP for t in d.tasks)
        ]
        assert prep_days == [4, 5]
        thu_prep = schedule[3].tasks[-1]
        fri_prep = schedule[4].tasks[-1]
        assert "Dinner Prep" in thu_prep.note
        assert "All-Day Prep" in fri_prep.note

    def test_thursday_and_friday_pointers_are_independent(self):
        roster = [_member(x) for x in "ABC"]
        schedule = generate(roster, MONDAY, 21)
        thu = [d.tasks[-1].assignee_id for d in schedule if d.day_of_week == "Thu"]
        fri = [d.tasks[-1].assignee_id for d in schedule if d.day_of_week == "Fri"]
        assert thu == ["A", "B", "C"]
        assert fri == ["A", "B", "C"]

    def test_weekend_prep_ignores_busy_days(self):
        roster = [_member("A", busy=["Thu"]), _member("B")]
        schedule = generate(roster, MONDAY, 4)
        assert schedule[3].tasks[-1].type == TaskType.WEEKEND_PREP
        assert schedule[3].tasks[-1].assignee_id == "A"


# ============================================
# Baseline scheduler — empty days
# ============================================
class TestNobodyActive:
    def test_placeholder_task_before_anyone_joins(self):
        roster = [_member("A", start="2024-01-03"), _member("B", start="2024-01-03")]
        schedule = generate(roster, MONDAY, 3)
        for d in schedule[:2]:
            assert len(d.tasks) == 1
            [task] = d.tasks
            assert task.type == TaskType.PROXY_LUNCH
            assert task.assignee_id is None
            assert task.note == NOTE_NO_MEMBERS

    def test_pointers_do_not_advance_on_empty_days(self):
        roster = [_member("A", start="2024-01-03"), _member("B", start="2024-01-03")]
        schedule = generate(roster, MONDAY, 4)
        assert _assignees(schedule, TaskType.BUY_DRINKS) == [None, None, "A", "B"]

    def test_everyone_away_on_thursday_has_no_prep(self):
        roster = [_member("A"), _member("B")]
        absences = [
            _absence("A", "2024-01-04", "2024-01-04"),
            _absence("B", "2024-01-04", "2024-01-04"),
        ]
        schedule = generate(roster, MONDAY, 7, absences)
        assert len(schedule[3].tasks) == 1
        assert schedule[3].tasks[0].note == NOTE_NO_MEMBERS

    def test_assignees_always_active(self):
        roster = [
            _member("A", start="2024-01-05"),
            _member("B", busy=["Sat", "Sun"]),
            _member("C"),
        ]
        absences = [
            _absence("B", "2024-01-08", "2024-01-10"),
            _absence("C", "2024-01-09", "2024-01-15"),
        ]
        by_id = {m.id: m for m in roster}
        for d in generate(roster, MONDAY, 30, absences):
            day = date.fromisoformat(d.iso_date)
            for t in d.tasks:
                if t.assignee_id is not None:
                    assert is_active(by_id[t.assignee_id], day, absences)
