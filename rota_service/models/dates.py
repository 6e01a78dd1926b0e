# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Calendar helpers — day-granularity normalisation and Monday-first weekday codes.
"""

from datetime import date, datetime, timedelta
from typing import Literal, Union

DayOfWeek = Literal["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

DAYS: tuple[DayOfWeek, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

DateLike = Union[date, datetime, str]


def to_day(value: DateLike) -> date:
    """
    Normalise a date, datetime or ISO string to its calendar day.

    Any time-of-day component is dropped, so "2024-01-07T23:30:00" and
    "2024-01-07" compare equal. Raises ValueError on anything unparseable.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) > 10:
                return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
            return date.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid calendar date: {value!r}") from None
    raise ValueError(f"Unsupported date value: {value!r}")


def day_code(day: date) -> DayOfWeek:
    # date.weekday() is already Monday-first (Mon=0 .. Sun=6)
    return DAYS[day.weekday()]


def display_date(day: date) -> str:
    """Short human label, e.g. 'Jan 5'."""
    return f"{day.strftime('%b')} {day.day}"


def add_days(day: date, offset: int) -> date:
    return day + timedelta(days=offset)
