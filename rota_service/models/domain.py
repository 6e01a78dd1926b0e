# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
Serialised with camelCase aliases so schedules keep one wire shape
for the API, the store and the enhancement transform.
"""

import datetime as dt
import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from rota_service.models.dates import DayOfWeek, to_day


def new_id() -> str:
    return str(uuid.uuid4())


class TaskType(str, Enum):
    PROXY_LUNCH = "Proxy Lunch"
    PROXY_DINNER = "Proxy Dinner"
    BUY_DRINKS = "Buy Drinks"
    WEEKEND_PREP = "Weekend Prep"


# Duties that honour a member's fixed weekly busy days.
BUSY_DAY_DUTIES: frozenset[TaskType] = frozenset(
    {TaskType.PROXY_LUNCH, TaskType.PROXY_DINNER}
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProxyCounts(CamelModel):
    lunch: int = Field(default=0, ge=0)
    dinner: int = Field(default=0, ge=0)


class Member(CamelModel):
    """A household member who can be rostered for duties."""
    id: str = Field(default_factory=new_id, min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255, description="Member name")
    start_date: dt.date = Field(..., description="Inclusive join date")
    busy_days: list[DayOfWeek] = Field(
        default_factory=list, description="Weekdays never assigned proxy duty"
    )
    proxy_counts: ProxyCounts = Field(default_factory=ProxyCounts)

    @field_validator("start_date", mode="before")
    @classmethod
    def normalise_start_date(cls, v):
        return to_day(v)

    @field_validator("busy_days")
    @classmethod
    def dedupe_busy_days(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))


class AbsenceInterval(CamelModel):
    """A logged stretch of days a member is away (home visit)."""
    id: str = Field(default_factory=new_id)
    member_id: str = Field(..., min_length=1)
    start_date: dt.date
    end_date: dt.date
    reason: Optional[str] = Field(default=None, max_length=255)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalise_day(cls, v):
        return to_day(v)


class Task(CamelModel):
    id: str = Field(default_factory=new_id)
    type: TaskType
    assignee_id: Optional[str] = None
    note: Optional[str] = None
    completed: bool = False


class DaySchedule(CamelModel):
    date: int = Field(..., ge=1, description="1-based day number within the run")
    display_date: str
    iso_date: str
    day_of_week: DayOfWeek
    tasks: list[Task] = Field(default_factory=list)


class ReminderSettings(CamelModel):
    enabled: bool = False
    days_before: int = Field(default=0, ge=0, le=30)
    time: str = Field(default="09:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    task_types: list[TaskType] = Field(
        default_factory=lambda: [
            TaskType.PROXY_LUNCH,
            TaskType.PROXY_DINNER,
            TaskType.WEEKEND_PREP,
        ]
    )
    email: Optional[str] = Field(default=None, max_length=255)
    email_enabled: bool = False


class Notification(CamelModel):
    id: str = Field(default_factory=new_id)
    title: str
    message: str
    timestamp: str
    read: bool = False
    type: str = "reminder"
