# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""

import datetime as dt
from typing import Optional

from pydantic import Field, field_validator

from rota_service.core.config import settings
from rota_service.models.dates import DayOfWeek, to_day
from rota_service.models.domain import CamelModel, DaySchedule


class _DayInput(CamelModel):
    """Accept dates with or without a time component; keep the calendar day."""

    @field_validator("start_date", "end_date", mode="before", check_fields=False)
    @classmethod
    def normalise_day(cls, v):
        return None if v is None else to_day(v)


# ── Member Schemas ──

class MemberCreateRequest(_DayInput):
    id: Optional[str] = Field(default=None, min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255, description="Member name")
    start_date: dt.date = Field(..., description="Inclusive join date")
    busy_days: list[DayOfWeek] = Field(default_factory=list)


class MemberUpdateRequest(_DayInput):
    """Partial update model for PATCH /api/v1/members/{member_id}."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    start_date: Optional[dt.date] = None
    busy_days: Optional[list[DayOfWeek]] = None


# ── Absence Schemas ──

class AbsenceCreateRequest(_DayInput):
    member_id: str = Field(..., min_length=1)
    start_date: dt.date
    end_date: dt.date
    reason: Optional[str] = Field(default=None, max_length=255)


# ── Schedule Schemas ──

class ScheduleGenerateRequest(_DayInput):
    start_date: Optional[dt.date] = Field(
        default=None, description="First day of the run (defaults to today)"
    )
    days: Optional[int] = Field(
        default=None,
        ge=0,
        le=settings.MAX_HORIZON_DAYS,
        description="Horizon length in days",
    )


class ScheduleEnhanceRequest(_DayInput):
    start_date: Optional[dt.date] = None


class ScheduleRunResponse(CamelModel):
    source: str
    fallback: bool
    start_date: str
    days: int
    generated_at: str
    schedule: list[DaySchedule]


class TaskUpdateRequest(CamelModel):
    completed: bool


# ── Reminder Schemas ──

class ReminderCheckRequest(CamelModel):
    today: Optional[dt.date] = None
