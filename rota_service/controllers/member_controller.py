# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Member and absence endpoints.
Thin HTTP layer — delegates ALL logic to RosterService / ScheduleService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from rota_service.core.dependencies import get_roster_service, get_schedule_service
from rota_service.models.domain import AbsenceInterval, Member
from rota_service.schemas.rota import (
    AbsenceCreateRequest,
    MemberCreateRequest,
    MemberUpdateRequest,
)
from rota_service.services.roster_service import RosterService
from rota_service.services.schedule_service import ScheduleService

router = APIRouter(prefix="/api/v1", tags=["Roster"])


# ── Members ──

@router.post("/members", status_code=201, response_model=Member)
def create_member(
    payload: MemberCreateRequest,
    service: RosterService = Depends(get_roster_service),
):
    """Add a member to the end of the roster."""
    try:
        return service.create_member(
            name=payload.name,
            start_date=payload.start_date,
            busy_days=payload.busy_days,
            member_id=payload.id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/members", response_model=list[Member])
def list_members(service: RosterService = Depends(get_roster_service)):
    """List members in roster order."""
    return service.list_members()


@router.get("/members/{member_id}", response_model=Member)
def get_member(
    member_id: str,
    service: RosterService = Depends(get_roster_service),
):
    try:
        return service.get_member(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/members/{member_id}", response_model=Member)
def update_member(
    member_id: str,
    payload: MemberUpdateRequest,
    service: RosterService = Depends(get_roster_service),
):
    """Partially update a member (name, join date, busy days)."""
    try:
        return service.update_member(
            member_id,
            name=payload.name,
            start_date=payload.start_date,
            busy_days=payload.busy_days,
        )
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/members/{member_id}")
def delete_member(
    member_id: str,
    service: RosterService = Depends(get_roster_service),
):
    try:
        return service.delete_member(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/members/{member_id}/tasks")
def list_member_tasks(
    member_id: str,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Pending tasks assigned to a member, soonest first."""
    try:
        return service.upcoming_tasks(member_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ── Absences ──

@router.post("/absences", status_code=201, response_model=AbsenceInterval)
def log_absence(
    payload: AbsenceCreateRequest,
    service: RosterService = Depends(get_roster_service),
):
    """Log a stretch of days a member is away."""
    try:
        return service.log_absence(
            member_id=payload.member_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            reason=payload.reason,
        )
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/absences", response_model=list[AbsenceInterval])
def list_absences(
    member_id: Optional[str] = None,
    service: RosterService = Depends(get_roster_service),
):
    return service.list_absences(member_id)


@router.delete("/absences/{absence_id}")
def delete_absence(
    absence_id: str,
    service: RosterService = Depends(get_roster_service),
):
    try:
        return service.delete_absence(absence_id)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
