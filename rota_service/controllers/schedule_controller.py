# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Schedule generation, queries and task completion.
Thin HTTP layer — delegates ALL logic to ScheduleService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from rota_service.core.dependencies import get_schedule_service
from rota_service.models.dates import DayOfWeek
from rota_service.models.domain import DaySchedule, Task, TaskType
from rota_service.schemas.rota import (
    ScheduleEnhanceRequest,
    ScheduleGenerateRequest,
    ScheduleRunResponse,
    TaskUpdateRequest,
)
from rota_service.services.schedule_service import ScheduleService

router = APIRouter(prefix="/api/v1", tags=["Schedule"])


@router.post("/schedule/generate", status_code=201, response_model=ScheduleRunResponse)
def generate_schedule(
    payload: Optional[ScheduleGenerateRequest] = None,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Generate the baseline schedule and replace the stored one."""
    payload = payload or ScheduleGenerateRequest()
    try:
        return service.generate_baseline(payload.start_date, payload.days)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/schedule/enhance", status_code=201, response_model=ScheduleRunResponse)
def enhance_schedule(
    payload: Optional[ScheduleEnhanceRequest] = None,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Generate a baseline, run it through the enhancer, fall back on failure."""
    payload = payload or ScheduleEnhanceRequest()
    try:
        return service.generate_enhanced(payload.start_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/schedule", response_model=list[DaySchedule])
def get_schedule(
    day: Optional[DayOfWeek] = Query(default=None, description="Weekday code, e.g. Mon"),
    task_type: Optional[TaskType] = Query(default=None),
    assignee_id: Optional[str] = Query(default=None),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Current schedule, optionally filtered by weekday, duty and assignee."""
    return service.get_schedule(day=day, task_type=task_type, assignee_id=assignee_id)


@router.get("/schedule/info")
def get_schedule_info(service: ScheduleService = Depends(get_schedule_service)):
    """Metadata of the run that produced the current schedule."""
    return service.get_run_info()


@router.get("/schedule/stats")
def get_schedule_stats(service: ScheduleService = Depends(get_schedule_service)):
    """Assignment counts per member and duty."""
    return service.get_stats()


@router.patch("/schedule/tasks/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    payload: TaskUpdateRequest,
    service: ScheduleService = Depends(get_schedule_service),
):
    """Mark a task complete or reopen it."""
    try:
        return service.set_task_completed(task_id, payload.completed)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))
