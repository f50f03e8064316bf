"""Shift router - FastAPI endpoints for shift operations"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Shift, User
from ...rate_limiter import create_limiter
from ...schemas import WorkplaceSummary, single_page
from ...utils.datetimes import parse_date_param
from ..scheduling.recurrence import DEFAULT_MAX_INSTANCES
from .schemas import ShiftCreate, ShiftResponse, ShiftUpdate
from .service import ShiftService

router = APIRouter(prefix="/shifts", tags=["Shifts"])


def get_shift_service(db: Session = Depends(get_db)) -> ShiftService:
    """Dependency injection for ShiftService"""
    return ShiftService(db)


def shift_response(shift: Shift) -> ShiftResponse:
    workplace = shift.workplace
    return ShiftResponse(
        id=shift.id,
        userId=shift.user_id,
        workplaceId=shift.workplace_id,
        workplace=(
            WorkplaceSummary(
                id=workplace.id,
                name=workplace.name,
                color=workplace.color,
                hourlyRate=workplace.hourly_rate,
            )
            if workplace
            else None
        ),
        title=shift.title,
        startDatetime=shift.start_datetime,
        endDatetime=shift.end_datetime,
        breakDuration=shift.break_duration,
        notes=shift.notes,
        isConfirmed=shift.is_confirmed,
        actualStartTime=shift.actual_start_time,
        actualEndTime=shift.actual_end_time,
        isRecurring=shift.is_recurring,
        recurrencePattern=shift.recurrence_pattern,
        recurrenceEndDate=shift.recurrence_end_date,
        createdAt=shift.created_at,
        updatedAt=shift.updated_at,
    )


@router.get("")
async def get_shifts(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    workplace_id: Optional[int] = Query(None, alias="workplaceId"),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    """Get the current user's shifts with optional date and workplace filters"""
    try:
        start = parse_date_param(start_date)
        end = parse_date_param(end_date, end_of_day=True)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid date filter") from e

    shifts = [
        shift_response(s)
        for s in service.get_shifts(current_user, start, end, workplace_id, limit)
    ]
    return {"success": True, "data": shifts, "pagination": single_page(shifts)}


@router.get("/{shift_id}")
async def get_shift(
    shift_id: int,
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    return {"success": True, "data": shift_response(service.get_shift(shift_id, current_user))}


@router.post("", status_code=201, dependencies=[Depends(create_limiter)])
async def create_shift(
    data: ShiftCreate,
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    shift = service.create_shift(data, current_user)
    return {
        "success": True,
        "message": "Shift created successfully",
        "data": shift_response(shift),
    }


@router.put("/{shift_id}")
async def update_shift(
    shift_id: int,
    data: ShiftUpdate,
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    shift = service.update_shift(shift_id, data, current_user)
    return {
        "success": True,
        "message": "Shift updated successfully",
        "data": shift_response(shift),
    }


@router.delete("/{shift_id}")
async def delete_shift(
    shift_id: int,
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    service.delete_shift(shift_id, current_user)
    return {"success": True, "message": "Shift deleted successfully"}


@router.put("/{shift_id}/confirm")
async def confirm_shift(
    shift_id: int,
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    shift = service.confirm_shift(shift_id, current_user)
    return {
        "success": True,
        "message": "Shift confirmed successfully",
        "data": shift_response(shift),
    }


@router.put("/{shift_id}/clock-in")
async def clock_in(
    shift_id: int,
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    shift = service.clock_in(shift_id, current_user)
    return {"success": True, "message": "Clocked in successfully", "data": shift_response(shift)}


@router.put("/{shift_id}/clock-out")
async def clock_out(
    shift_id: int,
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    shift = service.clock_out(shift_id, current_user)
    return {"success": True, "message": "Clocked out successfully", "data": shift_response(shift)}


@router.get("/{shift_id}/occurrences")
async def get_shift_occurrences(
    shift_id: int,
    max_instances: int = Query(DEFAULT_MAX_INSTANCES, alias="maxInstances", ge=1, le=366),
    current_user: User = Depends(get_current_user),
    service: ShiftService = Depends(get_shift_service),
):
    """Expanded occurrences, next occurrence and status of a shift's recurrence"""
    summary = service.get_occurrences(shift_id, current_user, max_instances)
    return {"success": True, "data": summary}
