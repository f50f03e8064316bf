"""Schedule router - merged calendar of shifts and study sessions"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...utils.datetimes import parse_date_param, start_of_day, utcnow
from .service import ScheduleService

router = APIRouter(prefix="/schedule", tags=["Schedule"])


def get_schedule_service(db: Session = Depends(get_db)) -> ScheduleService:
    return ScheduleService(db)


@router.get("")
async def get_schedule(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    current_user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    """Occurrences of every shift and study session in the window (default: the next 7 days)"""
    try:
        window_start = parse_date_param(start_date) or start_of_day(utcnow().date())
        window_end = parse_date_param(end_date, end_of_day=True)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid date filter") from e

    if window_end is not None and window_end < window_start:
        raise HTTPException(status_code=400, detail="endDate must not be before startDate")

    entries = service.get_calendar(current_user, window_start, window_end)
    return {"success": True, "data": entries}
