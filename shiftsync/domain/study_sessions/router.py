"""Study session router - FastAPI endpoints for study session operations"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import StudySession, User
from ...rate_limiter import create_limiter
from ...schemas import single_page
from ...utils.datetimes import parse_date_param
from ..scheduling.recurrence import DEFAULT_MAX_INSTANCES
from .schemas import (
    Priority,
    SessionType,
    StudySessionCreate,
    StudySessionResponse,
    StudySessionUpdate,
)
from .service import StudySessionService

router = APIRouter(prefix="/study-sessions", tags=["Study Sessions"])


def get_study_session_service(db: Session = Depends(get_db)) -> StudySessionService:
    """Dependency injection for StudySessionService"""
    return StudySessionService(db)


def study_session_response(session: StudySession) -> StudySessionResponse:
    return StudySessionResponse(
        id=session.id,
        userId=session.user_id,
        title=session.title,
        subject=session.subject,
        startDatetime=session.start_datetime,
        endDatetime=session.end_datetime,
        location=session.location,
        sessionType=session.session_type,
        priority=session.priority,
        isCompleted=session.is_completed,
        notes=session.notes,
        isRecurring=session.is_recurring,
        recurrencePattern=session.recurrence_pattern,
        recurrenceEndDate=session.recurrence_end_date,
        createdAt=session.created_at,
        updatedAt=session.updated_at,
    )


@router.get("")
async def get_study_sessions(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    subject: Optional[str] = Query(None),
    session_type: Optional[SessionType] = Query(None, alias="sessionType"),
    priority: Optional[Priority] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    current_user: User = Depends(get_current_user),
    service: StudySessionService = Depends(get_study_session_service),
):
    """Get the current user's study sessions with optional filters"""
    try:
        start = parse_date_param(start_date)
        end = parse_date_param(end_date, end_of_day=True)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid date filter") from e

    sessions = [
        study_session_response(s)
        for s in service.get_sessions(
            current_user,
            start,
            end,
            subject,
            session_type.value if session_type else None,
            priority.value if priority else None,
            limit,
        )
    ]
    return {"success": True, "data": sessions, "pagination": single_page(sessions)}


@router.get("/{session_id}")
async def get_study_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    service: StudySessionService = Depends(get_study_session_service),
):
    session = service.get_session(session_id, current_user)
    return {"success": True, "data": study_session_response(session)}


@router.post("", status_code=201, dependencies=[Depends(create_limiter)])
async def create_study_session(
    data: StudySessionCreate,
    current_user: User = Depends(get_current_user),
    service: StudySessionService = Depends(get_study_session_service),
):
    session = service.create_session(data, current_user)
    return {
        "success": True,
        "message": "Study session created successfully",
        "data": study_session_response(session),
    }


@router.put("/{session_id}")
async def update_study_session(
    session_id: int,
    data: StudySessionUpdate,
    current_user: User = Depends(get_current_user),
    service: StudySessionService = Depends(get_study_session_service),
):
    session = service.update_session(session_id, data, current_user)
    return {
        "success": True,
        "message": "Study session updated successfully",
        "data": study_session_response(session),
    }


@router.delete("/{session_id}")
async def delete_study_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    service: StudySessionService = Depends(get_study_session_service),
):
    service.delete_session(session_id, current_user)
    return {"success": True, "message": "Study session deleted successfully"}


@router.put("/{session_id}/complete")
async def complete_study_session(
    session_id: int,
    current_user: User = Depends(get_current_user),
    service: StudySessionService = Depends(get_study_session_service),
):
    session = service.complete_session(session_id, current_user)
    return {
        "success": True,
        "message": "Study session marked as completed",
        "data": study_session_response(session),
    }


@router.get("/{session_id}/occurrences")
async def get_study_session_occurrences(
    session_id: int,
    max_instances: int = Query(DEFAULT_MAX_INSTANCES, alias="maxInstances", ge=1, le=366),
    current_user: User = Depends(get_current_user),
    service: StudySessionService = Depends(get_study_session_service),
):
    """Expanded occurrences, next occurrence and status of a study session's recurrence"""
    summary = service.get_occurrences(session_id, current_user, max_instances)
    return {"success": True, "data": summary}
