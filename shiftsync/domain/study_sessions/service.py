"""Study session service - Business logic for study session operations"""

import logging
from datetime import datetime
from enum import Enum
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import StudySession, User
from ...schemas import RecurrenceSummaryResponse, check_schedule
from ...utils.datetimes import utcnow
from ..scheduling.service import summarize
from .repository import StudySessionRepository
from .schemas import StudySessionCreate, StudySessionUpdate

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "title": "title",
    "subject": "subject",
    "startDatetime": "start_datetime",
    "endDatetime": "end_datetime",
    "location": "location",
    "sessionType": "session_type",
    "priority": "priority",
    "isCompleted": "is_completed",
    "notes": "notes",
    "isRecurring": "is_recurring",
    "recurrencePattern": "recurrence_pattern",
    "recurrenceEndDate": "recurrence_end_date",
}
NON_NULLABLE = {
    "title",
    "start_datetime",
    "end_datetime",
    "session_type",
    "priority",
    "is_completed",
    "is_recurring",
}


def _column_values(values: dict) -> dict:
    # Enums are stored as their plain string values
    return {
        FIELD_MAP[key]: value.value if isinstance(value, Enum) else value
        for key, value in values.items()
    }


class StudySessionService:
    """Service layer for study session business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = StudySessionRepository()

    def get_sessions(
        self,
        user: User,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        subject: Optional[str] = None,
        session_type: Optional[str] = None,
        priority: Optional[str] = None,
        limit: int = 100,
    ) -> list[StudySession]:
        return self.repo.get_sessions(
            self.db, user.id, start, end, subject, session_type, priority, limit
        )

    def get_session(self, session_id: int, user: User) -> StudySession:
        session = self.repo.get_session_by_id(self.db, session_id, user.id)
        if not session:
            raise HTTPException(status_code=404, detail="Study session not found")
        return session

    def create_session(self, data: StudySessionCreate, user: User) -> StudySession:
        logger.info(f"📥 Creating study session for user_id: {user.id}")
        return self.repo.create_session(self.db, user.id, **_column_values(data.model_dump()))

    def update_session(
        self, session_id: int, data: StudySessionUpdate, user: User
    ) -> StudySession:
        session = self.get_session(session_id, user)

        updates = {
            key: value
            for key, value in _column_values(data.model_dump(exclude_unset=True)).items()
            if value is not None or key not in NON_NULLABLE
        }

        merged = {key: getattr(session, key) for key in FIELD_MAP.values()}
        merged.update(updates)
        try:
            check_schedule(
                merged["start_datetime"],
                merged["end_datetime"],
                merged["is_recurring"],
                merged["recurrence_pattern"],
                merged["recurrence_end_date"],
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        logger.info(f"✏️ Updating study session {session_id} for user_id: {user.id}")
        return self.repo.update_session(self.db, session, **updates)

    def delete_session(self, session_id: int, user: User) -> None:
        session = self.get_session(session_id, user)
        self.repo.delete_session(self.db, session)
        logger.info(f"🗑️ Deleted study session {session_id} for user_id: {user.id}")

    def complete_session(self, session_id: int, user: User) -> StudySession:
        if not self.repo.mark_completed(self.db, session_id, user.id):
            raise HTTPException(status_code=404, detail="Study session not found")
        return self.get_session(session_id, user)

    def get_occurrences(
        self, session_id: int, user: User, max_instances: int, now: Optional[datetime] = None
    ) -> RecurrenceSummaryResponse:
        session = self.get_session(session_id, user)
        return summarize(session, now or utcnow(), max_instances)
