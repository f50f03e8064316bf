"""Study session repository - Database operations for study sessions"""

from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from ...models import StudySession


class StudySessionRepository:
    """Repository for study session database operations"""

    @staticmethod
    def get_sessions(
        db: Session,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        subject: Optional[str] = None,
        session_type: Optional[str] = None,
        priority: Optional[str] = None,
        limit: int = 100,
    ) -> list[StudySession]:
        """Get a user's study sessions, latest start first"""
        query = db.query(StudySession).filter(StudySession.user_id == user_id)

        if start is not None:
            query = query.filter(StudySession.start_datetime >= start)
        if end is not None:
            query = query.filter(StudySession.start_datetime <= end)
        if subject:
            query = query.filter(StudySession.subject == subject)
        if session_type:
            query = query.filter(StudySession.session_type == session_type)
        if priority:
            query = query.filter(StudySession.priority == priority)

        return (
            query.order_by(StudySession.start_datetime.desc(), StudySession.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_session_by_id(db: Session, session_id: int, user_id: int) -> Optional[StudySession]:
        return (
            db.query(StudySession)
            .filter(StudySession.id == session_id, StudySession.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_session(db: Session, user_id: int, **session_data) -> StudySession:
        session = StudySession(user_id=user_id, **session_data)
        db.add(session)
        db.commit()
        db.refresh(session)
        return session

    @staticmethod
    def update_session(db: Session, session: StudySession, **updates) -> StudySession:
        for key, value in updates.items():
            if hasattr(session, key):
                setattr(session, key, value)

        db.commit()
        db.refresh(session)
        return session

    @staticmethod
    def delete_session(db: Session, session: StudySession) -> None:
        db.delete(session)
        db.commit()

    @staticmethod
    def mark_completed(db: Session, session_id: int, user_id: int) -> bool:
        result = db.execute(
            update(StudySession)
            .where(StudySession.id == session_id, StudySession.user_id == user_id)
            .values(is_completed=True)
        )
        db.commit()
        return result.rowcount > 0
