"""Shift repository - Database operations for shifts"""

from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload

from ...models import Shift


class ShiftRepository:
    """Repository for shift database operations"""

    @staticmethod
    def get_shifts(
        db: Session,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        workplace_id: Optional[int] = None,
        limit: int = 100,
    ) -> list[Shift]:
        """Get a user's shifts, latest start first"""
        query = (
            db.query(Shift)
            .options(joinedload(Shift.workplace))
            .filter(Shift.user_id == user_id)
        )

        if start is not None:
            query = query.filter(Shift.start_datetime >= start)
        if end is not None:
            query = query.filter(Shift.start_datetime <= end)
        if workplace_id is not None:
            query = query.filter(Shift.workplace_id == workplace_id)

        return query.order_by(Shift.start_datetime.desc(), Shift.id.desc()).limit(limit).all()

    @staticmethod
    def get_shift_by_id(db: Session, shift_id: int, user_id: int) -> Optional[Shift]:
        return (
            db.query(Shift)
            .options(joinedload(Shift.workplace))
            .filter(Shift.id == shift_id, Shift.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_shift(db: Session, user_id: int, **shift_data) -> Shift:
        shift = Shift(user_id=user_id, **shift_data)
        db.add(shift)
        db.commit()
        db.refresh(shift)
        return shift

    @staticmethod
    def update_shift(db: Session, shift: Shift, **updates) -> Shift:
        for key, value in updates.items():
            if hasattr(shift, key):
                setattr(shift, key, value)

        db.commit()
        db.refresh(shift)
        return shift

    @staticmethod
    def delete_shift(db: Session, shift: Shift) -> None:
        db.delete(shift)
        db.commit()

    @staticmethod
    def update_if(db: Session, shift_id: int, user_id: int, *conditions, **values) -> bool:
        """
        Conditionally update one shift in a single statement.
        Returns False when no row matched (missing, not owned, or condition unmet).
        """
        result = db.execute(
            update(Shift)
            .where(Shift.id == shift_id, Shift.user_id == user_id, *conditions)
            .values(**values)
        )
        db.commit()
        return result.rowcount > 0
