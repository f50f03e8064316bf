"""Shift service - Business logic for shift operations"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Shift, User
from ...schemas import RecurrenceSummaryResponse, check_schedule
from ...utils.datetimes import utcnow
from ..scheduling.service import summarize
from ..workplaces.repository import WorkplaceRepository
from .repository import ShiftRepository
from .schemas import ShiftCreate, ShiftUpdate

logger = logging.getLogger(__name__)

FIELD_MAP = {
    "workplaceId": "workplace_id",
    "title": "title",
    "startDatetime": "start_datetime",
    "endDatetime": "end_datetime",
    "breakDuration": "break_duration",
    "notes": "notes",
    "isConfirmed": "is_confirmed",
    "isRecurring": "is_recurring",
    "recurrencePattern": "recurrence_pattern",
    "recurrenceEndDate": "recurrence_end_date",
}
# Columns that can't be cleared by sending null
NON_NULLABLE = {
    "workplace_id",
    "title",
    "start_datetime",
    "end_datetime",
    "break_duration",
    "is_confirmed",
    "is_recurring",
}


class ShiftService:
    """Service layer for shift business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ShiftRepository()
        self.workplaces = WorkplaceRepository()

    def get_shifts(
        self,
        user: User,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        workplace_id: Optional[int] = None,
        limit: int = 100,
    ) -> list[Shift]:
        return self.repo.get_shifts(self.db, user.id, start, end, workplace_id, limit)

    def get_shift(self, shift_id: int, user: User) -> Shift:
        shift = self.repo.get_shift_by_id(self.db, shift_id, user.id)
        if not shift:
            raise HTTPException(status_code=404, detail="Shift not found")
        return shift

    def _require_workplace(self, workplace_id: int, user: User) -> None:
        if not self.workplaces.get_workplace_by_id(self.db, workplace_id, user.id):
            raise HTTPException(status_code=404, detail="Workplace not found")

    def create_shift(self, data: ShiftCreate, user: User) -> Shift:
        logger.info(f"📥 Creating shift for user_id: {user.id}")
        self._require_workplace(data.workplaceId, user)

        values = {FIELD_MAP[key]: value for key, value in data.model_dump().items()}
        if values["recurrence_pattern"] is not None:
            values["recurrence_pattern"] = values["recurrence_pattern"].value
        shift = self.repo.create_shift(self.db, user.id, **values)
        return self.get_shift(shift.id, user)

    def update_shift(self, shift_id: int, data: ShiftUpdate, user: User) -> Shift:
        shift = self.get_shift(shift_id, user)

        updates = {
            FIELD_MAP[key]: value for key, value in data.model_dump(exclude_unset=True).items()
        }
        updates = {
            key: value
            for key, value in updates.items()
            if value is not None or key not in NON_NULLABLE
        }
        if updates.get("recurrence_pattern") is not None:
            updates["recurrence_pattern"] = updates["recurrence_pattern"].value

        if "workplace_id" in updates:
            self._require_workplace(updates["workplace_id"], user)

        merged = {key: getattr(shift, key) for key in FIELD_MAP.values()}
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

        logger.info(f"✏️ Updating shift {shift_id} for user_id: {user.id}")
        self.repo.update_shift(self.db, shift, **updates)
        return self.get_shift(shift_id, user)

    def delete_shift(self, shift_id: int, user: User) -> None:
        shift = self.get_shift(shift_id, user)
        self.repo.delete_shift(self.db, shift)
        logger.info(f"🗑️ Deleted shift {shift_id} for user_id: {user.id}")

    def confirm_shift(self, shift_id: int, user: User) -> Shift:
        if not self.repo.update_if(self.db, shift_id, user.id, is_confirmed=True):
            raise HTTPException(status_code=404, detail="Shift not found")
        return self.get_shift(shift_id, user)

    def clock_in(self, shift_id: int, user: User) -> Shift:
        clocked_in = self.repo.update_if(
            self.db,
            shift_id,
            user.id,
            Shift.actual_start_time.is_(None),
            actual_start_time=utcnow(),
        )
        if not clocked_in:
            raise HTTPException(
                status_code=400,
                detail="Cannot clock in - shift not found or already clocked in",
            )
        logger.info(f"⏱️ User {user.id} clocked in to shift {shift_id}")
        return self.get_shift(shift_id, user)

    def clock_out(self, shift_id: int, user: User) -> Shift:
        clocked_out = self.repo.update_if(
            self.db,
            shift_id,
            user.id,
            Shift.actual_start_time.is_not(None),
            Shift.actual_end_time.is_(None),
            actual_end_time=utcnow(),
        )
        if not clocked_out:
            raise HTTPException(
                status_code=400,
                detail="Cannot clock out - shift not found or not clocked in",
            )
        logger.info(f"⏱️ User {user.id} clocked out of shift {shift_id}")
        return self.get_shift(shift_id, user)

    def get_occurrences(
        self, shift_id: int, user: User, max_instances: int, now: Optional[datetime] = None
    ) -> RecurrenceSummaryResponse:
        shift = self.get_shift(shift_id, user)
        return summarize(shift, now or utcnow(), max_instances)
