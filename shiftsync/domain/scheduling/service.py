"""Scheduling service - expands stored shifts and study sessions into occurrences"""

import logging
from datetime import datetime, timedelta
from typing import Optional, Union

from sqlalchemy.orm import Session, joinedload

from ...models import Shift, StudySession, User
from ...schemas import OccurrenceResponse, RecurrenceSummaryResponse
from .recurrence import (
    DEFAULT_MAX_INSTANCES,
    RecurrenceDefinition,
    expand,
    format_pattern,
    is_currently_active,
    next_occurrence,
    occurrences_between,
)
from .schemas import CalendarEntry

logger = logging.getLogger(__name__)

# Per record within one calendar window: a year of daily occurrences
CALENDAR_MAX_INSTANCES = 366
DEFAULT_CALENDAR_DAYS = 7

ScheduledRecord = Union[Shift, StudySession]


def definition_for(record: ScheduledRecord) -> RecurrenceDefinition:
    return RecurrenceDefinition(
        start_datetime=record.start_datetime,
        end_datetime=record.end_datetime,
        is_recurring=bool(record.is_recurring),
        recurrence_pattern=record.recurrence_pattern,
        recurrence_end_date=record.recurrence_end_date,
    )


def summarize(
    record: ScheduledRecord, now: datetime, max_instances: int = DEFAULT_MAX_INSTANCES
) -> RecurrenceSummaryResponse:
    """Occurrences, next occurrence and status of one record's series"""
    definition = definition_for(record)
    upcoming = next_occurrence(definition, now)

    return RecurrenceSummaryResponse(
        isRecurring=definition.is_recurring,
        recurrencePattern=definition.pattern.value if definition.pattern else None,
        patternLabel=format_pattern(definition.pattern if definition.is_recurring else None),
        isActive=is_currently_active(definition, now),
        nextOccurrence=(
            OccurrenceResponse(
                startDatetime=upcoming.start_datetime, endDatetime=upcoming.end_datetime
            )
            if upcoming
            else None
        ),
        occurrences=[
            OccurrenceResponse(startDatetime=o.start_datetime, endDatetime=o.end_datetime)
            for o in expand(definition, max_instances)
        ],
    )


class ScheduleService:
    """Builds the merged calendar of a user's shifts and study sessions"""

    def __init__(self, db: Session):
        self.db = db

    def get_calendar(
        self, user: User, window_start: datetime, window_end: Optional[datetime] = None
    ) -> list[CalendarEntry]:
        if window_end is None:
            window_end = window_start + timedelta(days=DEFAULT_CALENDAR_DAYS)

        # Anything starting after the window can't produce an occurrence inside it
        shifts = (
            self.db.query(Shift)
            .options(joinedload(Shift.workplace))
            .filter(Shift.user_id == user.id, Shift.start_datetime <= window_end)
            .all()
        )
        sessions = (
            self.db.query(StudySession)
            .filter(StudySession.user_id == user.id, StudySession.start_datetime <= window_end)
            .all()
        )

        entries: list[CalendarEntry] = []
        for shift in shifts:
            color = shift.workplace.color if shift.workplace else None
            entries.extend(
                self._entries_for(shift, "shift", window_start, window_end, color=color)
            )
        for session in sessions:
            entries.extend(self._entries_for(session, "study_session", window_start, window_end))

        entries.sort(key=lambda entry: (entry.startDatetime, entry.kind, entry.id))
        logger.debug(
            f"📅 Calendar for user_id {user.id}: {len(entries)} occurrences "
            f"between {window_start.isoformat()} and {window_end.isoformat()}"
        )
        return entries

    @staticmethod
    def _entries_for(
        record: ScheduledRecord,
        kind: str,
        window_start: datetime,
        window_end: datetime,
        color: Optional[str] = None,
    ) -> list[CalendarEntry]:
        occurrences = occurrences_between(
            definition_for(record), window_start, window_end, CALENDAR_MAX_INSTANCES
        )
        return [
            CalendarEntry(
                kind=kind,
                id=record.id,
                title=record.title,
                startDatetime=o.start_datetime,
                endDatetime=o.end_datetime,
                isRecurring=bool(record.is_recurring),
                color=color,
            )
            for o in occurrences
        ]
