"""Unit tests for the recurrence request validation shared by shifts and study sessions."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from shiftsync.domain.scheduling.recurrence import RecurrencePattern
from shiftsync.domain.shifts.schemas import ShiftUpdate
from shiftsync.domain.study_sessions.schemas import StudySessionCreate, StudySessionUpdate
from shiftsync.schemas import check_schedule


class TestCheckSchedule:
    """Test schedule validation."""

    def test_valid_recurring_schedule(self):
        check_schedule(
            datetime(2024, 1, 1, 10, 0),
            datetime(2024, 1, 1, 11, 0),
            True,
            RecurrencePattern.WEEKLY,
            date(2024, 1, 1),
        )

    @pytest.mark.parametrize(
        "args, message",
        [
            (
                (datetime(2024, 1, 1, 10, 0), datetime(2024, 1, 1, 10, 0), False, None, None),
                "endDatetime must be after startDatetime",
            ),
            (
                (datetime(2024, 1, 1, 10, 0), datetime(2024, 1, 1, 11, 0), True, None, None),
                "recurrencePattern is required",
            ),
            (
                (
                    datetime(2024, 1, 2, 10, 0),
                    datetime(2024, 1, 2, 11, 0),
                    True,
                    "daily",
                    date(2024, 1, 1),
                ),
                "recurrenceEndDate must not be before startDatetime",
            ),
        ],
    )
    def test_rejects_invalid_schedules(self, args, message):
        with pytest.raises(ValueError, match=message):
            check_schedule(*args)

    def test_end_date_ignored_when_not_recurring(self):
        check_schedule(
            datetime(2024, 1, 2, 10, 0), datetime(2024, 1, 2, 11, 0), False, None, date(2024, 1, 1)
        )


class TestBlankRecurrenceInput:
    """Test that blank form values clear recurrence fields on every schema."""

    @pytest.mark.parametrize("model", [ShiftUpdate, StudySessionUpdate])
    def test_update_models(self, model):
        update = model(recurrencePattern="", recurrenceEndDate="  ")

        assert update.recurrencePattern is None
        assert update.recurrenceEndDate is None
        assert update.isRecurring is None

    def test_update_keeps_real_values(self):
        update = StudySessionUpdate(recurrencePattern="monthly", recurrenceEndDate="2024-06-30")

        assert update.recurrencePattern is RecurrencePattern.MONTHLY
        assert update.recurrenceEndDate == date(2024, 6, 30)

    def test_create_model(self):
        session = StudySessionCreate(
            title="Reading",
            startDatetime="2024-01-01T10:00:00",
            endDatetime="2024-01-01T11:00:00",
            recurrencePattern="",
        )

        assert session.recurrencePattern is None
        assert session.isRecurring is False

    def test_create_model_rejects_recurring_without_pattern(self):
        with pytest.raises(ValidationError, match="recurrencePattern is required"):
            StudySessionCreate(
                title="Reading",
                startDatetime="2024-01-01T10:00:00",
                endDatetime="2024-01-01T11:00:00",
                isRecurring=True,
                recurrencePattern=" ",
            )
