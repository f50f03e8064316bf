"""Unit tests for recurrence expansion."""

from datetime import date, datetime, timedelta, timezone

import pytest

from shiftsync.domain.scheduling.recurrence import (
    DEFAULT_HORIZON,
    NEXT_OCCURRENCE_SEARCH_LIMIT,
    Occurrence,
    RecurrenceDefinition,
    RecurrencePattern,
    expand,
    format_pattern,
    is_currently_active,
    next_occurrence,
    occurrences_between,
    parse_pattern,
)


def weekly_january(pattern="weekly", **overrides):
    values = {
        "start_datetime": datetime(2024, 1, 1, 10, 0),
        "end_datetime": datetime(2024, 1, 1, 11, 0),
        "is_recurring": True,
        "recurrence_pattern": pattern,
        "recurrence_end_date": date(2024, 1, 22),
    }
    values.update(overrides)
    return RecurrenceDefinition(**values)


class TestExpand:
    """Test expanding definitions into occurrences."""

    def test_weekly_until_end_date(self):
        occurrences = expand(weekly_january(), 52)

        assert [o.start_datetime.day for o in occurrences] == [1, 8, 15, 22]
        for occurrence in occurrences:
            assert occurrence.start_datetime.hour == 10
            assert occurrence.end_datetime.hour == 11

    def test_daily_until_end_date_is_inclusive(self):
        occurrences = expand(weekly_january("daily"), 52)

        assert len(occurrences) == 22
        assert occurrences[0].start_datetime == datetime(2024, 1, 1, 10, 0)
        assert occurrences[-1].start_datetime == datetime(2024, 1, 22, 10, 0)

    def test_monthly_from_month_end_is_bounded_and_monotonic(self):
        definition = RecurrenceDefinition(
            start_datetime=datetime(2024, 1, 31, 9, 0),
            end_datetime=datetime(2024, 1, 31, 12, 0),
            is_recurring=True,
            recurrence_pattern=RecurrencePattern.MONTHLY,
        )

        occurrences = expand(definition, 52)

        assert 0 < len(occurrences) <= 52
        starts = [o.start_datetime for o in occurrences]
        assert starts == sorted(set(starts))
        assert all(start <= definition.start_datetime + DEFAULT_HORIZON for start in starts)

    def test_monthly_clamps_to_last_day_of_month(self):
        definition = RecurrenceDefinition(
            start_datetime=datetime(2024, 1, 31, 9, 0),
            end_datetime=datetime(2024, 1, 31, 12, 0),
            is_recurring=True,
            recurrence_pattern="monthly",
        )

        starts = [o.start_datetime.date() for o in expand(definition, 4)]

        assert starts == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]

    def test_non_recurring_ignores_cap(self):
        definition = weekly_january(is_recurring=False)

        for cap in (0, 1, 52):
            assert expand(definition, cap) == [
                Occurrence(definition.start_datetime, definition.end_datetime)
            ]

    @pytest.mark.parametrize("pattern", [None, "fortnightly", ""])
    def test_missing_or_unknown_pattern_collapses_to_one(self, pattern):
        definition = weekly_january(pattern)

        occurrences = expand(definition, 52)

        assert len(occurrences) == 1
        assert occurrences[0].start_datetime == definition.start_datetime

    def test_cap_respected(self):
        definition = weekly_january("daily", recurrence_end_date=None)

        assert len(expand(definition, 10)) == 10
        assert expand(definition, 0) == []

    def test_default_horizon_is_one_year(self):
        definition = weekly_january("daily", recurrence_end_date=None)

        occurrences = expand(definition, 1000)

        # Day 0 through day 365 inclusive
        assert len(occurrences) == 366
        assert occurrences[-1].start_datetime == definition.start_datetime + DEFAULT_HORIZON

    @pytest.mark.parametrize(
        "pattern, start",
        [
            ("daily", datetime(2024, 3, 1, 22, 0)),
            ("weekly", datetime(2024, 3, 1, 22, 0)),
            ("monthly", datetime(2024, 3, 1, 22, 0)),
            # Clamped month ends must keep the same length
            ("monthly", datetime(2024, 1, 31, 22, 0)),
        ],
    )
    def test_duration_is_preserved(self, pattern, start):
        definition = RecurrenceDefinition(
            start_datetime=start,
            end_datetime=start + timedelta(hours=8, minutes=30),
            is_recurring=True,
            recurrence_pattern=pattern,
        )

        occurrences = expand(definition, 400)

        assert occurrences
        for occurrence in occurrences:
            assert occurrence.duration == timedelta(hours=8, minutes=30)

    def test_timezone_aware_definition(self):
        definition = weekly_january(
            start_datetime=datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
            end_datetime=datetime(2024, 1, 1, 11, 0, tzinfo=timezone.utc),
        )

        assert len(expand(definition, 52)) == 4


class TestNextOccurrence:
    """Test finding the next occurrence after a given moment."""

    def test_past_single_occurrence_has_no_next(self):
        definition = weekly_january(is_recurring=False)

        assert next_occurrence(definition, datetime(2024, 6, 1)) is None

    def test_future_single_occurrence_is_next(self):
        definition = weekly_january(is_recurring=False)

        upcoming = next_occurrence(definition, datetime(2023, 12, 1))

        assert upcoming == Occurrence(definition.start_datetime, definition.end_datetime)

    def test_next_is_strictly_after_now(self):
        definition = weekly_january()

        upcoming = next_occurrence(definition, datetime(2024, 1, 8, 10, 0))

        assert upcoming.start_datetime == datetime(2024, 1, 15, 10, 0)

    def test_series_elapsed(self):
        assert next_occurrence(weekly_january(), datetime(2024, 1, 22, 10, 0)) is None

    def test_before_series_start_returns_first(self):
        upcoming = next_occurrence(weekly_january(), datetime(2023, 1, 1))

        assert upcoming.start_datetime == datetime(2024, 1, 1, 10, 0)

    @pytest.mark.parametrize("pattern", ["daily", "weekly", "monthly"])
    def test_agrees_with_expansion(self, pattern):
        definition = RecurrenceDefinition(
            start_datetime=datetime(2024, 1, 31, 18, 0),
            end_datetime=datetime(2024, 1, 31, 20, 0),
            is_recurring=True,
            recurrence_pattern=pattern,
        )
        expanded = expand(definition, NEXT_OCCURRENCE_SEARCH_LIMIT)

        for now in (
            datetime(2024, 1, 31, 18, 0),
            datetime(2024, 3, 15, 7, 45),
            datetime(2024, 7, 31, 19, 0),
            datetime(2024, 12, 30, 23, 59),
        ):
            expected = next((o for o in expanded if o.start_datetime > now), None)
            assert next_occurrence(definition, now) == expected

    def test_aware_now_against_naive_definition(self):
        upcoming = next_occurrence(
            weekly_january(), datetime(2024, 1, 8, 10, 0, tzinfo=timezone.utc)
        )

        assert upcoming.start_datetime == datetime(2024, 1, 15, 10, 0)


class TestStatusAndLabels:
    """Test series status and display labels."""

    def test_active_until_end_of_end_date(self):
        definition = weekly_january()

        assert is_currently_active(definition, datetime(2024, 1, 22, 23, 59))
        assert not is_currently_active(definition, datetime(2024, 1, 23, 0, 0))

    def test_open_ended_series_always_active(self):
        definition = weekly_january(recurrence_end_date=None)

        assert is_currently_active(definition, datetime(2030, 1, 1))

    def test_non_recurring_never_active(self):
        assert not is_currently_active(weekly_january(is_recurring=False), datetime(2024, 1, 1))

    def test_format_pattern(self):
        assert format_pattern("daily") == "Every Day"
        assert format_pattern(RecurrencePattern.WEEKLY) == "Every Week"
        assert format_pattern("monthly") == "Every Month"
        assert format_pattern(None) == "No recurrence"
        assert format_pattern("yearly") == "No recurrence"

    def test_parse_pattern_normalises_case(self):
        assert parse_pattern(" Weekly ") is RecurrencePattern.WEEKLY
        assert parse_pattern("hourly") is None


class TestOccurrencesBetween:
    """Test window filtering used by the calendar."""

    def test_window_is_inclusive(self):
        definition = weekly_january("daily")

        occurrences = occurrences_between(
            definition, datetime(2024, 1, 5, 10, 0), datetime(2024, 1, 7, 10, 0), 52
        )

        assert [o.start_datetime.day for o in occurrences] == [5, 6, 7]

    def test_window_late_in_long_series(self):
        definition = weekly_january("daily", recurrence_end_date=date(2025, 12, 31))

        occurrences = occurrences_between(
            definition, datetime(2025, 6, 1), datetime(2025, 6, 7, 23, 59), 366
        )

        assert [o.start_datetime for o in occurrences] == [
            datetime(2025, 6, day, 10, 0) for day in range(1, 8)
        ]

    def test_cap_counts_occurrences_inside_window(self):
        definition = weekly_january("daily", recurrence_end_date=date(2025, 12, 31))

        occurrences = occurrences_between(
            definition, datetime(2025, 3, 1), datetime(2025, 3, 31), 5
        )

        assert [o.start_datetime.day for o in occurrences] == [1, 2, 3, 4, 5]

    def test_monthly_window_keeps_clamped_dates(self):
        definition = RecurrenceDefinition(
            start_datetime=datetime(2024, 1, 31, 9, 0),
            end_datetime=datetime(2024, 1, 31, 10, 0),
            is_recurring=True,
            recurrence_pattern="monthly",
            recurrence_end_date=date(2026, 12, 31),
        )

        occurrences = occurrences_between(
            definition, datetime(2025, 2, 1), datetime(2025, 4, 30, 23, 59), 52
        )

        assert [o.start_datetime.date() for o in occurrences] == [
            date(2025, 2, 28),
            date(2025, 3, 31),
            date(2025, 4, 30),
        ]

    def test_window_results_match_expansion(self):
        definition = weekly_january("weekly", recurrence_end_date=None)
        window_start, window_end = datetime(2024, 5, 1), datetime(2024, 8, 1)

        expected = [
            o
            for o in expand(definition, 1000)
            if window_start <= o.start_datetime <= window_end
        ]

        assert occurrences_between(definition, window_start, window_end, 366) == expected

    def test_single_occurrence_window(self):
        definition = weekly_january(is_recurring=False)

        assert occurrences_between(
            definition, datetime(2024, 1, 1), datetime(2024, 1, 2), 52
        ) == [definition.first_occurrence]
        assert occurrences_between(definition, datetime(2024, 2, 1), datetime(2024, 3, 1), 52) == []

    def test_window_outside_series(self):
        occurrences = occurrences_between(
            weekly_january(), datetime(2025, 1, 1), datetime(2025, 2, 1), 52
        )

        assert occurrences == []
