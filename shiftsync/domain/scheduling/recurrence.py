"""
Recurrence expansion for shifts and study sessions.

A recurring record is a template: its first occurrence, a cadence
(daily/weekly/monthly) and an optional inclusive end date. The helpers here
turn that template into concrete calendar occurrences. Everything is pure:
callers pass "now" explicitly and nothing is cached between calls.

Monthly steps are anchored at the original start using dateutil's
relativedelta, so a series starting on Jan 31 clamps to the last day of
shorter months (Feb 29, Mar 31, Apr 30, ...) rather than rolling over.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

DEFAULT_MAX_INSTANCES = 52
# Open-ended series are only materialised this far past their first start
DEFAULT_HORIZON = timedelta(days=365)
# Matches expanding up to 365 instances when looking for the next occurrence
NEXT_OCCURRENCE_SEARCH_LIMIT = 365


class RecurrencePattern(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


PATTERN_LABELS = {
    RecurrencePattern.DAILY: "Every Day",
    RecurrencePattern.WEEKLY: "Every Week",
    RecurrencePattern.MONTHLY: "Every Month",
}
NO_RECURRENCE_LABEL = "No recurrence"

_STEPS = {
    RecurrencePattern.DAILY: relativedelta(days=1),
    RecurrencePattern.WEEKLY: relativedelta(weeks=1),
    RecurrencePattern.MONTHLY: relativedelta(months=1),
}


def parse_pattern(value: Optional[Union[RecurrencePattern, str]]) -> Optional[RecurrencePattern]:
    """Return the matching pattern, or None for missing/unrecognised values"""
    if value is None:
        return None
    if isinstance(value, RecurrencePattern):
        return value
    try:
        return RecurrencePattern(str(value).strip().lower())
    except ValueError:
        return None


@dataclass(frozen=True)
class Occurrence:
    """One concrete, dated instance of a shift or study session"""

    start_datetime: datetime
    end_datetime: datetime

    @property
    def duration(self) -> timedelta:
        return self.end_datetime - self.start_datetime


@dataclass(frozen=True)
class RecurrenceDefinition:
    """
    Template a series of occurrences is expanded from.

    end_datetime > start_datetime is expected but not checked here; request
    validation rejects bad durations before a definition is built.
    """

    start_datetime: datetime
    end_datetime: datetime
    is_recurring: bool = False
    recurrence_pattern: Optional[Union[RecurrencePattern, str]] = None
    recurrence_end_date: Optional[date] = None

    @property
    def duration(self) -> timedelta:
        return self.end_datetime - self.start_datetime

    @property
    def pattern(self) -> Optional[RecurrencePattern]:
        return parse_pattern(self.recurrence_pattern)

    @property
    def first_occurrence(self) -> Occurrence:
        return Occurrence(self.start_datetime, self.end_datetime)

    def effective_end(self) -> datetime:
        """Latest instant an occurrence may start at"""
        if self.recurrence_end_date is not None:
            end_day = self.recurrence_end_date
            if isinstance(end_day, datetime):
                end_day = end_day.date()
            return datetime.combine(end_day, time.max, tzinfo=self.start_datetime.tzinfo)
        return self.start_datetime + DEFAULT_HORIZON


def _series_pattern(definition: RecurrenceDefinition) -> Optional[RecurrencePattern]:
    # None means the definition collapses to its single first occurrence
    if not definition.is_recurring:
        return None
    return definition.pattern


def _nth_start(origin: datetime, pattern: RecurrencePattern, index: int) -> datetime:
    return origin + _STEPS[pattern] * index


def _align(moment: datetime, reference: datetime) -> datetime:
    """Make `moment` comparable with `reference`; naive values are treated as UTC"""
    if reference.tzinfo is None and moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    if reference.tzinfo is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def expand(
    definition: RecurrenceDefinition, max_instances: int = DEFAULT_MAX_INSTANCES
) -> list[Occurrence]:
    """
    Expand a definition into its occurrences, oldest first.

    Non-recurring definitions (or ones without a usable pattern) yield exactly
    their own occurrence and ignore max_instances. Recurring ones stop at the
    effective end or after max_instances occurrences, whichever comes first.
    """
    pattern = _series_pattern(definition)
    if pattern is None:
        return [definition.first_occurrence]

    duration = definition.duration
    horizon = definition.effective_end()

    occurrences: list[Occurrence] = []
    index = 0
    while len(occurrences) < max_instances:
        start = _nth_start(definition.start_datetime, pattern, index)
        if start > horizon:
            break
        occurrences.append(Occurrence(start, start + duration))
        index += 1

    return occurrences


def _steps_before(origin: datetime, pattern: RecurrencePattern, now: datetime) -> int:
    """Index of an occurrence known to start at or before `now` (0 if now precedes origin)"""
    if now < origin:
        return 0
    if pattern is RecurrencePattern.MONTHLY:
        months = (now.year - origin.year) * 12 + (now.month - origin.month)
        return max(months - 1, 0)
    step_days = 1 if pattern is RecurrencePattern.DAILY else 7
    return max((now - origin).days // step_days - 1, 0)


def next_occurrence(definition: RecurrenceDefinition, now: datetime) -> Optional[Occurrence]:
    """
    First occurrence starting strictly after `now`, or None.

    Computed from the elapsed number of cadence steps instead of expanding the
    whole series; the result is the same as scanning the first
    NEXT_OCCURRENCE_SEARCH_LIMIT occurrences of expand().
    """
    now = _align(now, definition.start_datetime)
    pattern = _series_pattern(definition)

    if pattern is None:
        first = definition.first_occurrence
        return first if first.start_datetime > now else None

    origin = definition.start_datetime
    index = _steps_before(origin, pattern, now)
    start = _nth_start(origin, pattern, index)
    while start <= now:
        index += 1
        start = _nth_start(origin, pattern, index)

    if index >= NEXT_OCCURRENCE_SEARCH_LIMIT or start > definition.effective_end():
        return None
    return Occurrence(start, start + definition.duration)


def is_currently_active(definition: RecurrenceDefinition, now: datetime) -> bool:
    """
    Whether a recurring series is still ongoing.

    Open-ended series are always active, even though expand() only
    materialises the first year of them.
    """
    if not definition.is_recurring:
        return False
    if definition.recurrence_end_date is None:
        return True
    return _align(now, definition.start_datetime) <= definition.effective_end()


def format_pattern(pattern: Optional[Union[RecurrencePattern, str]]) -> str:
    parsed = parse_pattern(pattern)
    if parsed is None:
        return NO_RECURRENCE_LABEL
    return PATTERN_LABELS[parsed]


def occurrences_between(
    definition: RecurrenceDefinition,
    window_start: datetime,
    window_end: datetime,
    max_instances: int = DEFAULT_MAX_INSTANCES,
) -> list[Occurrence]:
    """
    Occurrences whose start falls inside [window_start, window_end].

    Stepping begins just before the window rather than at the series origin,
    so max_instances caps the occurrences inside the window and late windows
    of long series are not cut off.
    """
    window_start = _align(window_start, definition.start_datetime)
    window_end = _align(window_end, definition.start_datetime)
    pattern = _series_pattern(definition)

    if pattern is None:
        first = definition.first_occurrence
        return [first] if window_start <= first.start_datetime <= window_end else []

    origin = definition.start_datetime
    last_start = min(window_end, definition.effective_end())
    duration = definition.duration

    occurrences: list[Occurrence] = []
    index = _steps_before(origin, pattern, window_start)
    while len(occurrences) < max_instances:
        start = _nth_start(origin, pattern, index)
        if start > last_start:
            break
        if start >= window_start:
            occurrences.append(Occurrence(start, start + duration))
        index += 1

    return occurrences
