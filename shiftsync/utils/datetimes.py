from datetime import date, datetime, time, timezone
from typing import Optional

from dateutil.parser import isoparse


def utcnow() -> datetime:
    """Current time as naive UTC, the form datetimes are stored in"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert aware datetimes to naive UTC; naive values are assumed to be UTC already"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_date_param(value: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    """
    Parse a `startDate`/`endDate` query value.

    Accepts plain dates (2024-01-31) and ISO 8601 datetimes. A plain date used
    as an upper bound covers the whole day.

    Raises:
        ValueError: value is not an ISO 8601 date or datetime
    """
    if value is None or not value.strip():
        return None
    value = value.strip()

    parsed = isoparse(value)
    if len(value) == 10 and end_of_day:
        return datetime.combine(parsed.date(), time.max)
    return to_naive_utc(parsed)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)
