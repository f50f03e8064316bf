from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, field_validator

from .domain.scheduling.recurrence import RecurrencePattern


class UserResponse(BaseModel):
    id: int
    email: str
    firstName: str
    lastName: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    class Config:
        from_attributes = True


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalItems: int
    itemsPerPage: int


class WorkplaceSummary(BaseModel):
    id: int
    name: str
    color: str
    hourlyRate: float


def check_schedule(
    start: Optional[datetime],
    end: Optional[datetime],
    is_recurring: bool,
    pattern: Optional[Union[RecurrencePattern, str]],
    recurrence_end: Optional[date],
) -> None:
    """
    Reject schedules the recurrence expander can't represent.

    Raises:
        ValueError: end not after start, recurring without a pattern, or
            a recurrence end date before the first occurrence
    """
    if start is not None and end is not None and end <= start:
        raise ValueError("endDatetime must be after startDatetime")
    if is_recurring and pattern is None:
        raise ValueError("recurrencePattern is required for recurring items")
    if is_recurring and recurrence_end is not None and start is not None:
        if recurrence_end < start.date():
            raise ValueError("recurrenceEndDate must not be before startDatetime")


class _RecurrenceInput(BaseModel):
    @field_validator("recurrencePattern", "recurrenceEndDate", mode="before", check_fields=False)
    @classmethod
    def blank_as_none(cls, v):
        # HTML forms submit "" for untouched optional inputs
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RecurrenceFields(_RecurrenceInput):
    """Recurrence template fields shared by shift and study session creates"""

    isRecurring: bool = False
    recurrencePattern: Optional[RecurrencePattern] = None
    recurrenceEndDate: Optional[date] = None


class RecurrenceUpdateFields(_RecurrenceInput):
    """Same fields for partial updates: anything left out keeps its stored value"""

    isRecurring: Optional[bool] = None
    recurrencePattern: Optional[RecurrencePattern] = None
    recurrenceEndDate: Optional[date] = None


class OccurrenceResponse(BaseModel):
    startDatetime: datetime
    endDatetime: datetime


class RecurrenceSummaryResponse(BaseModel):
    isRecurring: bool
    recurrencePattern: Optional[str]
    patternLabel: str
    isActive: bool
    nextOccurrence: Optional[OccurrenceResponse]
    occurrences: list[OccurrenceResponse]


def user_response(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        firstName=user.first_name,
        lastName=user.last_name,
        createdAt=user.created_at,
        updatedAt=user.updated_at,
    )


def single_page(items: list[Any]) -> dict:
    """Pagination block for endpoints that return everything in one page"""
    return Pagination(
        currentPage=1,
        totalPages=1,
        totalItems=len(items),
        itemsPerPage=len(items),
    ).model_dump()
