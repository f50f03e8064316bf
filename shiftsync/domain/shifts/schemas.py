"""Shift domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...schemas import (
    RecurrenceFields,
    RecurrenceUpdateFields,
    WorkplaceSummary,
    check_schedule,
)
from ...utils.datetimes import to_naive_utc
from ...utils.sanitization import clean_text


class ShiftCreate(RecurrenceFields):
    workplaceId: int = Field(..., ge=1)
    title: str = Field(..., max_length=255)
    startDatetime: datetime
    endDatetime: datetime
    breakDuration: int = Field(0, ge=0)
    notes: Optional[str] = None
    isConfirmed: bool = False

    @field_validator("title")
    @classmethod
    def require_title(cls, v):
        v = clean_text(v)
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("notes")
    @classmethod
    def sanitize_notes(cls, v):
        return clean_text(v)

    @field_validator("startDatetime", "endDatetime")
    @classmethod
    def normalize_datetime(cls, v):
        return to_naive_utc(v)

    @model_validator(mode="after")
    def validate_schedule(self):
        check_schedule(
            self.startDatetime,
            self.endDatetime,
            self.isRecurring,
            self.recurrencePattern,
            self.recurrenceEndDate,
        )
        return self


class ShiftUpdate(RecurrenceUpdateFields):
    workplaceId: Optional[int] = Field(None, ge=1)
    title: Optional[str] = Field(None, max_length=255)
    startDatetime: Optional[datetime] = None
    endDatetime: Optional[datetime] = None
    breakDuration: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    isConfirmed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def reject_blank_title(cls, v):
        if v is None:
            return v
        v = clean_text(v)
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("notes")
    @classmethod
    def sanitize_notes(cls, v):
        return clean_text(v)

    @field_validator("startDatetime", "endDatetime")
    @classmethod
    def normalize_datetime(cls, v):
        return to_naive_utc(v)


class ShiftResponse(BaseModel):
    id: int
    userId: int
    workplaceId: int
    workplace: Optional[WorkplaceSummary]
    title: str
    startDatetime: datetime
    endDatetime: datetime
    breakDuration: int
    notes: Optional[str]
    isConfirmed: bool
    actualStartTime: Optional[datetime]
    actualEndTime: Optional[datetime]
    isRecurring: bool
    recurrencePattern: Optional[str]
    recurrenceEndDate: Optional[date]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
