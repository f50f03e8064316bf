"""Study session domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...schemas import RecurrenceFields, RecurrenceUpdateFields, check_schedule
from ...utils.datetimes import to_naive_utc
from ...utils.sanitization import clean_text


class SessionType(str, Enum):
    LECTURE = "lecture"
    EXAM = "exam"
    ASSIGNMENT = "assignment"
    STUDY_GROUP = "study_group"
    LAB = "lab"
    OTHER = "other"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class StudySessionCreate(RecurrenceFields):
    title: str = Field(..., max_length=255)
    subject: Optional[str] = Field(None, max_length=255)
    startDatetime: datetime
    endDatetime: datetime
    location: Optional[str] = Field(None, max_length=255)
    sessionType: SessionType = SessionType.OTHER
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def require_title(cls, v):
        v = clean_text(v)
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("subject", "location", "notes")
    @classmethod
    def sanitize_text(cls, v):
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


class StudySessionUpdate(RecurrenceUpdateFields):
    title: Optional[str] = Field(None, max_length=255)
    subject: Optional[str] = Field(None, max_length=255)
    startDatetime: Optional[datetime] = None
    endDatetime: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    sessionType: Optional[SessionType] = None
    priority: Optional[Priority] = None
    isCompleted: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def reject_blank_title(cls, v):
        if v is None:
            return v
        v = clean_text(v)
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("subject", "location", "notes")
    @classmethod
    def sanitize_text(cls, v):
        return clean_text(v)

    @field_validator("startDatetime", "endDatetime")
    @classmethod
    def normalize_datetime(cls, v):
        return to_naive_utc(v)


class StudySessionResponse(BaseModel):
    id: int
    userId: int
    title: str
    subject: Optional[str]
    startDatetime: datetime
    endDatetime: datetime
    location: Optional[str]
    sessionType: str
    priority: str
    isCompleted: bool
    notes: Optional[str]
    isRecurring: bool
    recurrencePattern: Optional[str]
    recurrenceEndDate: Optional[date]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
