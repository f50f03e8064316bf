"""Workplace domain schemas - Pydantic models for validation"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...utils.sanitization import clean_text

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _validate_color(v):
    if v is not None and not HEX_COLOR.match(v):
        raise ValueError("Invalid color format")
    return v


class WorkplaceCreate(BaseModel):
    name: str = Field(..., max_length=255)
    color: str
    hourlyRate: float = Field(..., ge=0)
    address: Optional[str] = Field(None, max_length=500)
    contactInfo: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def require_name(cls, v):
        v = clean_text(v)
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return _validate_color(v)

    @field_validator("address", "contactInfo", "notes")
    @classmethod
    def sanitize_text(cls, v):
        return clean_text(v)


class WorkplaceUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    color: Optional[str] = None
    hourlyRate: Optional[float] = Field(None, ge=0)
    address: Optional[str] = Field(None, max_length=500)
    contactInfo: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_blank_name(cls, v):
        if v is None:
            return v
        v = clean_text(v)
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v):
        return _validate_color(v)

    @field_validator("address", "contactInfo", "notes")
    @classmethod
    def sanitize_text(cls, v):
        return clean_text(v)


class WorkplaceResponse(BaseModel):
    id: int
    userId: int
    name: str
    color: str
    hourlyRate: float
    address: Optional[str]
    contactInfo: Optional[str]
    notes: Optional[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
