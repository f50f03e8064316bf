"""Auth domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from ...schemas import UserResponse
from ...utils.sanitization import clean_text


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    firstName: str = Field(..., max_length=100)
    lastName: str = Field(..., max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("firstName", "lastName")
    @classmethod
    def require_name(cls, v):
        v = clean_text(v)
        if not v:
            raise ValueError("must not be empty")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class AuthPayload(BaseModel):
    user: UserResponse
    token: str
