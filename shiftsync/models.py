from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)  # bcrypt
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    workplaces = relationship("Workplace", back_populates="user", cascade="all, delete-orphan")
    shifts = relationship("Shift", back_populates="user", cascade="all, delete-orphan")
    study_sessions = relationship(
        "StudySession", back_populates="user", cascade="all, delete-orphan"
    )


class Workplace(Base):
    __tablename__ = "workplaces"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    color = Column(String(7), nullable=False)  # e.g., #RRGGBB
    hourly_rate = Column(Float, nullable=False, default=0)
    address = Column(String(500), nullable=True)
    contact_info = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="workplaces")
    shifts = relationship("Shift", back_populates="workplace", cascade="all, delete-orphan")


class Shift(Base):
    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    workplace_id = Column(Integer, ForeignKey("workplaces.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)

    # Stored as naive UTC
    start_datetime = Column(DateTime, nullable=False, index=True)
    end_datetime = Column(DateTime, nullable=False)
    break_duration = Column(Integer, default=0, nullable=False)  # minutes
    notes = Column(Text, nullable=True)
    is_confirmed = Column(Boolean, default=False, nullable=False)

    # Clock in/out
    actual_start_time = Column(DateTime, nullable=True)
    actual_end_time = Column(DateTime, nullable=True)

    # Recurrence template: daily, weekly, monthly
    is_recurring = Column(Boolean, default=False, nullable=False)
    recurrence_pattern = Column(String(20), nullable=True)
    recurrence_end_date = Column(Date, nullable=True)  # inclusive, null = open-ended

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="shifts")
    workplace = relationship("Workplace", back_populates="shifts")


class StudySession(Base):
    __tablename__ = "study_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=True, index=True)
    start_datetime = Column(DateTime, nullable=False, index=True)
    end_datetime = Column(DateTime, nullable=False)
    location = Column(String(255), nullable=True)
    # lecture, exam, assignment, study_group, lab, other
    session_type = Column(String(20), default="other", nullable=False)
    # low, medium, high, urgent
    priority = Column(String(10), default="medium", nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, nullable=True)

    is_recurring = Column(Boolean, default=False, nullable=False)
    recurrence_pattern = Column(String(20), nullable=True)
    recurrence_end_date = Column(Date, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="study_sessions")
