"""
Skill session schemas.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import Field
from app.schemas.base import BaseSchema, TimestampSchema, IDSchema
from app.schemas.user import UserBrief


class SessionCreate(BaseSchema):
    """Schedule a session for an accepted request."""

    pair_request_id: UUID
    scheduled_date: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, gt=0, le=24 * 60)
    meeting_link: Optional[str] = None
    notes: Optional[str] = None


class SessionUpdate(BaseSchema):
    """Partial edit; status is changed only by complete/cancel."""

    scheduled_date: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, gt=0, le=24 * 60)
    meeting_link: Optional[str] = None
    notes: Optional[str] = None


class SessionResponse(IDSchema, TimestampSchema):
    """Session response schema."""

    pair_request_id: UUID
    teacher_id: UUID
    learner_id: UUID
    skill: str
    scheduled_date: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    meeting_link: Optional[str] = None
    notes: Optional[str] = None
    status: str
    teacher: Optional[UserBrief] = None
    learner: Optional[UserBrief] = None


class CalendarResponse(BaseSchema):
    """Sessions split for the calendar view."""

    upcoming: List[SessionResponse]
    past: List[SessionResponse]
