"""
SkillSession model - a scheduled teaching session derived from an accepted request.
"""
import enum
import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class SessionStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


class SkillSession(BaseModel):
    """
    Skill session entity.

    One session per accepted PairRequest. Either participant may edit
    or close it.
    """

    __tablename__ = "skill_sessions"

    pair_request_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("pair_requests.id"),
        nullable=False,
        index=True,
    )
    teacher_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    learner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    skill: Mapped[str] = mapped_column(String(100), nullable=False)

    # Scheduling details, all optional
    scheduled_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    meeting_link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        default=SessionStatus.SCHEDULED.value,
        nullable=False,
        index=True,
    )  # 'scheduled', 'completed', 'cancelled', 'rescheduled'

    def __repr__(self) -> str:
        return f"<SkillSession {self.skill} teacher={self.teacher_id} learner={self.learner_id}>"
