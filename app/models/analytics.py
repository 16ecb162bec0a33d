"""
Analytics rollup models - per-skill and per-user counters.

Both tables are derived data: AnalyticsService.rebuild() recomputes them
from profiles, requests and sessions. Everything else only reads them.
"""
import uuid
from typing import List
from sqlalchemy import ForeignKey, Integer, JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class SkillAnalytics(BaseModel):
    """Popularity counters for one skill name."""

    __tablename__ = "skill_analytics"

    skill_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    teach_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    learn_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_requests: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    successful_matches: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<SkillAnalytics {self.skill_name}>"


class UserStats(BaseModel):
    """Activity counters for one user."""

    __tablename__ = "user_stats"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        unique=True,
        nullable=False,
    )

    teach_skills: Mapped[List[str]] = mapped_column(JSON, default=lambda: [], nullable=False)
    learn_skills: Mapped[List[str]] = mapped_column(JSON, default=lambda: [], nullable=False)
    sent_requests: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    received_requests: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    accepted_requests: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed_sessions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<UserStats user_id={self.user_id}>"
