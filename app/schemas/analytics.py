"""
Analytics schemas.
"""
from typing import List
from uuid import UUID
from app.schemas.base import BaseSchema


class SkillAnalyticsResponse(BaseSchema):
    """Counters for one skill."""

    skill_name: str
    teach_count: int
    learn_count: int
    total_requests: int
    successful_matches: int
    success_rate: int  # percent, 0 when no requests
    total_activity: int  # teach_count + learn_count


class UserStatsResponse(BaseSchema):
    """Counters for the calling user."""

    user_id: UUID
    teach_skills: List[str]
    learn_skills: List[str]
    sent_requests: int
    received_requests: int
    accepted_requests: int
    completed_sessions: int
    total_skills: int
    success_rate: int  # percent of sent requests accepted


class RebuildResponse(BaseSchema):
    skills: int
    users: int
