"""
Database models for the skill exchange.

All models use UUID primary keys and include created_at/updated_at timestamps.
"""
from app.models.base import BaseModel, TimestampMixin, UUIDMixin
from app.models.user import User
from app.models.profile import Profile
from app.models.pair_request import PairRequest, RequestStatus
from app.models.skill_session import SkillSession, SessionStatus
from app.models.analytics import SkillAnalytics, UserStats

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "Profile",
    "PairRequest",
    "RequestStatus",
    "SkillSession",
    "SessionStatus",
    "SkillAnalytics",
    "UserStats",
]
