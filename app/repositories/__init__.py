"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL/ORM logic
out of the service and route layers.
"""
from app.repositories.base import BaseRepository
from app.repositories.user_repository import UserRepository
from app.repositories.profile_repository import ProfileRepository
from app.repositories.pair_request_repository import PairRequestRepository
from app.repositories.session_repository import SessionRepository
from app.repositories.analytics_repository import (
    SkillAnalyticsRepository,
    UserStatsRepository,
)

__all__ = [
    "BaseRepository",
    "UserRepository",
    "ProfileRepository",
    "PairRequestRepository",
    "SessionRepository",
    "SkillAnalyticsRepository",
    "UserStatsRepository",
]
