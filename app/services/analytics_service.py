"""
Analytics service - skill popularity and per-user activity.

Reads come from the skill_analytics and user_stats rollup tables. The
rollups are derived data: rebuild() recomputes them from profiles,
requests and sessions and replaces both tables wholesale.
"""
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import BadRequestException
from app.core.logging import get_logger
from app.models.analytics import SkillAnalytics, UserStats
from app.models.pair_request import PairRequest, RequestStatus
from app.models.profile import Profile
from app.models.skill_session import SkillSession, SessionStatus
from app.models.user import User
from app.repositories.analytics_repository import (
    SkillAnalyticsRepository,
    UserStatsRepository,
)
from app.repositories.pair_request_repository import PairRequestRepository
from app.repositories.profile_repository import ProfileRepository
from app.repositories.session_repository import SessionRepository
from app.schemas.analytics import (
    RebuildResponse,
    SkillAnalyticsResponse,
    UserStatsResponse,
)

logger = get_logger(__name__)

TOP_TEACH = "teach"
TOP_LEARN = "learn"
TOP_POPULAR = "popular"

_TOP_KEYS = {
    TOP_TEACH: lambda e: e.teach_count,
    TOP_LEARN: lambda e: e.learn_count,
    TOP_POPULAR: lambda e: e.teach_count + e.learn_count,
}


def percent(part: int, whole: int) -> int:
    """Whole-number percentage, rounding halves up; 0 when whole is 0."""
    if whole <= 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def rank_top_skills(entries: Iterable, kind: str, limit: int) -> List:
    """Entries sorted by the counter for kind, highest first (stable)."""
    try:
        key = _TOP_KEYS[kind]
    except KeyError:
        raise BadRequestException(
            f"Unknown ranking '{kind}', expected one of {sorted(_TOP_KEYS)}",
            code="INVALID_RANKING",
        )
    return sorted(entries, key=lambda e: -key(e))[:limit]


@dataclass
class UserRollup:
    teach_skills: List[str] = field(default_factory=list)
    learn_skills: List[str] = field(default_factory=list)
    sent_requests: int = 0
    received_requests: int = 0
    accepted_requests: int = 0
    completed_sessions: int = 0


def compute_skill_rollups(
    profiles: Iterable[Profile],
    requests: Iterable[PairRequest],
) -> Dict[str, Dict[str, int]]:
    """Per-skill counters keyed by skill name."""
    teach = Counter()
    learn = Counter()
    total = Counter()
    accepted = Counter()

    for profile in profiles:
        teach.update(set(profile.teach_skills or []))
        learn.update(set(profile.learn_skills or []))

    for request in requests:
        total[request.skill] += 1
        if request.status == RequestStatus.ACCEPTED.value:
            accepted[request.skill] += 1

    return {
        skill: {
            "teach_count": teach[skill],
            "learn_count": learn[skill],
            "total_requests": total[skill],
            "successful_matches": accepted[skill],
        }
        for skill in set(teach) | set(learn) | set(total)
    }


def compute_user_rollups(
    profiles: Iterable[Profile],
    requests: Iterable[PairRequest],
    sessions: Iterable[SkillSession],
) -> Dict[UUID, UserRollup]:
    """Per-user counters for every user who has a profile or any activity."""
    rollups: Dict[UUID, UserRollup] = {}

    def rollup(user_id: UUID) -> UserRollup:
        return rollups.setdefault(user_id, UserRollup())

    for profile in profiles:
        entry = rollup(profile.user_id)
        entry.teach_skills = list(profile.teach_skills or [])
        entry.learn_skills = list(profile.learn_skills or [])

    for request in requests:
        sender = rollup(request.requester_id)
        sender.sent_requests += 1
        if request.status == RequestStatus.ACCEPTED.value:
            sender.accepted_requests += 1
        rollup(request.requested_id).received_requests += 1

    for session in sessions:
        if session.status == SessionStatus.COMPLETED.value:
            for user_id in {session.teacher_id, session.learner_id}:
                rollup(user_id).completed_sessions += 1

    return rollups


class AnalyticsService:
    """Serves and rebuilds the analytics rollups."""

    def __init__(self):
        self.skill_repo = SkillAnalyticsRepository()
        self.stats_repo = UserStatsRepository()
        self.profile_repo = ProfileRepository()
        self.request_repo = PairRequestRepository()
        self.session_repo = SessionRepository()

    async def list_skill_analytics(
        self,
        db: AsyncSession,
    ) -> List[SkillAnalyticsResponse]:
        """The most requested skills."""
        entries = await self.skill_repo.top_by_requests(db, settings.analytics_skill_limit)
        return [self._skill_response(e) for e in entries]

    async def top_skills(
        self,
        db: AsyncSession,
        kind: str = TOP_POPULAR,
        limit: int = 5,
    ) -> List[SkillAnalyticsResponse]:
        """Most taught, most wanted, or most active skills."""
        entries = await self.skill_repo.find(db, order_by=SkillAnalytics.skill_name)
        return [self._skill_response(e) for e in rank_top_skills(entries, kind, limit)]

    async def user_stats(
        self,
        db: AsyncSession,
        user: User,
    ) -> Optional[UserStatsResponse]:
        """The user's counters, or None before the first rebuild covers them."""
        stats = await self.stats_repo.get_by_user(db, user.id)
        if stats is None:
            return None
        return self._stats_response(stats)

    async def rebuild(self, db: AsyncSession) -> RebuildResponse:
        """Recompute both rollup tables from source records."""
        profiles = await self.profile_repo.find_all(db)
        requests = await self.request_repo.find_all(db)
        sessions = await self.session_repo.find_all(db)

        skill_rollups = compute_skill_rollups(profiles, requests)
        user_rollups = compute_user_rollups(profiles, requests, sessions)

        await self.skill_repo.clear(db)
        await self.stats_repo.clear(db)

        for skill_name, counters in sorted(skill_rollups.items()):
            await self.skill_repo.create(db, skill_name=skill_name, **counters)

        for user_id, rollup in user_rollups.items():
            await self.stats_repo.create(
                db,
                user_id=user_id,
                teach_skills=rollup.teach_skills,
                learn_skills=rollup.learn_skills,
                sent_requests=rollup.sent_requests,
                received_requests=rollup.received_requests,
                accepted_requests=rollup.accepted_requests,
                completed_sessions=rollup.completed_sessions,
            )

        await db.commit()

        logger.info(
            "analytics_rebuilt",
            skills=len(skill_rollups),
            users=len(user_rollups),
        )
        return RebuildResponse(skills=len(skill_rollups), users=len(user_rollups))

    def _skill_response(self, entry: SkillAnalytics) -> SkillAnalyticsResponse:
        return SkillAnalyticsResponse(
            skill_name=entry.skill_name,
            teach_count=entry.teach_count,
            learn_count=entry.learn_count,
            total_requests=entry.total_requests,
            successful_matches=entry.successful_matches,
            success_rate=percent(entry.successful_matches, entry.total_requests),
            total_activity=entry.teach_count + entry.learn_count,
        )

    def _stats_response(self, stats: UserStats) -> UserStatsResponse:
        return UserStatsResponse(
            user_id=stats.user_id,
            teach_skills=stats.teach_skills,
            learn_skills=stats.learn_skills,
            sent_requests=stats.sent_requests,
            received_requests=stats.received_requests,
            accepted_requests=stats.accepted_requests,
            completed_sessions=stats.completed_sessions,
            total_skills=len(stats.teach_skills) + len(stats.learn_skills),
            success_rate=percent(stats.accepted_requests, stats.sent_requests),
        )
