"""
Session repository - data access for SkillSession entity.
"""
from typing import List
from uuid import UUID

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.skill_session import SkillSession
from app.repositories.base import BaseRepository


class SessionRepository(BaseRepository[SkillSession]):
    def __init__(self):
        super().__init__(SkillSession)

    async def find_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[SkillSession]:
        """
        Sessions where the user teaches or learns.

        Ordered by scheduled date ascending; undated sessions go last,
        oldest-created first among them.
        """
        result = await db.execute(
            select(SkillSession)
            .where(
                or_(
                    SkillSession.teacher_id == user_id,
                    SkillSession.learner_id == user_id,
                )
            )
            .order_by(
                SkillSession.scheduled_date.is_(None),
                SkillSession.scheduled_date.asc(),
                SkillSession.created_at.asc(),
            )
        )
        return list(result.scalars().all())

    async def exists_for_request(
        self,
        db: AsyncSession,
        pair_request_id: UUID,
    ) -> bool:
        """Check whether a request was already turned into a session."""
        result = await db.execute(
            select(SkillSession.id)
            .where(SkillSession.pair_request_id == pair_request_id)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def find_all(
        self,
        db: AsyncSession,
    ) -> List[SkillSession]:
        """Every session, for analytics rebuilds."""
        result = await db.execute(select(SkillSession))
        return list(result.scalars().all())
