"""
Analytics repository - reads and rewrites the rollup tables.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.analytics import SkillAnalytics, UserStats
from app.repositories.base import BaseRepository


class SkillAnalyticsRepository(BaseRepository[SkillAnalytics]):
    def __init__(self):
        super().__init__(SkillAnalytics)

    async def top_by_requests(
        self,
        db: AsyncSession,
        limit: int,
    ) -> List[SkillAnalytics]:
        """Most requested skills first; name breaks ties."""
        result = await db.execute(
            select(SkillAnalytics)
            .order_by(
                SkillAnalytics.total_requests.desc(),
                SkillAnalytics.skill_name.asc(),
            )
            .limit(limit)
        )
        return list(result.scalars().all())

    async def clear(self, db: AsyncSession) -> None:
        await db.execute(delete(SkillAnalytics))


class UserStatsRepository(BaseRepository[UserStats]):
    def __init__(self):
        super().__init__(UserStats)

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Optional[UserStats]:
        return await self.find_one(db, user_id=user_id)

    async def clear(self, db: AsyncSession) -> None:
        await db.execute(delete(UserStats))
