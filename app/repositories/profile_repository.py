"""
Profile repository - data access for Profile entity.
"""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profile import Profile
from app.models.user import User
from app.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    def __init__(self):
        super().__init__(Profile)

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Optional[Profile]:
        """Get a user's profile, None if they never saved one."""
        return await self.find_one(db, user_id=user_id)

    async def find_public_with_users(
        self,
        db: AsyncSession,
        *,
        exclude_user_id: Optional[UUID] = None,
    ) -> List[Tuple[User, Profile]]:
        """
        Public profiles of active users, paired with their user.

        Ordered by user id so downstream ranking ties are deterministic.
        """
        query = (
            select(User, Profile)
            .join(Profile, Profile.user_id == User.id)
            .where(
                Profile.is_public == True,
                User.is_active == True,
            )
        )

        if exclude_user_id is not None:
            query = query.where(Profile.user_id != exclude_user_id)

        query = query.order_by(User.id)
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def find_all(
        self,
        db: AsyncSession,
    ) -> List[Profile]:
        """Every profile regardless of visibility, for analytics rebuilds."""
        result = await db.execute(select(Profile))
        return list(result.scalars().all())
