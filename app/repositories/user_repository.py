"""
User repository - data access for User entity.
"""
from typing import Dict, Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    async def get_active_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> Optional[User]:
        """Find an active user by email."""
        result = await db.execute(
            select(User).where(
                User.email == email,
                User.is_active == True,
            )
        )
        return result.scalar_one_or_none()

    async def get_active_by_id(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Optional[User]:
        """Find an active user by ID."""
        result = await db.execute(
            select(User).where(
                User.id == user_id,
                User.is_active == True,
            )
        )
        return result.scalar_one_or_none()

    async def email_exists(
        self,
        db: AsyncSession,
        email: str,
    ) -> bool:
        """Check if an email is already registered."""
        result = await db.execute(
            select(User.id).where(User.email == email)
        )
        return result.scalar_one_or_none() is not None

    async def get_many_by_ids(
        self,
        db: AsyncSession,
        user_ids: Iterable[UUID],
    ) -> Dict[UUID, User]:
        """Load several users at once, keyed by id."""
        ids = set(user_ids)
        if not ids:
            return {}
        result = await db.execute(select(User).where(User.id.in_(ids)))
        return {user.id: user for user in result.scalars().all()}
