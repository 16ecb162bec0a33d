"""
Pair request repository - data access for PairRequest entity.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.pair_request import PairRequest, RequestStatus
from app.repositories.base import BaseRepository


class PairRequestRepository(BaseRepository[PairRequest]):
    def __init__(self):
        super().__init__(PairRequest)

    async def find_sent(
        self,
        db: AsyncSession,
        requester_id: UUID,
    ) -> List[PairRequest]:
        """Requests the user sent, newest first."""
        return await self.find(db, requester_id=requester_id)

    async def find_received(
        self,
        db: AsyncSession,
        requested_id: UUID,
    ) -> List[PairRequest]:
        """Requests the user received, newest first."""
        return await self.find(db, requested_id=requested_id)

    async def find_pending(
        self,
        db: AsyncSession,
        requester_id: UUID,
        requested_id: UUID,
        skill: str,
    ) -> Optional[PairRequest]:
        """The active request for a (requester, requested, skill) triple, if any."""
        result = await db.execute(
            select(PairRequest).where(
                PairRequest.requester_id == requester_id,
                PairRequest.requested_id == requested_id,
                PairRequest.skill == skill,
                PairRequest.status == RequestStatus.PENDING.value,
            ).limit(1)
        )
        return result.scalars().first()

    async def find_all(
        self,
        db: AsyncSession,
    ) -> List[PairRequest]:
        """Every request, for analytics rebuilds."""
        result = await db.execute(select(PairRequest))
        return list(result.scalars().all())
