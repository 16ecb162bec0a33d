"""
Match routes.
"""
from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.match import MatchListResponse
from app.services.match_service import MatchService

router = APIRouter(prefix="/matches", tags=["matches"])

match_service = MatchService()


@router.get("", response_model=MatchListResponse)
async def list_matches(
    sort: Literal["score", "bidirectional"] = Query("score"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Ranked skill matches for the current user.

    sort=bidirectional lists two-way exchanges first.
    """
    return await match_service.find_matches(db, current_user, sort=sort)
