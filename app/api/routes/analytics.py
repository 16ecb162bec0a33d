"""
Analytics routes.

Reads are open to any signed-in user; rebuilding the rollups is admin-only.
"""
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.api.deps import get_current_user, get_admin_user
from app.models.user import User
from app.schemas.analytics import (
    RebuildResponse,
    SkillAnalyticsResponse,
    UserStatsResponse,
)
from app.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])

analytics_service = AnalyticsService()


@router.get("/skills", response_model=List[SkillAnalyticsResponse])
async def list_skill_analytics(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The most requested skills."""
    return await analytics_service.list_skill_analytics(db)


@router.get("/skills/top", response_model=List[SkillAnalyticsResponse])
async def top_skills(
    kind: Literal["teach", "learn", "popular"] = Query("popular"),
    limit: int = Query(5, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Most taught, most wanted, or most active skills."""
    return await analytics_service.top_skills(db, kind, limit)


@router.get("/me", response_model=Optional[UserStatsResponse])
async def my_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The current user's activity counters, or null before the first rebuild."""
    return await analytics_service.user_stats(db, current_user)


@router.post("/rebuild", response_model=RebuildResponse)
async def rebuild_analytics(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    """Recompute the analytics rollups from profiles, requests and sessions."""
    return await analytics_service.rebuild(db)
