"""
Profile routes.
"""
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.profile import (
    DiscoverFilters,
    ProfileResponse,
    ProfileUpdate,
    PublicProfile,
)
from app.services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])

profile_service = ProfileService()


@router.get("/me", response_model=Optional[ProfileResponse])
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """The current user's profile, or null if they have not created one."""
    return await profile_service.get_profile(db, current_user)


@router.put("/me", response_model=ProfileResponse)
async def save_my_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the current user's profile."""
    return await profile_service.save_profile(db, current_user, data)


@router.get("/discover", response_model=List[PublicProfile])
async def discover_profiles(
    search: Optional[str] = Query(None, max_length=100),
    category: Optional[str] = Query(None, description="Catalog category, or 'all'"),
    skill_type: Literal["all", "teach", "learn"] = Query("all"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Browse other users' public profiles."""
    filters = DiscoverFilters(search=search, category=category, skill_type=skill_type)
    return await profile_service.discover(db, current_user, filters)
