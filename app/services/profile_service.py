"""
Profile service - saving and discovering skill profiles.

Profiles are saved whole (upsert by user), after local validation. A
missing profile is a normal state, not an error: reads return None.
"""
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ProfileValidationException
from app.core.logging import get_logger
from app.core.skills import skills_in_category
from app.models.profile import Profile
from app.models.user import User
from app.repositories.profile_repository import ProfileRepository
from app.schemas.profile import (
    DiscoverFilters,
    ProfileResponse,
    ProfileUpdate,
    PublicProfile,
)
from app.schemas.user import UserBrief

logger = get_logger(__name__)


def normalize_skills(skills: Iterable[str]) -> List[str]:
    """Trim names, drop blanks and repeats, keep the user's order."""
    seen = set()
    cleaned = []
    for skill in skills:
        name = skill.strip()
        if name and name not in seen:
            seen.add(name)
            cleaned.append(name)
    return cleaned


def validate_profile(
    teach_skills: Sequence[str],
    learn_skills: Sequence[str],
    *,
    max_per_list: Optional[int],
) -> List[str]:
    """
    Collect every problem with a profile before anything is written.

    max_per_list=None disables the per-list cap.
    """
    errors = []
    if not teach_skills and not learn_skills:
        errors.append("Please select at least one skill to teach or learn")
    if max_per_list is not None:
        if len(teach_skills) > max_per_list:
            errors.append(f"You can only select up to {max_per_list} skills to teach")
        if len(learn_skills) > max_per_list:
            errors.append(f"You can only select up to {max_per_list} skills to learn")
    return errors


def filter_profiles(
    entries: Iterable[Tuple[User, Profile]],
    filters: DiscoverFilters,
) -> List[Tuple[User, Profile]]:
    """Apply the discovery search, category and skill-type filters in turn."""
    results = list(entries)

    if filters.search:
        needle = filters.search.lower()

        def matches_search(user: User, profile: Profile) -> bool:
            return (
                needle in user.display_name.lower()
                or needle in (profile.bio or "").lower()
                or any(needle in s.lower() for s in profile.teach_skills or [])
                or any(needle in s.lower() for s in profile.learn_skills or [])
            )

        results = [(u, p) for u, p in results if matches_search(u, p)]

    if filters.category and filters.category != "all":
        category_skills = set(skills_in_category(filters.category))
        results = [
            (u, p) for u, p in results
            if category_skills.intersection((p.teach_skills or []) + (p.learn_skills or []))
        ]

    if filters.skill_type == "teach":
        results = [(u, p) for u, p in results if p.teach_skills]
    elif filters.skill_type == "learn":
        results = [(u, p) for u, p in results if p.learn_skills]

    return results


class ProfileService:
    """Handles profile reads, saves and discovery."""

    def __init__(self):
        self.profile_repo = ProfileRepository()

    async def get_profile(
        self,
        db: AsyncSession,
        user: User,
    ) -> Optional[ProfileResponse]:
        profile = await self.profile_repo.get_by_user(db, user.id)
        if profile is None:
            return None
        return ProfileResponse.model_validate(profile)

    async def save_profile(
        self,
        db: AsyncSession,
        user: User,
        data: ProfileUpdate,
    ) -> ProfileResponse:
        """
        Create or replace the user's profile.

        Saving the same input twice leaves the same stored profile.

        Raises:
            ProfileValidationException: With every validation message.
        """
        teach_skills = normalize_skills(data.teach_skills)
        learn_skills = normalize_skills(data.learn_skills)

        errors = validate_profile(
            teach_skills,
            learn_skills,
            max_per_list=settings.max_skills_per_list if settings.enforce_skill_limit else None,
        )
        if errors:
            raise ProfileValidationException(errors)

        profile = await self.profile_repo.upsert(
            db,
            {"user_id": user.id},
            teach_skills=teach_skills,
            learn_skills=learn_skills,
            bio=(data.bio or "").strip(),
            is_public=data.is_public,
        )
        await db.commit()

        logger.info(
            "profile_saved",
            user_id=str(user.id),
            teach=len(teach_skills),
            learn=len(learn_skills),
            is_public=data.is_public,
        )
        return ProfileResponse.model_validate(profile)

    async def discover(
        self,
        db: AsyncSession,
        user: User,
        filters: DiscoverFilters,
    ) -> List[PublicProfile]:
        """Public profiles of other users, filtered."""
        entries = await self.profile_repo.find_public_with_users(db, exclude_user_id=user.id)
        return [
            PublicProfile(
                user=UserBrief.from_user(u),
                profile=ProfileResponse.model_validate(p),
            )
            for u, p in filter_profiles(entries, filters)
        ]
