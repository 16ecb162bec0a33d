"""
Match service - pairs the current user's skills against public profiles.

The scoring and ranking are plain functions over skill lists so they can
be exercised without a database:

    can_teach      = my teach skills  ∩ their learn skills
    wants_to_learn = my learn skills  ∩ their teach skills
    score          = 10 * (|can_teach| + |wants_to_learn|)
                     + 5 * |can_teach| * |wants_to_learn|

The product term ranks two-way exchanges above one-way ones with the
same number of shared skills.
"""
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.models.user import User
from app.repositories.profile_repository import ProfileRepository
from app.schemas.match import MatchListResponse, MatchResponse
from app.schemas.profile import ProfileResponse
from app.schemas.user import UserBrief

logger = get_logger(__name__)

SORT_SCORE = "score"
SORT_BIDIRECTIONAL = "bidirectional"

PER_SKILL_POINTS = 10
BIDIRECTIONAL_BONUS = 5


@dataclass(frozen=True)
class SkillMatch:
    user: Any
    profile: Any
    can_teach: List[str]
    wants_to_learn: List[str]
    score: int

    @property
    def is_bidirectional(self) -> bool:
        return bool(self.can_teach) and bool(self.wants_to_learn)


def match_score(can_teach_count: int, wants_to_learn_count: int) -> int:
    return (
        PER_SKILL_POINTS * (can_teach_count + wants_to_learn_count)
        + BIDIRECTIONAL_BONUS * can_teach_count * wants_to_learn_count
    )


def _overlap(mine: Sequence[str], theirs: Sequence[str]) -> List[str]:
    """Skills of mine that appear in theirs, in my order."""
    wanted = set(theirs)
    return [skill for skill in mine if skill in wanted]


def compute_match(
    my_teach: Sequence[str],
    my_learn: Sequence[str],
    candidate_user: Any,
    candidate_profile: Any,
) -> Optional[SkillMatch]:
    """Score one candidate; None when no skill flows either way."""
    can_teach = _overlap(my_teach, candidate_profile.learn_skills or [])
    wants_to_learn = _overlap(my_learn, candidate_profile.teach_skills or [])

    if not can_teach and not wants_to_learn:
        return None

    return SkillMatch(
        user=candidate_user,
        profile=candidate_profile,
        can_teach=can_teach,
        wants_to_learn=wants_to_learn,
        score=match_score(len(can_teach), len(wants_to_learn)),
    )


def rank_matches(
    my_profile: Any,
    candidates: Iterable[Tuple[Any, Any]],
) -> List[SkillMatch]:
    """
    Score every (user, profile) candidate and sort by score, highest first.

    The sort is stable: equal scores keep candidate order.
    """
    my_teach = my_profile.teach_skills or []
    my_learn = my_profile.learn_skills or []

    matches = []
    for user, profile in candidates:
        match = compute_match(my_teach, my_learn, user, profile)
        if match is not None:
            matches.append(match)

    return sorted(matches, key=lambda m: -m.score)


def sort_bidirectional_first(matches: Iterable[SkillMatch]) -> List[SkillMatch]:
    """Two-way matches first, each group by score; stable within ties."""
    return sorted(matches, key=lambda m: (not m.is_bidirectional, -m.score))


class MatchService:
    """Builds the ranked match list for the current user."""

    def __init__(self):
        self.profile_repo = ProfileRepository()

    async def find_matches(
        self,
        db: AsyncSession,
        user: User,
        *,
        sort: str = SORT_SCORE,
    ) -> MatchListResponse:
        """
        Rank public profiles against the user's own.

        A user without a profile simply has no matches.
        """
        my_profile = await self.profile_repo.get_by_user(db, user.id)
        if my_profile is None:
            return MatchListResponse(sort=sort, total=0, items=[])

        candidates = await self.profile_repo.find_public_with_users(
            db, exclude_user_id=user.id
        )
        matches = rank_matches(my_profile, candidates)

        if sort == SORT_BIDIRECTIONAL:
            matches = sort_bidirectional_first(matches)

        logger.debug(
            "matches_computed",
            user_id=str(user.id),
            candidates=len(candidates),
            matches=len(matches),
        )

        items = [self._to_response(m) for m in matches]
        return MatchListResponse(sort=sort, total=len(items), items=items)

    def _to_response(self, match: SkillMatch) -> MatchResponse:
        return MatchResponse(
            user=UserBrief.from_user(match.user),
            profile=ProfileResponse.model_validate(match.profile),
            can_teach=match.can_teach,
            wants_to_learn=match.wants_to_learn,
            match_score=match.score,
            is_bidirectional=match.is_bidirectional,
        )
