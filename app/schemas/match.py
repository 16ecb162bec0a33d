"""
Match schemas.
"""
from typing import List
from app.schemas.base import BaseSchema
from app.schemas.profile import ProfileResponse
from app.schemas.user import UserBrief


class MatchResponse(BaseSchema):
    """A ranked skill match against one candidate."""

    user: UserBrief
    profile: ProfileResponse
    can_teach: List[str]        # my teach skills they want to learn
    wants_to_learn: List[str]   # my learn skills they can teach
    match_score: int
    is_bidirectional: bool


class MatchListResponse(BaseSchema):
    """Match list plus the sort applied."""

    sort: str
    total: int
    items: List[MatchResponse]
