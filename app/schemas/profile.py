"""
Profile schemas.
"""
from typing import List, Literal, Optional
from uuid import UUID
from pydantic import Field
from app.schemas.base import BaseSchema, TimestampSchema, IDSchema
from app.schemas.user import UserBrief


class ProfileUpdate(BaseSchema):
    """
    Full profile save (create or replace).

    Lists are checked by ProfileService so every problem is reported
    at once, not just the first one pydantic trips on.
    """

    teach_skills: List[str] = Field(default_factory=list)
    learn_skills: List[str] = Field(default_factory=list)
    bio: Optional[str] = Field(None, max_length=2000)
    is_public: bool = True


class ProfileResponse(IDSchema, TimestampSchema):
    """Profile response schema."""

    user_id: UUID
    teach_skills: List[str]
    learn_skills: List[str]
    bio: Optional[str] = None
    is_public: bool
    is_complete: bool


class PublicProfile(BaseSchema):
    """A discoverable user with their profile."""

    user: UserBrief
    profile: ProfileResponse


class DiscoverFilters(BaseSchema):
    """Discovery filters."""

    search: Optional[str] = None
    category: Optional[str] = None  # None or "all" = any category
    skill_type: Literal["all", "teach", "learn"] = "all"
