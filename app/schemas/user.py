"""
User schemas.
"""
from typing import Optional
from app.schemas.base import BaseSchema, IDSchema


class UserBrief(IDSchema):
    """Public view of a user, embedded in matches, requests and sessions."""

    name: str
    avatar_url: Optional[str] = None

    @classmethod
    def from_user(cls, user) -> "UserBrief":
        return cls(id=user.id, name=user.display_name, avatar_url=user.avatar_url)
