"""
Profile model - a user's declared teach/learn skills.
"""
import uuid
from typing import List, Optional
from sqlalchemy import Boolean, ForeignKey, JSON, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class Profile(BaseModel):
    """
    Skill profile, one per user.

    Skill lists are stored as JSON arrays of names, in the order the
    user picked them.
    """

    __tablename__ = "user_profiles"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        unique=True,
        nullable=False,
        index=True,
    )

    teach_skills: Mapped[List[str]] = mapped_column(JSON, default=lambda: [], nullable=False)
    learn_skills: Mapped[List[str]] = mapped_column(JSON, default=lambda: [], nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    @property
    def is_complete(self) -> bool:
        return bool(self.teach_skills) or bool(self.learn_skills)

    def __repr__(self) -> str:
        return f"<Profile user_id={self.user_id}>"
