"""
PairRequest model - a directed proposal to exchange a skill.
"""
import enum
import uuid
from typing import Optional
from sqlalchemy import ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import BaseModel


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    CANCELLED = "cancelled"


class PairRequest(BaseModel):
    """
    Pairing request entity.

    Lifecycle: pending -> accepted | declined | cancelled.
    Records are never deleted; an accepted request may later be
    turned into a SkillSession.
    """

    __tablename__ = "pair_requests"

    # Dedup lookups go by (requester, requested, skill, status)
    __table_args__ = (
        Index(
            "ix_pair_requests_dedup",
            "requester_id",
            "requested_id",
            "skill",
            "status",
        ),
    )

    requester_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    requested_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    skill: Mapped[str] = mapped_column(String(100), nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(
        String(20),
        default=RequestStatus.PENDING.value,
        nullable=False,
    )  # 'pending', 'accepted', 'declined', 'cancelled'

    def __repr__(self) -> str:
        return f"<PairRequest {self.requester_id}->{self.requested_id} {self.skill} {self.status}>"
