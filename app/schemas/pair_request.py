"""
Pairing request schemas.
"""
from typing import Optional
from uuid import UUID
from pydantic import Field, field_validator
from app.schemas.base import BaseSchema, TimestampSchema, IDSchema
from app.schemas.user import UserBrief


class PairRequestCreate(BaseSchema):
    """Send a pairing request."""

    requested_id: UUID
    skill: str = Field(..., min_length=1, max_length=100)
    message: Optional[str] = Field(None, max_length=1000)

    @field_validator("skill", mode="before")
    @classmethod
    def _strip_skill(cls, value):
        # Length limits apply to the trimmed name
        return value.strip() if isinstance(value, str) else value


class PairRequestResponse(IDSchema, TimestampSchema):
    """Pairing request response schema."""

    requester_id: UUID
    requested_id: UUID
    skill: str
    message: Optional[str] = None
    status: str
    # The other party, from the caller's point of view
    counterpart: Optional[UserBrief] = None


class AcceptRequestResponse(BaseSchema):
    """Accepting is followed by a separate scheduling step."""

    request: PairRequestResponse
    next_action: str = "schedule_session"


class ExistingRequestResponse(BaseSchema):
    exists: bool
