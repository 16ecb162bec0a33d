"""
Pydantic schemas for API validation and serialization.
"""
from app.schemas.base import (
    BaseSchema,
    MessageResponse,
    ErrorResponse,
)
from app.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    RefreshTokenRequest,
)
from app.schemas.user import UserBrief
from app.schemas.profile import (
    ProfileUpdate,
    ProfileResponse,
    PublicProfile,
    DiscoverFilters,
)
from app.schemas.match import MatchResponse, MatchListResponse
from app.schemas.pair_request import (
    PairRequestCreate,
    PairRequestResponse,
    AcceptRequestResponse,
    ExistingRequestResponse,
)
from app.schemas.session import (
    SessionCreate,
    SessionUpdate,
    SessionResponse,
    CalendarResponse,
)
from app.schemas.analytics import (
    SkillAnalyticsResponse,
    UserStatsResponse,
    RebuildResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "MessageResponse",
    "ErrorResponse",
    # Auth
    "LoginRequest",
    "RegisterRequest",
    "TokenResponse",
    "RefreshTokenRequest",
    # User
    "UserBrief",
    # Profile
    "ProfileUpdate",
    "ProfileResponse",
    "PublicProfile",
    "DiscoverFilters",
    # Match
    "MatchResponse",
    "MatchListResponse",
    # Pair request
    "PairRequestCreate",
    "PairRequestResponse",
    "AcceptRequestResponse",
    "ExistingRequestResponse",
    # Session
    "SessionCreate",
    "SessionUpdate",
    "SessionResponse",
    "CalendarResponse",
    # Analytics
    "SkillAnalyticsResponse",
    "UserStatsResponse",
    "RebuildResponse",
]
