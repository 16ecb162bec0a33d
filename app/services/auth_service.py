"""
Authentication service - accounts and token issuance.

Tokens are stateless JWTs: an access token for API calls and a refresh
token that can only be traded for a new pair. Emails are stored
lower-cased, so lookups are case-insensitive.
"""
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import (
    REFRESH,
    verify_password,
    hash_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.core.exceptions import (
    InvalidCredentialsException,
    EmailAlreadyExistsException,
    InvalidTokenException,
)
from app.models.base import utcnow
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import TokenResponse

logger = get_logger(__name__)


class AuthService:
    """Registers users and issues their tokens."""

    def __init__(self):
        self.user_repo = UserRepository()

    async def register(
        self,
        db: AsyncSession,
        *,
        email: str,
        password: str,
        full_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> TokenResponse:
        """
        Create an account and sign it in.

        The account starts without a skill profile; GET /profiles/me
        returns null until the first save.

        Raises:
            EmailAlreadyExistsException: If email is already registered.
        """
        email = email.lower()
        if await self.user_repo.email_exists(db, email):
            raise EmailAlreadyExistsException()

        user = await self.user_repo.create(
            db,
            email=email,
            password_hash=hash_password(password),
            full_name=(full_name or "").strip() or None,
            avatar_url=avatar_url,
            last_seen_at=utcnow(),
        )
        await db.commit()

        logger.info("user_registered", user_id=str(user.id))
        return self._issue_tokens(user)

    async def login(
        self,
        db: AsyncSession,
        *,
        email: str,
        password: str,
    ) -> TokenResponse:
        """
        Raises:
            InvalidCredentialsException: Unknown email, inactive account or
                wrong password; the caller cannot tell which.
        """
        user = await self._authenticate(db, email.lower(), password)

        await self.user_repo.update(db, user, last_seen_at=utcnow())
        await db.commit()

        logger.info("user_logged_in", user_id=str(user.id))
        return self._issue_tokens(user)

    async def refresh(
        self,
        db: AsyncSession,
        *,
        refresh_token: str,
    ) -> TokenResponse:
        """
        Trade a refresh token for a new token pair.

        Raises:
            InvalidTokenException: Bad, expired or non-refresh token, or the
                account is gone or deactivated.
        """
        user_id = _parse_user_id(decode_token(refresh_token, REFRESH))
        if user_id is None:
            raise InvalidTokenException()

        user = await self.user_repo.get_active_by_id(db, user_id)
        if not user:
            raise InvalidTokenException()

        return self._issue_tokens(user)

    async def _authenticate(self, db: AsyncSession, email: str, password: str) -> User:
        user = await self.user_repo.get_active_by_email(db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise InvalidCredentialsException()
        return user

    def _issue_tokens(self, user: User) -> TokenResponse:
        subject = str(user.id)
        return TokenResponse(
            access_token=create_access_token(subject),
            refresh_token=create_refresh_token(subject),
            expires_in=settings.access_token_expire_minutes * 60,
        )


def _parse_user_id(subject: Optional[str]) -> Optional[UUID]:
    if not subject:
        return None
    try:
        return UUID(subject)
    except ValueError:
        return None
