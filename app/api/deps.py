"""
API dependencies for dependency injection.
"""
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import ACCESS, decode_token
from app.core.logging import bind_user
from app.core.exceptions import (
    UnauthorizedException,
    InvalidTokenException,
    ForbiddenException,
)
from app.models.user import User
from app.repositories.user_repository import UserRepository


# Security scheme
security = HTTPBearer(auto_error=False)

user_repo = UserRepository()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current authenticated user.

    The user is also stored on request.state so the rate limiter can key
    on it, and bound into the logging context.

    Raises:
        UnauthorizedException: If no token provided
        InvalidTokenException: If token is invalid, expired or not an access token
    """
    if not credentials:
        raise UnauthorizedException("Authentication required")

    user_id = decode_token(credentials.credentials, ACCESS)
    if not user_id:
        raise InvalidTokenException()

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        raise InvalidTokenException()

    user = await user_repo.get_active_by_id(db, user_uuid)
    if not user:
        raise InvalidTokenException()

    request.state.current_user = user
    bind_user(user.id)
    return user


async def get_admin_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Get current user, ensuring they are an admin.

    Raises:
        ForbiddenException: If user is not an admin
    """
    if not current_user.is_admin:
        raise ForbiddenException("Admin access required")
    return current_user
