"""
Security utilities for authentication.
Handles JWT tokens and password hashing.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS = "access"
REFRESH = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def _encode(subject: str, token_type: str, lifetime: timedelta) -> str:
    payload = {
        "sub": subject,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a short-lived JWT access token for a user id.

    Args:
        subject: User ID (stringified UUID)
        expires_delta: Custom lifetime, defaults to settings
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    return _encode(subject, ACCESS, lifetime)


def create_refresh_token(subject: str) -> str:
    """Create a long-lived JWT refresh token for a user id."""
    return _encode(subject, REFRESH, timedelta(days=settings.refresh_token_expire_days))


def decode_token(token: str, expected_type: str) -> Optional[str]:
    """
    Validate a token and return its subject.

    Returns None when the signature, expiry or token type is wrong.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
    except JWTError:
        return None

    if payload.get("type") != expected_type:
        return None
    return payload.get("sub")
