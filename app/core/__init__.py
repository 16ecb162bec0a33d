"""Core module exports."""
from app.core.config import settings, get_settings
from app.core.database import Base, get_db, init_db, close_db, engine, async_session_maker
from app.core.security import (
    verify_password,
    hash_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.core.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    ValidationException,
    InvalidCredentialsException,
    InvalidTokenException,
    EmailAlreadyExistsException,
    ProfileValidationException,
    PairRequestNotFoundException,
    DuplicateRequestException,
    InvalidTransitionException,
    SessionNotFoundException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    "async_session_maker",
    # Security
    "verify_password",
    "hash_password",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    # Exceptions
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "ValidationException",
    "InvalidCredentialsException",
    "InvalidTokenException",
    "EmailAlreadyExistsException",
    "ProfileValidationException",
    "PairRequestNotFoundException",
    "DuplicateRequestException",
    "InvalidTransitionException",
    "SessionNotFoundException",
]
