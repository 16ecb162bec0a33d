"""
Authentication routes.

Thin controllers - all business logic lives in AuthService.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_AUTH
from app.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    RefreshTokenRequest,
)
from app.schemas.base import MessageResponse
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

auth_service = AuthService()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_AUTH)
async def register(
    request: Request,
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user.

    Returns access and refresh tokens on successful registration.
    """
    return await auth_service.register(
        db,
        email=data.email,
        password=data.password,
        full_name=data.full_name,
        avatar_url=data.avatar_url,
    )


@router.post("/login", response_model=TokenResponse)
@limiter.limit(RATE_AUTH)
async def login(
    request: Request,
    data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Login with email and password.

    Returns access and refresh tokens on successful login.
    """
    return await auth_service.login(db, email=data.email, password=data.password)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshTokenRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Refresh access token using refresh token.
    """
    return await auth_service.refresh(db, refresh_token=data.refresh_token)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    """
    Logout current user.

    Note: With JWT, logout is handled client-side by discarding tokens.
    """
    return MessageResponse(message="Logged out successfully")
