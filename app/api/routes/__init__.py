"""
API Routes package.
"""
from fastapi import APIRouter

from app.schemas.base import ErrorResponse

from app.api.routes.auth import router as auth_router
from app.api.routes.health import router as health_router
from app.api.routes.skills import router as skills_router
from app.api.routes.profiles import router as profiles_router
from app.api.routes.matches import router as matches_router
from app.api.routes.requests import router as requests_router
from app.api.routes.sessions import router as sessions_router
from app.api.routes.analytics import router as analytics_router

# Main API router; every route documents the shared error body
api_router = APIRouter(
    responses={
        code: {"model": ErrorResponse}
        for code in (400, 401, 403, 404, 409, 422, 429)
    },
)

# Include all routers
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(skills_router)
api_router.include_router(profiles_router)
api_router.include_router(matches_router)
api_router.include_router(requests_router)
api_router.include_router(sessions_router)
api_router.include_router(analytics_router)

__all__ = [
    "api_router",
    "auth_router",
    "health_router",
    "skills_router",
    "profiles_router",
    "matches_router",
    "requests_router",
    "sessions_router",
    "analytics_router",
]
