"""
Service layer - business logic and orchestration.

Services contain the application's business logic, coordinate between
repositories, and handle cross-cutting concerns.

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from app.services.auth_service import AuthService
from app.services.profile_service import ProfileService
from app.services.match_service import MatchService
from app.services.request_service import RequestService
from app.services.session_service import SessionService
from app.services.analytics_service import AnalyticsService

__all__ = [
    "AuthService",
    "ProfileService",
    "MatchService",
    "RequestService",
    "SessionService",
    "AnalyticsService",
]
