"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any, List


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)


class BadRequestException(APIException):
    """400 Bad Request"""

    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST"):
        super().__init__(400, code, message)


class UnauthorizedException(APIException):
    """401 Unauthorized"""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, code, message)


class ForbiddenException(APIException):
    """403 Forbidden"""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, code, message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class ConflictException(APIException):
    """409 Conflict"""

    def __init__(self, message: str = "Resource conflict", code: str = "CONFLICT"):
        super().__init__(409, code, message)


class ValidationException(APIException):
    """422 Validation Error"""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(422, code, message, details)


# Authentication specific exceptions
class InvalidCredentialsException(UnauthorizedException):
    """Invalid email or password"""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
        )


class InvalidTokenException(UnauthorizedException):
    """Token is invalid or expired"""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_TOKEN",
        )


class EmailAlreadyExistsException(ConflictException):
    """Email already registered"""

    def __init__(self):
        super().__init__(
            message="Email already registered",
            code="EMAIL_EXISTS",
        )


# Profile exceptions
class ProfileValidationException(ValidationException):
    """Profile input rejected before any write; details carries the messages."""

    def __init__(self, errors: List[str]):
        super().__init__(
            message=errors[0] if errors else "Invalid profile",
            code="PROFILE_INVALID",
            details=errors,
        )


# Pairing request exceptions
class PairRequestNotFoundException(NotFoundException):
    """Pairing request not found (or caller is not a party to it)"""

    def __init__(self):
        super().__init__(message="Pairing request not found", code="REQUEST_NOT_FOUND")


class DuplicateRequestException(ConflictException):
    """A pending request for the same partner and skill already exists"""

    def __init__(self):
        super().__init__(
            message="You already have a pending request for this skill with this user",
            code="DUPLICATE_REQUEST",
        )


class InvalidTransitionException(ConflictException):
    """Status change not allowed from the record's current status"""

    def __init__(self, current: str, target: str):
        super().__init__(
            message=f"Cannot move from '{current}' to '{target}'",
            code="INVALID_TRANSITION",
        )
        self.current = current
        self.target = target


# Session exceptions
class SessionNotFoundException(NotFoundException):
    """Skill session not found (or caller is not a participant)"""

    def __init__(self):
        super().__init__(message="Session not found", code="SESSION_NOT_FOUND")
