"""
Skill Exchange API - FastAPI Application Entry Point.

Peer-to-peer skill exchange: users list what they can teach and want to
learn, get matched, send pairing requests and schedule sessions.

Every error leaves the API in one shape:
    {"error": <CODE>, "message": <text>, "details": <optional>}
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from app.core.config import settings
from app.core.database import close_db, init_db
from app.core.exceptions import APIException
from app.core.logging import RequestIDMiddleware, get_logger, setup_logging
from app.core.rate_limit import limiter
from app.api.routes import api_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, release pooled connections on shutdown."""
    setup_logging()
    logger.info(
        "starting_app",
        app_name=settings.app_name,
        version=settings.app_version,
        env=settings.environment,
        rate_limit=settings.rate_limit_enabled,
    )
    await init_db()

    yield

    logger.info("shutting_down")
    await close_db()


def error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": code, "message": message, "details": details},
    )


app = FastAPI(
    title=settings.app_name,
    description="Peer-to-peer skill exchange: matching, pairing requests and sessions",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.state.limiter = limiter

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Domain errors raised by services."""
    if exc.status_code >= 500:
        logger.error("api_error", code=exc.code, message=exc.message)
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query params, in the same envelope as domain errors."""
    return error_response(
        422,
        "VALIDATION_ERROR",
        "Request validation failed",
        jsonable_encoder(exc.errors()),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate_limited", limit=str(exc.detail))
    return error_response(429, "RATE_LIMITED", f"Rate limit exceeded: {exc.detail}")


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log full detail, return a sanitized message."""
    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        exc_message=str(exc),
        path=request.url.path,
        exc_info=True,
    )
    message = str(exc) if settings.debug else "An unexpected error occurred"
    return error_response(500, "INTERNAL_ERROR", message)


app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint - API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "api": settings.api_prefix,
        "docs": "/docs" if settings.debug else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
