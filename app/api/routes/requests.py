"""
Pairing request routes.

Thin controllers - all business logic lives in RequestService.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.rate_limit import limiter, RATE_PAIR_REQUEST
from app.api.deps import get_current_user
from app.models.user import User
from app.schemas.pair_request import (
    AcceptRequestResponse,
    ExistingRequestResponse,
    PairRequestCreate,
    PairRequestResponse,
)
from app.services.request_service import RequestService

router = APIRouter(prefix="/requests", tags=["requests"])

request_service = RequestService()


@router.get("/sent", response_model=List[PairRequestResponse])
async def list_sent_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Requests the current user sent, newest first."""
    return await request_service.list_sent(db, current_user)


@router.get("/received", response_model=List[PairRequestResponse])
async def list_received_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Requests sent to the current user, newest first."""
    return await request_service.list_received(db, current_user)


@router.get("/exists", response_model=ExistingRequestResponse)
async def check_existing_request(
    requested_id: UUID = Query(...),
    skill: str = Query(..., min_length=1, max_length=100),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Whether a pending request for this user and skill is already out."""
    exists = await request_service.has_existing_request(db, current_user, requested_id, skill)
    return ExistingRequestResponse(exists=exists)


@router.post("", response_model=PairRequestResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_PAIR_REQUEST)
async def send_request(
    request: Request,
    data: PairRequestCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Send a pairing request about one skill."""
    return await request_service.send_request(db, current_user, data)


@router.post("/{request_id}/accept", response_model=AcceptRequestResponse)
async def accept_request(
    request_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Accept a received request. Scheduling is a separate step."""
    return await request_service.accept(db, current_user, request_id)


@router.post("/{request_id}/decline", response_model=PairRequestResponse)
async def decline_request(
    request_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await request_service.decline(db, current_user, request_id)


@router.post("/{request_id}/cancel", response_model=PairRequestResponse)
async def cancel_request(
    request_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Withdraw a request the current user sent."""
    return await request_service.cancel(db, current_user, request_id)
