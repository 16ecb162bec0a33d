"""
Pair request service - sending requests and moving them through their lifecycle.

    pending ──accept (requested party)──> accepted
            ──decline (requested party)─> declined
            ──cancel (requester)────────> cancelled

Nothing leaves accepted, declined or cancelled. Accepting does not create
a session; scheduling is a separate call to SessionService.
"""
from typing import Dict, Iterable, List, Set
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import (
    BadRequestException,
    DuplicateRequestException,
    ForbiddenException,
    InvalidTransitionException,
    NotFoundException,
    PairRequestNotFoundException,
)
from app.core.logging import get_logger
from app.models.pair_request import PairRequest, RequestStatus
from app.models.user import User
from app.repositories.pair_request_repository import PairRequestRepository
from app.repositories.user_repository import UserRepository
from app.schemas.pair_request import (
    AcceptRequestResponse,
    PairRequestCreate,
    PairRequestResponse,
)
from app.schemas.user import UserBrief

logger = get_logger(__name__)

PENDING = RequestStatus.PENDING.value
ACCEPTED = RequestStatus.ACCEPTED.value
DECLINED = RequestStatus.DECLINED.value
CANCELLED = RequestStatus.CANCELLED.value

ALLOWED_TRANSITIONS: Dict[str, Set[str]] = {
    PENDING: {ACCEPTED, DECLINED, CANCELLED},
}

# Who may drive each transition
REQUESTED_PARTY_ACTIONS = {ACCEPTED, DECLINED}
REQUESTER_ACTIONS = {CANCELLED}


def normalize_skill(skill: str) -> str:
    """The form a skill name is stored and compared in."""
    return skill.strip()


def next_status(current: str, target: str) -> str:
    """
    Validate a status change and return the new status.

    Raises:
        InvalidTransitionException: If target is not reachable from current.
    """
    if target not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidTransitionException(current, target)
    return target


def authorize_transition(request: PairRequest, actor_id: UUID, target: str) -> None:
    """
    Check that actor may move request to target.

    Raises:
        PairRequestNotFoundException: If actor is not a party to the request.
        ForbiddenException: If actor is a party but not the one allowed.
    """
    if actor_id not in (request.requester_id, request.requested_id):
        raise PairRequestNotFoundException()

    if target in REQUESTED_PARTY_ACTIONS and actor_id != request.requested_id:
        raise ForbiddenException(
            f"Only the requested user can mark a request {target}",
            code="NOT_REQUESTED_PARTY",
        )
    if target in REQUESTER_ACTIONS and actor_id != request.requester_id:
        raise ForbiddenException(
            "Only the requester can cancel a request",
            code="NOT_REQUESTER",
        )


def has_existing_request(
    sent_requests: Iterable[PairRequest],
    requested_id: UUID,
    skill: str,
) -> bool:
    """True iff one of the sent requests is pending for exactly this user and skill."""
    skill = normalize_skill(skill)
    return any(
        req.requested_id == requested_id
        and req.skill == skill
        and req.status == PENDING
        for req in sent_requests
    )


class RequestService:
    """Handles pairing request creation, listing and status changes."""

    def __init__(self):
        self.request_repo = PairRequestRepository()
        self.user_repo = UserRepository()

    async def send_request(
        self,
        db: AsyncSession,
        user: User,
        data: PairRequestCreate,
    ) -> PairRequestResponse:
        """
        Create a pending request from user to data.requested_id.

        The skill is not checked against the other user's profile.

        Raises:
            BadRequestException: If the user requests themselves.
            NotFoundException: If the requested user does not exist.
            DuplicateRequestException: If the same request is already pending.
        """
        if data.requested_id == user.id:
            raise BadRequestException("You cannot send a request to yourself", code="SELF_REQUEST")

        requested = await self.user_repo.get_active_by_id(db, data.requested_id)
        if requested is None:
            raise NotFoundException("User not found", code="USER_NOT_FOUND")

        skill = normalize_skill(data.skill)

        if settings.enforce_unique_pending_requests:
            pending = await self.request_repo.find_pending(db, user.id, requested.id, skill)
            if pending is not None:
                raise DuplicateRequestException()

        request = await self.request_repo.create(
            db,
            requester_id=user.id,
            requested_id=requested.id,
            skill=skill,
            message=(data.message or "").strip(),
            status=PENDING,
        )
        await db.commit()

        logger.info(
            "pair_request_created",
            request_id=str(request.id),
            requester_id=str(user.id),
            requested_id=str(requested.id),
            skill=skill,
        )
        return self._to_response(request, counterpart=requested)

    async def list_sent(
        self,
        db: AsyncSession,
        user: User,
    ) -> List[PairRequestResponse]:
        """Requests the user sent, newest first, with the requested user attached."""
        requests = await self.request_repo.find_sent(db, user.id)
        users = await self.user_repo.get_many_by_ids(db, (r.requested_id for r in requests))
        return [self._to_response(r, counterpart=users.get(r.requested_id)) for r in requests]

    async def list_received(
        self,
        db: AsyncSession,
        user: User,
    ) -> List[PairRequestResponse]:
        """Requests the user received, newest first, with the requester attached."""
        requests = await self.request_repo.find_received(db, user.id)
        users = await self.user_repo.get_many_by_ids(db, (r.requester_id for r in requests))
        return [self._to_response(r, counterpart=users.get(r.requester_id)) for r in requests]

    async def has_existing_request(
        self,
        db: AsyncSession,
        user: User,
        requested_id: UUID,
        skill: str,
    ) -> bool:
        """Whether the user already has a pending request for this user and skill."""
        sent = await self.request_repo.find_sent(db, user.id)
        return has_existing_request(sent, requested_id, skill)

    async def accept(
        self,
        db: AsyncSession,
        user: User,
        request_id: UUID,
    ) -> AcceptRequestResponse:
        request = await self._transition(db, user, request_id, ACCEPTED)
        return AcceptRequestResponse(request=request)

    async def decline(
        self,
        db: AsyncSession,
        user: User,
        request_id: UUID,
    ) -> PairRequestResponse:
        return await self._transition(db, user, request_id, DECLINED)

    async def cancel(
        self,
        db: AsyncSession,
        user: User,
        request_id: UUID,
    ) -> PairRequestResponse:
        return await self._transition(db, user, request_id, CANCELLED)

    async def _transition(
        self,
        db: AsyncSession,
        user: User,
        request_id: UUID,
        target: str,
    ) -> PairRequestResponse:
        request = await self.request_repo.get_by_id(db, request_id)
        if request is None:
            raise PairRequestNotFoundException()

        authorize_transition(request, user.id, target)
        previous = request.status
        request = await self.request_repo.update(
            db, request, status=next_status(request.status, target)
        )
        await db.commit()

        logger.info(
            "pair_request_transitioned",
            request_id=str(request.id),
            actor_id=str(user.id),
            from_status=previous,
            to_status=target,
        )

        other_id = request.requester_id if user.id == request.requested_id else request.requested_id
        other = await self.user_repo.get_by_id(db, other_id)
        return self._to_response(request, counterpart=other)

    def _to_response(self, request: PairRequest, counterpart=None) -> PairRequestResponse:
        return PairRequestResponse(
            id=request.id,
            requester_id=request.requester_id,
            requested_id=request.requested_id,
            skill=request.skill,
            message=request.message,
            status=request.status,
            created_at=request.created_at,
            updated_at=request.updated_at,
            counterpart=UserBrief.from_user(counterpart) if counterpart is not None else None,
        )
