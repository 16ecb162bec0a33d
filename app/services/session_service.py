"""
Session service - scheduling and closing skill sessions.

Role assignment and calendar classification are plain functions:

- assign_session_roles: the party who accepted the request teaches. A
  received request is, by construction, about a skill the receiver offers.
- is_past_session / is_upcoming_session: the calendar classifies by date
  as well as status, so a "scheduled" session whose date has gone by is
  shown as past without its status ever changing.
"""
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ConflictException,
    ForbiddenException,
    InvalidTransitionException,
    PairRequestNotFoundException,
    SessionNotFoundException,
)
from app.core.logging import get_logger
from app.models.pair_request import PairRequest, RequestStatus
from app.models.skill_session import SkillSession, SessionStatus
from app.models.user import User
from app.repositories.pair_request_repository import PairRequestRepository
from app.repositories.session_repository import SessionRepository
from app.repositories.user_repository import UserRepository
from app.schemas.session import (
    CalendarResponse,
    SessionCreate,
    SessionResponse,
    SessionUpdate,
)
from app.schemas.user import UserBrief

logger = get_logger(__name__)

SCHEDULED = SessionStatus.SCHEDULED.value
COMPLETED = SessionStatus.COMPLETED.value
CANCELLED = SessionStatus.CANCELLED.value
RESCHEDULED = SessionStatus.RESCHEDULED.value

# Statuses a session can still be completed or cancelled from
OPEN_STATUSES = {SCHEDULED, RESCHEDULED}


def assign_session_roles(request: PairRequest) -> Tuple[UUID, UUID]:
    """(teacher_id, learner_id) for a session scheduled from request."""
    return request.requested_id, request.requester_id


def _as_utc(value: datetime) -> datetime:
    # Some backends hand back naive datetimes; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_past_session(session: Any, now: datetime) -> bool:
    """Completed, or has a date that is already behind now."""
    if session.status == COMPLETED:
        return True
    return session.scheduled_date is not None and _as_utc(session.scheduled_date) < _as_utc(now)


def is_upcoming_session(session: Any, now: datetime) -> bool:
    """Scheduled, and either undated or dated now or later."""
    if session.status != SCHEDULED:
        return False
    return session.scheduled_date is None or _as_utc(session.scheduled_date) >= _as_utc(now)


def partition_sessions(
    sessions: Iterable[Any],
    now: datetime,
) -> Tuple[List[Any], List[Any]]:
    """
    Split sessions into (upcoming, past), preserving order.

    Cancelled sessions that are undated or in the future land in neither.
    """
    upcoming, past = [], []
    for session in sessions:
        if is_upcoming_session(session, now):
            upcoming.append(session)
        elif is_past_session(session, now):
            past.append(session)
    return upcoming, past


class SessionService:
    """Handles session creation, edits and completion."""

    def __init__(self):
        self.session_repo = SessionRepository()
        self.request_repo = PairRequestRepository()
        self.user_repo = UserRepository()

    async def create_session(
        self,
        db: AsyncSession,
        user: User,
        data: SessionCreate,
    ) -> SessionResponse:
        """
        Schedule a session for a request the user accepted.

        Raises:
            PairRequestNotFoundException: If the request is missing or not the user's.
            ForbiddenException: If the user did not receive the request.
            ConflictException: If the request is not accepted or already scheduled.
        """
        request = await self.request_repo.get_by_id(db, data.pair_request_id)
        if request is None or user.id not in (request.requester_id, request.requested_id):
            raise PairRequestNotFoundException()

        if user.id != request.requested_id:
            raise ForbiddenException(
                "Only the user who accepted the request can schedule it",
                code="NOT_REQUESTED_PARTY",
            )

        if request.status != RequestStatus.ACCEPTED.value:
            raise ConflictException(
                "Only accepted requests can be scheduled",
                code="REQUEST_NOT_ACCEPTED",
            )

        if await self.session_repo.exists_for_request(db, request.id):
            raise ConflictException(
                "A session already exists for this request",
                code="SESSION_EXISTS",
            )

        teacher_id, learner_id = assign_session_roles(request)
        session = await self.session_repo.create(
            db,
            pair_request_id=request.id,
            teacher_id=teacher_id,
            learner_id=learner_id,
            skill=request.skill,
            scheduled_date=data.scheduled_date,
            duration_minutes=data.duration_minutes,
            meeting_link=data.meeting_link or None,
            notes=data.notes or None,
            status=SCHEDULED,
        )
        await db.commit()

        logger.info(
            "session_created",
            session_id=str(session.id),
            pair_request_id=str(request.id),
            teacher_id=str(teacher_id),
            learner_id=str(learner_id),
        )
        return await self._to_response(db, session)

    async def update_session(
        self,
        db: AsyncSession,
        user: User,
        session_id: UUID,
        data: SessionUpdate,
    ) -> SessionResponse:
        """Apply the fields present in data; status is left alone."""
        session = await self._get_user_session(db, user.id, session_id)

        updates = data.model_dump(exclude_unset=True)
        for field in ("meeting_link", "notes"):
            if field in updates:
                updates[field] = updates[field] or None
        if updates:
            session = await self.session_repo.update(db, session, **updates)
            await db.commit()
            logger.info(
                "session_updated",
                session_id=str(session.id),
                actor_id=str(user.id),
                fields=sorted(updates),
            )

        return await self._to_response(db, session)

    async def complete_session(
        self,
        db: AsyncSession,
        user: User,
        session_id: UUID,
    ) -> SessionResponse:
        """Mark a session completed. Attendance is taken on trust."""
        return await self._close(db, user, session_id, COMPLETED)

    async def cancel_session(
        self,
        db: AsyncSession,
        user: User,
        session_id: UUID,
    ) -> SessionResponse:
        return await self._close(db, user, session_id, CANCELLED)

    async def list_sessions(
        self,
        db: AsyncSession,
        user: User,
    ) -> List[SessionResponse]:
        sessions = await self.session_repo.find_for_user(db, user.id)
        return await self._to_responses(db, sessions)

    async def calendar(
        self,
        db: AsyncSession,
        user: User,
        *,
        now: Optional[datetime] = None,
    ) -> CalendarResponse:
        """The user's sessions split into upcoming and past."""
        sessions = await self.session_repo.find_for_user(db, user.id)
        upcoming, past = partition_sessions(sessions, now or datetime.now(timezone.utc))
        return CalendarResponse(
            upcoming=await self._to_responses(db, upcoming),
            past=await self._to_responses(db, past),
        )

    async def _close(
        self,
        db: AsyncSession,
        user: User,
        session_id: UUID,
        target: str,
    ) -> SessionResponse:
        session = await self._get_user_session(db, user.id, session_id)

        if session.status not in OPEN_STATUSES:
            raise InvalidTransitionException(session.status, target)

        previous = session.status
        session = await self.session_repo.update(db, session, status=target)
        await db.commit()

        logger.info(
            "session_closed",
            session_id=str(session.id),
            actor_id=str(user.id),
            from_status=previous,
            to_status=target,
        )
        return await self._to_response(db, session)

    async def _get_user_session(self, db, user_id: UUID, session_id: UUID) -> SkillSession:
        """Fetch a session the user takes part in; anyone else sees 404."""
        session = await self.session_repo.get_by_id(db, session_id)

        if session is None or user_id not in (session.teacher_id, session.learner_id):
            raise SessionNotFoundException()

        return session

    async def _to_response(self, db, session: SkillSession) -> SessionResponse:
        return (await self._to_responses(db, [session]))[0]

    async def _to_responses(self, db, sessions: List[SkillSession]) -> List[SessionResponse]:
        """Convert sessions, loading all participants in one query."""
        users = await self.user_repo.get_many_by_ids(
            db,
            [s.teacher_id for s in sessions] + [s.learner_id for s in sessions],
        )

        def brief(user_id):
            user = users.get(user_id)
            return UserBrief.from_user(user) if user is not None else None

        return [
            SessionResponse(
                id=s.id,
                pair_request_id=s.pair_request_id,
                teacher_id=s.teacher_id,
                learner_id=s.learner_id,
                skill=s.skill,
                scheduled_date=s.scheduled_date,
                duration_minutes=s.duration_minutes,
                meeting_link=s.meeting_link,
                notes=s.notes,
                status=s.status,
                created_at=s.created_at,
                updated_at=s.updated_at,
                teacher=brief(s.teacher_id),
                learner=brief(s.learner_id),
            )
            for s in sessions
        ]
