"""Session lifecycle operations: proposals, decisions, edits and registration."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from session_scheduler.domain.actors import Actor
from session_scheduler.domain.errors import (
    AlreadyRegisteredError,
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    SchedulingError,
)
from session_scheduler.domain.sessions import ProposalAction, Session, SessionStatus
from session_scheduler.services import capacity, lifecycle, policy
from session_scheduler.services.overlap import (
    OverlapScope,
    find_conflicting_session,
)

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for sessions."""

    def get_session(self, session_id: UUID) -> Session | None:
        """Return a session by id, if present."""

    def list_sessions(
        self,
        statuses: set[SessionStatus] | None = None,
        exclude_statuses: set[SessionStatus] | None = None,
    ) -> list[Session]:
        """Return sessions filtered by status membership."""

    def find_overlapping(
        self,
        scope: OverlapScope,
        actor_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[Session]:
        """Return sessions in scope whose interval intersects [start, end]."""

    def create_session(self, session: Session) -> Session:
        """Insert a new session and return it."""

    def save_session(self, session: Session) -> Session:
        """Replace a stored session, keeping its stored participants."""

    def add_participant(self, session_id: UUID, user_id: UUID) -> Session:
        """Atomically append a participant and return the stored session."""

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session."""


@contextmanager
def store_errors(description: str) -> Iterator[None]:
    """Log rejected operations and translate store failures into InternalError."""
    try:
        yield
    except SchedulingError as exc:
        logger.warning("Rejected request to %s: %s", description, exc.message)
        raise
    except Exception as exc:
        logger.exception("Failed to %s", description)
        raise InternalError(f"Failed to {description}: {exc}") from exc


def load_session(repository: SessionRepository, session_id: UUID) -> Session:
    """Return the session or raise NotFoundError."""
    session = repository.get_session(session_id)
    if session is None:
        raise NotFoundError(f"Session {session_id} not found")
    return session


def _require_text(value: str, field: str) -> str:
    if not value or not value.strip():
        raise BadRequestError(f"{field} must not be empty")
    return value


@dataclass
class SessionService:
    """Application service for the session lifecycle.

    Checks run in a fixed order so clients always see the same error for the
    same request: existence, authorization, status, field and range validity,
    time conflicts, then capacity.
    """

    repository: SessionRepository

    def list_sessions(self) -> list[Session]:
        """Return sessions visible to everyone."""
        with store_errors("fetch sessions"):
            return self.repository.list_sessions(
                exclude_statuses=set(lifecycle.HIDDEN_STATUSES)
            )

    def list_proposals(self, actor: Actor) -> list[Session]:
        """Return sessions awaiting a coordinator decision."""
        with store_errors("fetch proposals"):
            policy.require_coordinator(actor)
            return self.repository.list_sessions(statuses={SessionStatus.PROPOSAL})

    def get_session(self, session_id: UUID) -> Session:
        with store_errors("fetch session"):
            return load_session(self.repository, session_id)

    def create_proposal(  # noqa: PLR0913
        self,
        actor: Actor,
        title: str,
        description: str,
        time_start: datetime,
        time_end: datetime,
        maximum_participants: int,
    ) -> Session:
        """Create a session in Proposal status."""
        logger.debug("Request to create proposal from user %s", actor.id)
        with store_errors("create session proposal"):
            _require_text(title, "title")
            _require_text(description, "description")
            capacity.ensure_valid_capacity(maximum_participants)
            lifecycle.ensure_valid_range(time_start, time_end)
            self._ensure_no_creator_conflict(actor, time_start, time_end)
            session = self.repository.create_session(
                Session(
                    id=uuid4(),
                    title=title,
                    description=description,
                    time_start=time_start,
                    time_end=time_end,
                    maximum_participants=maximum_participants,
                    status=SessionStatus.PROPOSAL,
                    created_by=actor.id,
                    created_at=datetime.now(tz=UTC),
                )
            )
        logger.info("Proposal %s created by user %s", session.id, actor.id)
        return session

    def decide_proposal(
        self, actor: Actor, session_id: UUID, action: ProposalAction | str
    ) -> Session:
        """Accept or reject a proposal."""
        with store_errors("handle session proposal"):
            policy.require_coordinator(actor)
            parsed = lifecycle.parse_action(action)
            session = load_session(self.repository, session_id)
            target = lifecycle.decide(session, parsed)
            updated = self.repository.save_session(replace(session, status=target))
        logger.info("Session %s %sed by %s", session_id, parsed, actor.id)
        return updated

    def edit_session(  # noqa: PLR0913
        self,
        actor: Actor,
        session_id: UUID,
        title: str | None = None,
        description: str | None = None,
        time_start: datetime | None = None,
        time_end: datetime | None = None,
        maximum_participants: int | None = None,
    ) -> Session:
        """Replace the editable fields of a session owned by the actor.

        Fields left as None keep their current value.
        """
        logger.debug("Request to edit session %s from user %s", session_id, actor.id)
        with store_errors("update session"):
            session = load_session(self.repository, session_id)
            policy.require_owner(actor, session)
            lifecycle.ensure_editable(session)

            new_title = _require_text(
                session.title if title is None else title, "title"
            )
            new_description = _require_text(
                session.description if description is None else description,
                "description",
            )
            new_start = session.time_start if time_start is None else time_start
            new_end = session.time_end if time_end is None else time_end
            new_capacity = (
                session.maximum_participants
                if maximum_participants is None
                else maximum_participants
            )
            capacity.ensure_valid_capacity(new_capacity)
            lifecycle.ensure_valid_range(new_start, new_end)
            self._ensure_no_creator_conflict(
                actor, new_start, new_end, exclude_id=session.id
            )
            capacity.ensure_capacity_covers_occupancy(session, new_capacity)

            updated = self.repository.save_session(
                replace(
                    session,
                    title=new_title,
                    description=new_description,
                    time_start=new_start,
                    time_end=new_end,
                    maximum_participants=new_capacity,
                )
            )
        logger.info("Session %s updated by %s", session_id, actor.id)
        return updated

    def delete_session(self, actor: Actor, session_id: UUID) -> None:
        """Delete a session owned by the actor, or any session for coordinators."""
        logger.debug("Request to delete session %s from user %s", session_id, actor.id)
        with store_errors("delete session"):
            session = load_session(self.repository, session_id)
            policy.require_owner_or_coordinator(actor, session)
            self.repository.delete_session(session.id)
        logger.info("Session %s deleted by %s", session_id, actor.id)

    def register(self, actor: Actor, session_id: UUID) -> Session:
        """Add the actor to the session participants."""
        logger.debug("Request to register user %s for %s", actor.id, session_id)
        with store_errors("register for session"):
            session = load_session(self.repository, session_id)
            lifecycle.ensure_registration_open(session)
            if actor.id in session.participants:
                raise AlreadyRegisteredError
            conflict = find_conflicting_session(
                self.repository,
                OverlapScope.PARTICIPANT,
                actor.id,
                session.time_start,
                session.time_end,
                exclude_id=session.id,
            )
            if conflict is not None:
                raise ConflictError(f"Session conflict with session {conflict.title}")
            capacity.ensure_free_seat(session)
            # Append only; a concurrent register may overshoot capacity.
            updated = self.repository.add_participant(session.id, actor.id)
        logger.info("User %s registered for session %s", actor.id, session_id)
        return updated

    def _ensure_no_creator_conflict(
        self,
        actor: Actor,
        time_start: datetime,
        time_end: datetime,
        exclude_id: UUID | None = None,
    ) -> None:
        conflict = find_conflicting_session(
            self.repository,
            OverlapScope.CREATOR,
            actor.id,
            time_start,
            time_end,
            exclude_id=exclude_id,
        )
        if conflict is not None:
            raise ConflictError(
                "A session already exists within the specified time period "
                f"({conflict.title}). Please choose a different time."
            )
