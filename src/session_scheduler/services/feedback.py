"""Per-session feedback comments."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from session_scheduler.domain.actors import Actor
from session_scheduler.domain.errors import BadRequestError, NotFoundError
from session_scheduler.domain.sessions import Feedback, Session
from session_scheduler.services import lifecycle, policy
from session_scheduler.services.sessions import (
    SessionRepository,
    load_session,
    store_errors,
)

logger = logging.getLogger(__name__)


@dataclass
class FeedbackService:
    """Service for adding and moderating session feedback."""

    repository: SessionRepository

    def add_feedback(self, actor: Actor, session_id: UUID, comment: str) -> Feedback:
        """Append a comment to a session that has been accepted."""
        with store_errors("leave feedback"):
            session = load_session(self.repository, session_id)
            lifecycle.ensure_feedback_open(session)
            if not comment or not comment.strip():
                raise BadRequestError("comment must not be empty")
            feedback = Feedback(
                id=uuid4(),
                user_id=actor.id,
                comment=comment,
                created_at=datetime.now(tz=UTC),
            )
            self.repository.save_session(
                replace(session, feedbacks=(*session.feedbacks, feedback))
            )
        logger.info("Feedback %s added to session %s", feedback.id, session_id)
        return feedback

    def remove_feedback(
        self, actor: Actor, session_id: UUID, feedback_id: UUID
    ) -> Session:
        """Remove a comment; coordinators only."""
        with store_errors("remove feedback"):
            policy.require_coordinator(actor)
            session = load_session(self.repository, session_id)
            remaining = tuple(
                feedback for feedback in session.feedbacks if feedback.id != feedback_id
            )
            if len(remaining) == len(session.feedbacks):
                raise NotFoundError("Feedback not found")
            updated = self.repository.save_session(
                replace(session, feedbacks=remaining)
            )
        logger.info("Feedback %s removed from session %s", feedback_id, session_id)
        return updated
