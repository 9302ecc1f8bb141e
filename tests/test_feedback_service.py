"""Tests for session feedback."""

from uuid import uuid4

import pytest

from session_scheduler.domain.actors import Role
from session_scheduler.domain.errors import (
    BadRequestError,
    ForbiddenError,
    NotAcceptedYetError,
    NotFoundError,
)
from session_scheduler.domain.sessions import SessionStatus
from session_scheduler.services.feedback import FeedbackService
from session_scheduler.services.sessions import SessionService
from tests.conftest import InterleavingSessionRepository, make_actor


@pytest.mark.parametrize(
    "status",
    [SessionStatus.UPCOMING, SessionStatus.ONGOING, SessionStatus.COMPLETED],
)
def test_add_feedback_appends_entry(feedback_service, session_repository, status) -> None:
    session = session_repository.seed(status=status)
    actor = make_actor()

    feedback = feedback_service.add_feedback(actor, session.id, "Great talk")

    stored = session_repository.sessions[session.id]
    assert stored.feedbacks == (feedback,)
    assert feedback.user_id == actor.id
    assert feedback.comment == "Great talk"
    assert feedback.created_at is not None


def test_add_feedback_preserves_order(feedback_service, session_repository) -> None:
    session = session_repository.seed()

    first = feedback_service.add_feedback(make_actor(), session.id, "first")
    second = feedback_service.add_feedback(make_actor(), session.id, "second")

    assert session_repository.sessions[session.id].feedbacks == (first, second)


@pytest.mark.parametrize("status", [SessionStatus.PROPOSAL, SessionStatus.REJECTED])
def test_add_feedback_requires_accepted_session(
    feedback_service, session_repository, status
) -> None:
    session = session_repository.seed(status=status)

    with pytest.raises(NotAcceptedYetError) as excinfo:
        feedback_service.add_feedback(make_actor(), session.id, "Too early")

    assert excinfo.value.http_status == 409
    assert session_repository.sessions[session.id].feedbacks == ()


def test_add_feedback_rejects_blank_comment(feedback_service, session_repository) -> None:
    session = session_repository.seed()

    with pytest.raises(BadRequestError):
        feedback_service.add_feedback(make_actor(), session.id, "   ")


def test_add_feedback_missing_session(feedback_service) -> None:
    with pytest.raises(NotFoundError):
        feedback_service.add_feedback(make_actor(), uuid4(), "Hello")


def test_remove_feedback_by_coordinator(feedback_service, session_repository) -> None:
    session = session_repository.seed()
    keep = feedback_service.add_feedback(make_actor(), session.id, "keep")
    drop = feedback_service.add_feedback(make_actor(), session.id, "drop")

    updated = feedback_service.remove_feedback(
        make_actor(Role.EVENT_COORDINATOR), session.id, drop.id
    )

    assert updated.feedbacks == (keep,)
    assert session_repository.sessions[session.id].feedbacks == (keep,)


def test_remove_feedback_unknown_id(feedback_service, session_repository) -> None:
    session = session_repository.seed()
    feedback_service.add_feedback(make_actor(), session.id, "keep")

    with pytest.raises(NotFoundError):
        feedback_service.remove_feedback(
            make_actor(Role.EVENT_COORDINATOR), session.id, uuid4()
        )


def test_remove_feedback_requires_coordinator(feedback_service, session_repository) -> None:
    session = session_repository.seed()
    author = make_actor()
    feedback = feedback_service.add_feedback(author, session.id, "mine")

    with pytest.raises(ForbiddenError):
        feedback_service.remove_feedback(author, session.id, feedback.id)

    assert len(session_repository.sessions[session.id].feedbacks) == 1


def test_add_feedback_keeps_concurrent_registration() -> None:
    repository = InterleavingSessionRepository()
    session = repository.seed()
    participant = make_actor()
    repository.after_read = lambda: SessionService(repository).register(
        participant, session.id
    )

    FeedbackService(repository).add_feedback(make_actor(), session.id, "Nice")

    stored = repository.sessions[session.id]
    assert stored.participants == (participant.id,)
    assert len(stored.feedbacks) == 1
