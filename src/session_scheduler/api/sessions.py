"""Session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from session_scheduler.api.deps import require_actor
from session_scheduler.api.schemas import (
    FeedbackCreate,
    FeedbackOut,
    MessageOut,
    ProposalCreate,
    ProposalDecision,
    SessionOut,
    SessionUpdate,
)
from session_scheduler.domain.actors import Actor  # noqa: TC001

if TYPE_CHECKING:
    from session_scheduler.containers import AppContainer

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("")
async def list_sessions(request: Request) -> list[SessionOut]:
    """Return accepted sessions; public."""
    container: AppContainer = request.app.state.container
    sessions = container.session_service.list_sessions()
    return [SessionOut.from_domain(session) for session in sessions]


@router.get("/proposals")
async def list_proposals(
    request: Request, actor: Actor = Depends(require_actor)
) -> list[SessionOut]:
    """Return pending proposals; coordinators only."""
    container: AppContainer = request.app.state.container
    sessions = container.session_service.list_proposals(actor)
    return [SessionOut.from_domain(session) for session in sessions]


@router.get("/{session_id}")
async def get_session(session_id: UUID, request: Request) -> SessionOut:
    container: AppContainer = request.app.state.container
    return SessionOut.from_domain(container.session_service.get_session(session_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_proposal(
    body: ProposalCreate, request: Request, actor: Actor = Depends(require_actor)
) -> SessionOut:
    """Propose a new session."""
    container: AppContainer = request.app.state.container
    session = container.session_service.create_proposal(
        actor,
        title=body.title,
        description=body.description,
        time_start=body.time_start,
        time_end=body.time_end,
        maximum_participants=body.maximum_participants,
    )
    return SessionOut.from_domain(session)


@router.put("/{session_id}")
async def edit_session(
    session_id: UUID,
    body: SessionUpdate,
    request: Request,
    actor: Actor = Depends(require_actor),
) -> SessionOut:
    """Edit a session owned by the caller."""
    container: AppContainer = request.app.state.container
    session = container.session_service.edit_session(
        actor,
        session_id,
        title=body.title,
        description=body.description,
        time_start=body.time_start,
        time_end=body.time_end,
        maximum_participants=body.maximum_participants,
    )
    return SessionOut.from_domain(session)


@router.delete("/{session_id}")
async def delete_session(
    session_id: UUID, request: Request, actor: Actor = Depends(require_actor)
) -> MessageOut:
    container: AppContainer = request.app.state.container
    container.session_service.delete_session(actor, session_id)
    return MessageOut(message="Session deleted successfully")


@router.patch("/{session_id}/proposal")
async def decide_proposal(
    session_id: UUID,
    body: ProposalDecision,
    request: Request,
    actor: Actor = Depends(require_actor),
) -> SessionOut:
    """Accept or reject a proposal; coordinators only."""
    container: AppContainer = request.app.state.container
    session = container.session_service.decide_proposal(actor, session_id, body.action)
    return SessionOut.from_domain(session)


@router.post("/{session_id}/register")
async def register(
    session_id: UUID, request: Request, actor: Actor = Depends(require_actor)
) -> SessionOut:
    container: AppContainer = request.app.state.container
    return SessionOut.from_domain(container.session_service.register(actor, session_id))


@router.post("/{session_id}/feedback", status_code=status.HTTP_201_CREATED)
async def add_feedback(
    session_id: UUID,
    body: FeedbackCreate,
    request: Request,
    actor: Actor = Depends(require_actor),
) -> FeedbackOut:
    container: AppContainer = request.app.state.container
    feedback = container.feedback_service.add_feedback(actor, session_id, body.comment)
    return FeedbackOut.from_domain(feedback)


@router.delete("/{session_id}/feedback/{feedback_id}")
async def remove_feedback(
    session_id: UUID,
    feedback_id: UUID,
    request: Request,
    actor: Actor = Depends(require_actor),
) -> SessionOut:
    """Remove a feedback entry; coordinators only."""
    container: AppContainer = request.app.state.container
    session = container.feedback_service.remove_feedback(
        actor, session_id, feedback_id
    )
    return SessionOut.from_domain(session)
