"""Admin API endpoints for user management."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from session_scheduler.api.deps import require_actor
from session_scheduler.api.schemas import MessageOut, UserOut
from session_scheduler.domain.actors import Actor  # noqa: TC001

if TYPE_CHECKING:
    from session_scheduler.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


@router.patch("/users/{user_id}/event-coordinator")
async def promote_user(
    user_id: UUID, request: Request, actor: Actor = Depends(require_actor)
) -> UserOut:
    """Promote a user to event coordinator."""
    container: AppContainer = request.app.state.container
    user = container.user_service.promote_to_coordinator(actor, user_id)
    return UserOut.from_domain(user)


@router.delete("/users/{user_id}")
async def remove_user(
    user_id: UUID, request: Request, actor: Actor = Depends(require_actor)
) -> MessageOut:
    """Remove a user account."""
    container: AppContainer = request.app.state.container
    container.user_service.remove_user(actor, user_id)
    return MessageOut(message="User removed successfully")
