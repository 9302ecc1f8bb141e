"""Request dependencies shared by the API routers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import Depends, Header, Request

from session_scheduler.config import parse_role
from session_scheduler.domain.actors import Actor
from session_scheduler.domain.errors import UnauthorizedError

if TYPE_CHECKING:
    from session_scheduler.containers import AppContainer

logger = logging.getLogger(__name__)


def _get_gateway_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.gateway_token


async def require_actor(
    x_gateway_token: str | None = Header(default=None),
    x_actor_id: str | None = Header(default=None),
    x_actor_role: str | None = Header(default=None),
    gateway_token: str = Depends(_get_gateway_token),
) -> Actor:
    """Resolve the authenticated actor forwarded by the gateway."""
    if not x_gateway_token or x_gateway_token != gateway_token:
        logger.warning("Rejected request without a valid gateway token")
        raise UnauthorizedError("Invalid gateway token")
    role = parse_role(x_actor_role)
    if x_actor_id is None or role is None:
        raise UnauthorizedError("Missing or unknown actor")
    try:
        actor_id = UUID(x_actor_id)
    except ValueError as exc:
        logger.warning("Rejected malformed actor id %r", x_actor_id)
        raise UnauthorizedError("Missing or unknown actor") from exc
    return Actor(id=actor_id, role=role)
