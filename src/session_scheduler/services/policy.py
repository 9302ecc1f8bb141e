"""Role and ownership predicates consulted before any mutation."""

from collections.abc import Iterable

from session_scheduler.domain.actors import Actor, Role
from session_scheduler.domain.errors import ForbiddenError
from session_scheduler.domain.sessions import Session

COORDINATOR_ROLES = frozenset({Role.EVENT_COORDINATOR})
DELETE_ROLES = frozenset({Role.EVENT_COORDINATOR, Role.ADMIN})
ADMIN_ROLES = frozenset({Role.ADMIN})


def is_owner(actor: Actor, session: Session) -> bool:
    """Return True when the actor created the session."""
    return actor.id == session.created_by


def has_any_role(actor: Actor, allowed_roles: Iterable[Role]) -> bool:
    """Return True when the actor's role is in allowed_roles."""
    return actor.role in set(allowed_roles)


def is_coordinator(actor: Actor) -> bool:
    return has_any_role(actor, COORDINATOR_ROLES)


def is_admin(actor: Actor) -> bool:
    return has_any_role(actor, ADMIN_ROLES)


def can_edit(actor: Actor, session: Session) -> bool:
    return is_owner(actor, session)


def can_delete(actor: Actor, session: Session) -> bool:
    return is_owner(actor, session) or has_any_role(actor, DELETE_ROLES)


def require_owner(actor: Actor, session: Session) -> None:
    if not can_edit(actor, session):
        raise ForbiddenError("You can only perform this action on your own sessions")


def require_owner_or_coordinator(actor: Actor, session: Session) -> None:
    if not can_delete(actor, session):
        raise ForbiddenError("You can only perform this action on your own sessions")


def require_coordinator(actor: Actor) -> None:
    if not is_coordinator(actor):
        raise ForbiddenError


def require_admin(actor: Actor) -> None:
    if not is_admin(actor):
        raise ForbiddenError
