"""User administration: role promotion and removal."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from session_scheduler.domain.actors import Actor, Role, UserRecord
from session_scheduler.domain.errors import BadRequestError, NotFoundError
from session_scheduler.services import policy
from session_scheduler.services.sessions import store_errors

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user, if present."""

    def update_role(self, user_id: UUID, role: Role) -> UserRecord:
        """Set the user's role and return the updated record."""

    def delete_user(self, user_id: UUID) -> None:
        """Delete a user."""


@dataclass
class UserService:
    """Admin-only operations on user accounts."""

    repository: UserRepository

    def promote_to_coordinator(self, actor: Actor, user_id: UUID) -> UserRecord:
        """Give a user the event coordinator role."""
        logger.debug("Request to promote user %s from %s", user_id, actor.id)
        with store_errors("promote user to event coordinator"):
            policy.require_admin(actor)
            user = self._load_user(user_id)
            if user.role == Role.EVENT_COORDINATOR:
                raise BadRequestError("User is already an event coordinator")
            updated = self.repository.update_role(user.id, Role.EVENT_COORDINATOR)
        logger.info("User %s promoted to event coordinator", user_id)
        return updated

    def remove_user(self, actor: Actor, user_id: UUID) -> None:
        """Delete a user account."""
        logger.debug("Request to remove user %s from %s", user_id, actor.id)
        with store_errors("remove user"):
            policy.require_admin(actor)
            user = self._load_user(user_id)
            self.repository.delete_user(user.id)
        logger.info("User %s removed", user_id)

    def _load_user(self, user_id: UUID) -> UserRecord:
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
