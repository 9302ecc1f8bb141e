"""Interval overlap detection for sessions."""

from datetime import datetime
from enum import StrEnum
from typing import Protocol
from uuid import UUID

from session_scheduler.domain.sessions import Session


class OverlapScope(StrEnum):
    """Which relation between an actor and a session is checked."""

    CREATOR = "creator"
    PARTICIPANT = "participant"


class OverlapQuery(Protocol):
    """Read-only query used by the overlap checker."""

    def find_overlapping(
        self, scope: OverlapScope, actor_id: UUID, start: datetime, end: datetime
    ) -> list[Session]:
        """Return sessions in scope whose interval intersects [start, end]."""


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """Return True when two closed intervals share at least one instant.

    Boundaries are inclusive, so an interval ending exactly when another
    starts counts as overlapping.
    """
    return a_start <= b_end and b_start <= a_end


def find_conflicting_session(  # noqa: PLR0913
    repository: OverlapQuery,
    scope: OverlapScope,
    actor_id: UUID,
    start: datetime,
    end: datetime,
    exclude_id: UUID | None = None,
) -> Session | None:
    """Return any session in scope that overlaps [start, end], if one exists."""
    for session in repository.find_overlapping(scope, actor_id, start, end):
        if session.id == exclude_id:
            continue
        if not _in_scope(session, scope, actor_id):
            continue
        if intervals_overlap(start, end, session.time_start, session.time_end):
            return session
    return None


def _in_scope(session: Session, scope: OverlapScope, actor_id: UUID) -> bool:
    match scope:
        case OverlapScope.CREATOR:
            return session.created_by == actor_id
        case OverlapScope.PARTICIPANT:
            return actor_id in session.participants
