"""Participant capacity checks."""

from session_scheduler.domain.errors import (
    BadRequestError,
    CapacityBelowOccupancyError,
    SessionFullError,
)
from session_scheduler.domain.sessions import Session


def has_free_seat(session: Session) -> bool:
    """Return True when one more participant fits."""
    return session.occupancy < session.maximum_participants


def ensure_free_seat(session: Session) -> None:
    """Raise SessionFullError when the session is at capacity."""
    if not has_free_seat(session):
        raise SessionFullError


def ensure_valid_capacity(maximum_participants: int) -> None:
    """Raise BadRequestError unless capacity is a positive integer."""
    if isinstance(maximum_participants, bool) or maximum_participants < 1:
        raise BadRequestError("Maximum participants must be a positive integer")


def ensure_capacity_covers_occupancy(
    session: Session, maximum_participants: int
) -> None:
    """Raise when a new capacity would drop below current occupancy."""
    if maximum_participants < session.occupancy:
        raise CapacityBelowOccupancyError
