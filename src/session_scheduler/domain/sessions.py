"""Domain models for scheduled sessions."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class SessionStatus(StrEnum):
    """Lifecycle status of a session."""

    PROPOSAL = "proposal"
    REJECTED = "rejected"
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class ProposalAction(StrEnum):
    """Coordinator decision on a proposal."""

    ACCEPT = "accept"
    REJECT = "reject"


@dataclass(frozen=True)
class Feedback:
    """A comment left on a session."""

    id: UUID
    user_id: UUID
    comment: str
    created_at: datetime


@dataclass(frozen=True)
class Session:
    """Represents a persisted session."""

    id: UUID
    title: str
    description: str
    time_start: datetime
    time_end: datetime
    maximum_participants: int
    status: SessionStatus
    created_by: UUID
    participants: tuple[UUID, ...] = ()
    feedbacks: tuple[Feedback, ...] = ()
    created_at: datetime | None = None

    @property
    def occupancy(self) -> int:
        """Number of registered participants."""
        return len(self.participants)
