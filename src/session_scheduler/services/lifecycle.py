"""Session lifecycle state machine.

Proposal -> Upcoming | Rejected, Upcoming -> Ongoing -> Completed.
Only the proposal decision happens here; Ongoing and Completed are driven
by an external scheduler.
"""

from datetime import datetime

from session_scheduler.domain.errors import (
    BadRequestError,
    InvalidRangeError,
    NotAcceptedYetError,
    NotAvailableError,
    NotProposalError,
)
from session_scheduler.domain.sessions import ProposalAction, Session, SessionStatus

TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.PROPOSAL: frozenset({SessionStatus.UPCOMING, SessionStatus.REJECTED}),
    SessionStatus.REJECTED: frozenset(),
    SessionStatus.UPCOMING: frozenset({SessionStatus.ONGOING}),
    SessionStatus.ONGOING: frozenset({SessionStatus.COMPLETED}),
    SessionStatus.COMPLETED: frozenset(),
}

HIDDEN_STATUSES = frozenset({SessionStatus.PROPOSAL, SessionStatus.REJECTED})


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    """Return True when the state machine allows current -> target."""
    return target in TRANSITIONS[current]


def is_editable(status: SessionStatus) -> bool:
    """Return True while the owner may still change the session."""
    match status:
        case SessionStatus.PROPOSAL | SessionStatus.UPCOMING:
            return True
        case SessionStatus.REJECTED | SessionStatus.ONGOING | SessionStatus.COMPLETED:
            return False


def accepts_registrations(status: SessionStatus) -> bool:
    return status == SessionStatus.UPCOMING


def accepts_feedback(status: SessionStatus) -> bool:
    return status not in HIDDEN_STATUSES


def parse_action(raw: str) -> ProposalAction:
    """Parse a decision action, raising BadRequestError for unknown values."""
    try:
        return ProposalAction(raw)
    except ValueError as exc:
        raise BadRequestError(
            'Invalid action. It should be either "accept" or "reject".'
        ) from exc


def decision_target(action: ProposalAction) -> SessionStatus:
    """Return the status a proposal moves to for the given action."""
    match action:
        case ProposalAction.ACCEPT:
            return SessionStatus.UPCOMING
        case ProposalAction.REJECT:
            return SessionStatus.REJECTED


def decide(session: Session, action: ProposalAction) -> SessionStatus:
    """Validate a proposal decision and return the resulting status."""
    target = decision_target(action)
    if session.status != SessionStatus.PROPOSAL or not can_transition(
        session.status, target
    ):
        raise NotProposalError
    return target


def ensure_valid_range(time_start: datetime, time_end: datetime) -> None:
    """Raise InvalidRangeError unless the end is strictly after the start."""
    if time_end <= time_start:
        raise InvalidRangeError


def ensure_editable(session: Session) -> None:
    if not is_editable(session.status):
        raise NotAvailableError(
            f"Session in status {session.status} can no longer be edited"
        )


def ensure_registration_open(session: Session) -> None:
    if not accepts_registrations(session.status):
        raise NotAvailableError("Session not available for registration")


def ensure_feedback_open(session: Session) -> None:
    if not accepts_feedback(session.status):
        raise NotAcceptedYetError
