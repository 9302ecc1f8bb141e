"""Errors raised by the scheduling core.

Every error carries a stable ``kind`` and the HTTP status the transport layer
should answer with. The kind-to-status mapping is fixed.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Client-facing error codes."""

    NOT_FOUND = "NotFound"
    INVALID_RANGE = "InvalidRange"
    CAPACITY_BELOW_OCCUPANCY = "CapacityBelowOccupancy"
    CONFLICT = "Conflict"
    ALREADY_REGISTERED = "AlreadyRegistered"
    SESSION_FULL = "SessionFull"
    NOT_AVAILABLE = "NotAvailable"
    NOT_PROPOSAL = "NotProposal"
    NOT_ACCEPTED_YET = "NotAcceptedYet"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    BAD_REQUEST = "BadRequest"
    INTERNAL_ERROR = "InternalError"


HTTP_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_RANGE: 400,
    ErrorKind.CAPACITY_BELOW_OCCUPANCY: 400,
    ErrorKind.NOT_AVAILABLE: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.ALREADY_REGISTERED: 409,
    ErrorKind.SESSION_FULL: 409,
    ErrorKind.NOT_PROPOSAL: 409,
    ErrorKind.NOT_ACCEPTED_YET: 409,
    ErrorKind.INTERNAL_ERROR: 500,
}


class SchedulingError(Exception):
    """Base exception for all scheduling errors."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def http_status(self) -> int:
        """HTTP status code for this error."""
        return HTTP_STATUS_BY_KIND[self.kind]

    def to_payload(self) -> dict[str, str]:
        """Serialize to the response body shape."""
        return {"error": str(self.kind), "message": self.message}


class NotFoundError(SchedulingError):
    """Entity missing."""

    kind = ErrorKind.NOT_FOUND


class InvalidRangeError(SchedulingError):
    """End time is not after start time."""

    kind = ErrorKind.INVALID_RANGE

    def __init__(self, message: str = "End time must be after start time") -> None:
        super().__init__(message)


class CapacityBelowOccupancyError(SchedulingError):
    kind = ErrorKind.CAPACITY_BELOW_OCCUPANCY

    def __init__(
        self,
        message: str = (
            "Maximum participants cannot be less than current participants count"
        ),
    ) -> None:
        super().__init__(message)


class ConflictError(SchedulingError):
    """Temporal overlap with another session."""

    kind = ErrorKind.CONFLICT


class AlreadyRegisteredError(SchedulingError):
    kind = ErrorKind.ALREADY_REGISTERED

    def __init__(
        self, message: str = "You are already registered for this session"
    ) -> None:
        super().__init__(message)


class SessionFullError(SchedulingError):
    kind = ErrorKind.SESSION_FULL

    def __init__(self, message: str = "Session is full") -> None:
        super().__init__(message)


class NotAvailableError(SchedulingError):
    """Operation attempted in a status that does not allow it."""

    kind = ErrorKind.NOT_AVAILABLE


class NotProposalError(SchedulingError):
    kind = ErrorKind.NOT_PROPOSAL

    def __init__(self, message: str = "Only session proposals can be updated") -> None:
        super().__init__(message)


class NotAcceptedYetError(SchedulingError):
    kind = ErrorKind.NOT_ACCEPTED_YET

    def __init__(self, message: str = "Session not available for feedback") -> None:
        super().__init__(message)


class UnauthorizedError(SchedulingError):
    """Caller identity missing or not vouched for by the gateway."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ForbiddenError(SchedulingError):
    """Role or ownership check failed."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self, message: str = "You do not have permission to perform this action"
    ) -> None:
        super().__init__(message)


class BadRequestError(SchedulingError):
    """Malformed input."""

    kind = ErrorKind.BAD_REQUEST


class InternalError(SchedulingError):
    """Store or unexpected failure."""

    kind = ErrorKind.INTERNAL_ERROR
