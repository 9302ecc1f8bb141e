"""Domain models for actors and users."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Roles an authenticated user can hold."""

    USER = "user"
    EVENT_COORDINATOR = "event-coordinator"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """Authenticated identity performing an operation."""

    id: UUID
    role: Role


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    username: str
    role: Role
