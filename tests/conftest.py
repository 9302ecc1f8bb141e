"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from session_scheduler.config import Settings
from session_scheduler.containers import AppContainer
from session_scheduler.domain.actors import Actor, Role, UserRecord
from session_scheduler.domain.sessions import Session, SessionStatus
from session_scheduler.services.feedback import FeedbackService
from session_scheduler.services.overlap import OverlapScope
from session_scheduler.services.sessions import SessionRepository, SessionService
from session_scheduler.services.users import UserRepository, UserService

BASE_TIME = datetime(2026, 11, 2, 9, 0, tzinfo=UTC)


def at(minutes: int) -> datetime:
    """Return a timestamp a number of minutes after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_actor(role: Role = Role.USER) -> Actor:
    return Actor(id=uuid4(), role=role)


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[UUID, Session] = field(default_factory=dict)
    fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def get_session(self, session_id: UUID) -> Session | None:
        self._check()
        return self.sessions.get(session_id)

    def list_sessions(
        self,
        statuses: set[SessionStatus] | None = None,
        exclude_statuses: set[SessionStatus] | None = None,
    ) -> list[Session]:
        self._check()
        return [
            session
            for session in self.sessions.values()
            if (statuses is None or session.status in statuses)
            and (exclude_statuses is None or session.status not in exclude_statuses)
        ]

    def find_overlapping(
        self, scope: OverlapScope, actor_id: UUID, start: datetime, end: datetime
    ) -> list[Session]:
        self._check()
        results = []
        for session in self.sessions.values():
            if scope == OverlapScope.CREATOR and session.created_by != actor_id:
                continue
            if scope == OverlapScope.PARTICIPANT and actor_id not in session.participants:
                continue
            if session.time_start <= end and session.time_end >= start:
                results.append(session)
        return results

    def create_session(self, session: Session) -> Session:
        self._check()
        self.sessions[session.id] = session
        return session

    def save_session(self, session: Session) -> Session:
        self._check()
        stored = self.sessions[session.id]
        saved = replace(session, participants=stored.participants)
        self.sessions[session.id] = saved
        return saved

    def add_participant(self, session_id: UUID, user_id: UUID) -> Session:
        self._check()
        current = self.sessions[session_id]
        updated = replace(current, participants=(*current.participants, user_id))
        self.sessions[session_id] = updated
        return updated

    def delete_session(self, session_id: UUID) -> None:
        self._check()
        self.sessions.pop(session_id, None)

    def seed(self, **overrides: object) -> Session:
        """Store a session built from defaults and overrides."""
        values: dict[str, object] = {
            "id": uuid4(),
            "title": "Seeded session",
            "description": "Seeded description",
            "time_start": at(0),
            "time_end": at(60),
            "maximum_participants": 10,
            "status": SessionStatus.UPCOMING,
            "created_by": uuid4(),
        }
        values.update(overrides)
        session = Session(**values)  # type: ignore[arg-type]
        self.sessions[session.id] = session
        return session


@dataclass
class InterleavingSessionRepository(InMemorySessionRepository):
    """Runs a callback once, right after the next session read returns."""

    after_read: Callable[[], None] | None = None

    def get_session(self, session_id: UUID) -> Session | None:
        session = super().get_session(session_id)
        callback, self.after_read = self.after_read, None
        if callback is not None:
            callback()
        return session


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def update_role(self, user_id: UUID, role: Role) -> UserRecord:
        updated = replace(self.users[user_id], role=role)
        self.users[user_id] = updated
        return updated

    def delete_user(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)

    def seed(self, username: str = "alice", role: Role = Role.USER) -> UserRecord:
        user = UserRecord(id=uuid4(), username=username, role=role)
        self.users[user.id] = user
        return user


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        gateway_token="gateway-token",
    )


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def session_service(session_repository: InMemorySessionRepository) -> SessionService:
    return SessionService(session_repository)


@pytest.fixture
def feedback_service(
    session_repository: InMemorySessionRepository,
) -> FeedbackService:
    return FeedbackService(session_repository)


@pytest.fixture
def user_service(user_repository: InMemoryUserRepository) -> UserService:
    return UserService(user_repository)


@pytest.fixture
def container(
    settings: Settings,
    session_service: SessionService,
    feedback_service: FeedbackService,
    user_service: UserService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        session_service=session_service,
        feedback_service=feedback_service,
        user_service=user_service,
    )


def actor_headers(actor: Actor, token: str = "gateway-token") -> dict[str, str]:
    return {
        "X-Gateway-Token": token,
        "X-Actor-Id": str(actor.id),
        "X-Actor-Role": str(actor.role),
    }
