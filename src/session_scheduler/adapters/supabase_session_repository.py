"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from session_scheduler.domain.sessions import Feedback, Session, SessionStatus
from session_scheduler.services.overlap import OverlapScope
from session_scheduler.services.sessions import SessionRepository

_COLUMNS = (
    "id, title, description, time_start, time_end, maximum_participants, "
    "status, created_by, participants, feedbacks, created_at"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for sessions.

    Participants are stored as a uuid array and feedbacks as a jsonb array
    on the session row, so every write touches a single row.
    """

    client: Client
    table: str = "sessions"
    append_participant_function: str = "append_session_participant"

    def get_session(self, session_id: UUID) -> Session | None:
        """Return a session by id, if present."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_session(response.data[0])

    def list_sessions(
        self,
        statuses: set[SessionStatus] | None = None,
        exclude_statuses: set[SessionStatus] | None = None,
    ) -> list[Session]:
        """Return sessions filtered by status membership."""
        query = self.client.table(self.table).select(_COLUMNS)
        if statuses:
            query = query.in_("status", sorted(str(status) for status in statuses))
        if exclude_statuses:
            query = query.not_.in_(
                "status", sorted(str(status) for status in exclude_statuses)
            )
        response = query.order("time_start").execute()
        return [_to_session(row) for row in response.data or []]

    def find_overlapping(
        self,
        scope: OverlapScope,
        actor_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[Session]:
        """Return sessions in scope whose interval intersects [start, end]."""
        query = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .lte("time_start", end.isoformat())
            .gte("time_end", start.isoformat())
        )
        if scope == OverlapScope.CREATOR:
            query = query.eq("created_by", str(actor_id))
        else:
            query = query.contains("participants", [str(actor_id)])
        response = query.execute()
        return [_to_session(row) for row in response.data or []]

    def create_session(self, session: Session) -> Session:
        """Insert a session row and return it."""
        response = self.client.table(self.table).insert(_to_row(session)).execute()
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _to_session(response.data[0])

    def save_session(self, session: Session) -> Session:
        """Replace the mutable columns of a session row.

        Participants are left alone; only `add_participant` writes them.
        """
        row = _to_row(session)
        for column in ("id", "created_by", "created_at", "participants"):
            row.pop(column)
        response = (
            self.client.table(self.table).update(row).eq("id", str(session.id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update session")
        return _to_session(response.data[0])

    def add_participant(self, session_id: UUID, user_id: UUID) -> Session:
        """Append a participant through a single-statement database function."""
        response = self.client.rpc(
            self.append_participant_function,
            {"p_session_id": str(session_id), "p_user_id": str(user_id)},
        ).execute()
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            raise RuntimeError("Failed to register participant")
        return _to_session(data)

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session row."""
        self.client.table(self.table).delete().eq("id", str(session_id)).execute()


def _to_row(session: Session) -> dict[str, object]:
    return {
        "id": str(session.id),
        "title": session.title,
        "description": session.description,
        "time_start": session.time_start.isoformat(),
        "time_end": session.time_end.isoformat(),
        "maximum_participants": session.maximum_participants,
        "status": str(session.status),
        "created_by": str(session.created_by),
        "participants": [str(user_id) for user_id in session.participants],
        "feedbacks": [
            {
                "id": str(feedback.id),
                "user_id": str(feedback.user_id),
                "comment": feedback.comment,
                "created_at": feedback.created_at.isoformat(),
            }
            for feedback in session.feedbacks
        ],
        "created_at": session.created_at.isoformat() if session.created_at else None,
    }


def _to_session(row: dict[str, object]) -> Session:
    created_at = row.get("created_at")
    return Session(
        id=UUID(str(row["id"])),
        title=str(row["title"]),
        description=str(row["description"]),
        time_start=datetime.fromisoformat(str(row["time_start"])),
        time_end=datetime.fromisoformat(str(row["time_end"])),
        maximum_participants=int(row["maximum_participants"]),
        status=SessionStatus(row["status"]),
        created_by=UUID(str(row["created_by"])),
        participants=tuple(UUID(str(value)) for value in row.get("participants") or []),
        feedbacks=tuple(
            Feedback(
                id=UUID(str(item["id"])),
                user_id=UUID(str(item["user_id"])),
                comment=str(item["comment"]),
                created_at=datetime.fromisoformat(str(item["created_at"])),
            )
            for item in row.get("feedbacks") or []
        ),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
