"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from session_scheduler.domain.actors import Role, UserRecord
from session_scheduler.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user administration."""

    client: Client
    table: str = "users"

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table(self.table)
            .select("id, username, role")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_user(response.data[0])
        return None

    def update_role(self, user_id: UUID, role: Role) -> UserRecord:
        """Update the role column and return the user."""
        response = (
            self.client.table(self.table)
            .update({"role": str(role), "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user role in Supabase")
        return _to_user(response.data[0])

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""
        self.client.table(self.table).delete().eq("id", str(user_id)).execute()


def _to_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        username=str(row["username"]),
        role=Role(row["role"]),
    )
