"""Supabase-backed user repository."""

from dataclasses import dataclass

from supabase import Client

from studio_booking.domain.users import UserRecord
from studio_booking.services.users import UserRepository

_COLUMNS = "id, username, email, role, is_active"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user lookups."""

    client: Client

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return a user by id, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return a user by username, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("username", username)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def list_users(self) -> list[UserRecord]:
        """Return all users."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def update_role(self, user_id: int, role: str) -> UserRecord | None:
        """Set the role column for a user."""
        response = (
            self.client.table("users")
            .update({"role": str(role)})
            .eq("id", user_id)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None


def _parse_row(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=int(row["id"]),
        username=str(row["username"]),
        role=str(row["role"]),
        email=row.get("email"),
        is_active=bool(row.get("is_active", True)),
    )
