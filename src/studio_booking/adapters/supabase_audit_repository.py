"""Supabase repository for the admin activity log."""

from dataclasses import dataclass

from supabase import Client

from studio_booking.services.audit import AuditRepository


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed activity log repository."""

    client: Client

    def create_event(  # noqa: PLR0913
        self,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: int,
        details: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Create an activity log row."""
        self.client.table("activity_logs").insert(
            {
                "admin_id": actor_id,
                "action": action,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "details": details,
                "before_json": before,
                "after_json": after,
            }
        ).execute()

    def list_events(self, limit: int) -> list[dict[str, object]]:
        """Return the most recent activity log rows."""
        response = (
            self.client.table("activity_logs")
            .select("id, admin_id, action, entity_type, entity_id, details, created_at")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []
