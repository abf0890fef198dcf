"""Activity log for privileged actions."""

import logging
from dataclasses import dataclass
from typing import Protocol

_logger = logging.getLogger(__name__)


class AuditRepository(Protocol):
    """Persistence interface for activity log entries."""

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

    def list_events(self, limit: int) -> list[dict[str, object]]:
        """Return the most recent activity log rows."""


@dataclass
class AuditService:
    """Service for recording admin activity."""

    repository: AuditRepository

    def record_event(  # noqa: PLR0913
        self,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: int,
        details: str,
        before: dict[str, object] | None = None,
        after: dict[str, object] | None = None,
    ) -> None:
        """Persist an activity log entry.

        Called after the audited change is committed, so a failed insert is
        logged and does not fail the request.
        """
        try:
            self.repository.create_event(
                actor_id=actor_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                details=details,
                before=before,
                after=after,
            )
        except Exception:
            _logger.exception(
                "Failed to record %s on %s %s", action, entity_type, entity_id
            )

    def list_recent(self, limit: int = 50) -> list[dict[str, object]]:
        """Return recent activity log entries."""
        return self.repository.list_events(limit)
