"""Admin service for reporting."""

from collections import Counter
from dataclasses import dataclass

from studio_booking.domain.auth import AuthContext, Role
from studio_booking.domain.bookings import BookingStatus
from studio_booking.domain.content import ContentKind
from studio_booking.errors import ForbiddenError
from studio_booking.services.audit import AuditService
from studio_booking.services.bookings import BookingRepository
from studio_booking.services.content import ContentRepository
from studio_booking.services.users import UserRepository


@dataclass
class AdminService:
    """Service for admin dashboards."""

    user_repository: UserRepository
    booking_repository: BookingRepository
    content_repository: ContentRepository
    audit_service: AuditService

    def dashboard(self, auth: AuthContext) -> dict[str, object]:
        """Return users by role, bookings by status and content moderation counts."""
        _require_admin(auth)
        roles = Counter(user.role for user in self.user_repository.list_users())
        statuses = Counter(
            booking.status for booking in self.booking_repository.list_bookings()
        )
        content: dict[str, dict[str, int]] = {}
        for kind in ContentKind:
            records = self.content_repository.list_content(kind)
            content[str(kind)] = {
                "total": len(records),
                "hidden": sum(1 for record in records if not record.is_visible),
                "needs_review": sum(
                    1 for record in records if record.moderation.needs_review
                ),
            }
        return {
            "users": {
                "total": sum(roles.values()),
                **{str(role): roles.get(role, 0) for role in Role},
            },
            "bookings": {
                "total": sum(statuses.values()),
                **{str(status): statuses.get(status, 0) for status in BookingStatus},
            },
            "content": content,
        }

    def list_activity(self, auth: AuthContext, limit: int = 50) -> list[dict[str, object]]:
        """Return recent admin activity."""
        _require_admin(auth)
        return self.audit_service.list_recent(limit)


def _require_admin(auth: AuthContext) -> None:
    if not auth.is_admin:
        raise ForbiddenError("Admin access required")
