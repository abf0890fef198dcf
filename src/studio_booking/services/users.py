"""User lookups and role management."""

import logging
from dataclasses import dataclass
from typing import Protocol

from studio_booking.domain.auth import AuthContext, Role
from studio_booking.domain.serialization import user_to_dict
from studio_booking.domain.users import UserRecord
from studio_booking.errors import ForbiddenError, NotFoundError, ValidationError
from studio_booking.services.audit import AuditService

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return a user by id, if present."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return a user by username, if present."""

    def list_users(self) -> list[UserRecord]:
        """Return all users."""

    def update_role(self, user_id: int, role: str) -> UserRecord | None:
        """Set a user's role and return the updated record."""


@dataclass
class UserService:
    """Application service for user lookups and admin role changes."""

    repository: UserRepository
    audit_service: AuditService

    def get_photographer(self, user_id: int) -> UserRecord:
        """Return the user if they exist and hold the photographer role."""
        user = self.repository.get_user(user_id)
        if user is None or user.role != Role.PHOTOGRAPHER:
            raise NotFoundError("Photographer", user_id)
        return user

    def list_users(self, auth: AuthContext) -> list[UserRecord]:
        """Return every user; admin only."""
        _require_admin(auth)
        return self.repository.list_users()

    def update_role(self, auth: AuthContext, username: str, new_role: str) -> UserRecord:
        """Change a user's role and log the change."""
        _require_admin(auth)
        if new_role not in set(Role):
            raise ValidationError("Role must be one of: client, photographer, admin")
        user = self.repository.get_by_username(username)
        if user is None:
            raise NotFoundError("User", username)
        updated = self.repository.update_role(user.id, new_role)
        if updated is None:
            raise NotFoundError("User", username)
        self.audit_service.record_event(
            actor_id=auth.subject_id,
            action="UPDATE_USER_ROLE",
            entity_type="user",
            entity_id=user.id,
            details=f"Changed user {username} role to {new_role}",
            before=user_to_dict(user),
            after=user_to_dict(updated),
        )
        _logger.info("User %s role changed %s -> %s", user.id, user.role, new_role)
        return updated


def _require_admin(auth: AuthContext) -> None:
    if not auth.is_admin:
        raise ForbiddenError("Admin access required")
