"""Admin-managed photo categories."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from studio_booking.domain.auth import AuthContext
from studio_booking.domain.categories import CategoryRecord, slugify
from studio_booking.domain.content import ContentKind
from studio_booking.domain.serialization import category_to_dict
from studio_booking.errors import ForbiddenError, NotFoundError, ValidationError
from studio_booking.services.audit import AuditService
from studio_booking.services.content import ContentRepository

_logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = ("name", "description")


class CategoryRepository(Protocol):
    """Persistence interface for categories."""

    def create_category(
        self, name: str, slug: str, description: str | None
    ) -> CategoryRecord:
        """Create a category row and return it."""

    def get_category(self, category_id: int) -> CategoryRecord | None:
        """Return a category by id, if present."""

    def get_by_name(self, name: str) -> CategoryRecord | None:
        """Return a category by exact name, if present."""

    def list_categories(self) -> list[CategoryRecord]:
        """Return all categories ordered by name."""

    def update_category(
        self, category_id: int, changes: dict[str, object]
    ) -> CategoryRecord | None:
        """Update a category and return the updated row."""

    def delete_category(self, category_id: int) -> bool:
        """Delete a category; return False when nothing was deleted."""


@dataclass(frozen=True)
class CategoryResult:
    """Outcome of a create; ``created`` is False when the name already existed."""

    category: CategoryRecord
    created: bool = True


@dataclass
class CategoryService:
    """Lists categories for everyone and manages them for admins."""

    repository: CategoryRepository
    content_repository: ContentRepository
    audit_service: AuditService

    def list_categories(self) -> list[CategoryRecord]:
        return self.repository.list_categories()

    def get_category(self, category_id: int) -> CategoryRecord:
        category = self.repository.get_category(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def create_category(
        self, auth: AuthContext, name: str, description: str | None = None
    ) -> CategoryResult:
        """Create a category, or return the existing one with the same name."""
        _require_admin(auth)
        name = name.strip()
        if not name:
            raise ValidationError("Missing required fields: name")
        existing = self.repository.get_by_name(name)
        if existing is not None:
            return CategoryResult(category=existing, created=False)
        category = self.repository.create_category(name, slugify(name), description)
        self.audit_service.record_event(
            actor_id=auth.subject_id,
            action="CREATE_CATEGORY",
            entity_type="category",
            entity_id=category.id,
            details=f"Created category {name}",
            after=category_to_dict(category),
        )
        _logger.info("Category %s created by admin %s", category.id, auth.subject_id)
        return CategoryResult(category=category)

    def update_category(
        self, auth: AuthContext, category_id: int, patch: Mapping[str, object]
    ) -> CategoryRecord:
        """Rename or describe a category; a new name also renews the slug."""
        _require_admin(auth)
        category = self.get_category(category_id)
        changes = {key: patch[key] for key in _EDITABLE_FIELDS if key in patch}
        if "name" in changes:
            name = str(changes["name"] or "").strip()
            if not name:
                raise ValidationError("Category name cannot be empty")
            clash = self.repository.get_by_name(name)
            if clash is not None and clash.id != category_id:
                raise ValidationError("Category name already exists")
            changes["name"] = name
            changes["slug"] = slugify(name)
        if not changes:
            return category
        updated = self.repository.update_category(category_id, changes)
        if updated is None:
            raise NotFoundError("Category", category_id)
        self.audit_service.record_event(
            actor_id=auth.subject_id,
            action="UPDATE_CATEGORY",
            entity_type="category",
            entity_id=category_id,
            details=f"Updated category {updated.name}",
            before=category_to_dict(category),
            after=category_to_dict(updated),
        )
        return updated

    def delete_category(self, auth: AuthContext, category_id: int) -> None:
        """Delete a category that no photo is filed under."""
        _require_admin(auth)
        category = self.get_category(category_id)
        if self.content_repository.list_content(
            ContentKind.PHOTO, category_id=category_id
        ):
            raise ValidationError("Category still has photos")
        if not self.repository.delete_category(category_id):
            raise NotFoundError("Category", category_id)
        self.audit_service.record_event(
            actor_id=auth.subject_id,
            action="DELETE_CATEGORY",
            entity_type="category",
            entity_id=category_id,
            details=f"Deleted category {category.name}",
            before=category_to_dict(category),
        )
        _logger.info("Category %s deleted by admin %s", category_id, auth.subject_id)


def _require_admin(auth: AuthContext) -> None:
    if not auth.is_admin:
        raise ForbiddenError("Admin access required")
