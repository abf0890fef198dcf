"""Owner-side handling of photos and reviews.

Nothing here writes the moderation fields: uploads start published and
edits are limited to each kind's content fields. Flag and restore live in
the moderation engine.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from studio_booking.domain.auth import AuthContext, Role
from studio_booking.domain.content import (
    EDITABLE_CONTENT_FIELDS,
    PUBLISHED,
    ContentKind,
    ContentRecord,
    ModerationState,
)
from studio_booking.errors import (
    ContentUnavailableError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    from studio_booking.services.categories import CategoryRepository

_logger = logging.getLogger(__name__)

_PHOTO_REQUIRED = ("title", "image_url", "category_id")


class ContentRepository(Protocol):
    """Persistence interface for photos and reviews."""

    def create_content(
        self,
        kind: ContentKind,
        owner_id: int,
        attributes: dict[str, object],
        moderation: ModerationState,
    ) -> ContentRecord:
        """Create a content row and return it."""

    def get_content(self, kind: ContentKind, content_id: int) -> ContentRecord | None:
        """Return a content row by id, if present."""

    def list_content(
        self,
        kind: ContentKind,
        photo_id: int | None = None,
        visible_only: bool = False,
        category_id: int | None = None,
    ) -> list[ContentRecord]:
        """Return content rows filtered by photo, category or visibility."""

    def update_content(
        self, kind: ContentKind, content_id: int, changes: dict[str, object]
    ) -> ContentRecord | None:
        """Update content fields and return the updated row."""

    def set_moderation(
        self, kind: ContentKind, content_id: int, state: ModerationState
    ) -> ContentRecord | None:
        """Write all four moderation fields in a single update."""

    def delete_content(self, kind: ContentKind, content_id: int) -> bool:
        """Delete a content row; return False when nothing was deleted."""


@dataclass
class ContentService:
    """Create, read, edit and delete showcase content."""

    repository: ContentRepository
    category_repository: CategoryRepository

    def create_photo(
        self, auth: AuthContext, payload: Mapping[str, object]
    ) -> ContentRecord:
        """Publish a photo owned by the uploader."""
        if auth.role not in (Role.PHOTOGRAPHER, Role.ADMIN):
            raise ForbiddenError("Only photographers can upload photos")
        missing = [name for name in _PHOTO_REQUIRED if not payload.get(name)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        self._ensure_category(payload["category_id"])
        attributes = {
            "title": payload["title"],
            "description": payload.get("description"),
            "image_url": payload["image_url"],
            "category_id": payload["category_id"],
        }
        photo = self.repository.create_content(
            ContentKind.PHOTO, auth.subject_id, attributes, PUBLISHED
        )
        _logger.info("Photo %s uploaded by %s", photo.id, auth.subject_id)
        return photo

    def create_review(
        self, auth: AuthContext, photo_id: int, payload: Mapping[str, object]
    ) -> ContentRecord:
        """Post a review on a visible photo."""
        self.get_content(auth, ContentKind.PHOTO, photo_id)
        rating = payload.get("rating")
        if not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError("Rating must be an integer between 1 and 5")
        comment = payload.get("comment")
        if not comment:
            raise ValidationError("Missing required fields: comment")
        return self.repository.create_content(
            ContentKind.REVIEW,
            auth.subject_id,
            {"photo_id": photo_id, "rating": rating, "comment": comment},
            PUBLISHED,
        )

    def get_content(
        self, viewer: AuthContext | None, kind: ContentKind, content_id: int
    ) -> ContentRecord:
        """Return content, or report it unavailable when moderation hides it."""
        content = self._load(kind, content_id)
        if not content.is_visible and not _can_see_hidden(viewer, content):
            raise ContentUnavailableError(kind, content_id)
        return content

    def list_photos(
        self, viewer: AuthContext | None, category_id: int | None = None
    ) -> list[ContentRecord]:
        """Return the photos the viewer can see, optionally from one category."""
        if category_id is not None:
            self._ensure_category(category_id)
        visible_only = viewer is None or not viewer.is_admin
        return self.repository.list_content(
            ContentKind.PHOTO, visible_only=visible_only, category_id=category_id
        )

    def list_reviews(
        self, viewer: AuthContext | None, photo_id: int
    ) -> list[ContentRecord]:
        """Return the reviews of a photo the viewer can see."""
        self.get_content(viewer, ContentKind.PHOTO, photo_id)
        visible_only = viewer is None or not viewer.is_admin
        return self.repository.list_content(
            ContentKind.REVIEW, photo_id=photo_id, visible_only=visible_only
        )

    def update_content(
        self,
        auth: AuthContext,
        kind: ContentKind,
        content_id: int,
        patch: Mapping[str, object],
    ) -> ContentRecord:
        """Apply an owner or admin edit of content fields; other keys are dropped."""
        content = self._load_owned(auth, kind, content_id, "update")
        editable = EDITABLE_CONTENT_FIELDS[kind]
        changes = {key: value for key, value in patch.items() if key in editable}
        dropped = set(patch) - set(changes)
        if dropped:
            _logger.info("Dropped fields %s from %s %s edit", sorted(dropped), kind, content_id)
        if "rating" in changes:
            rating = changes["rating"]
            if not isinstance(rating, int) or not 1 <= rating <= 5:
                raise ValidationError("Rating must be an integer between 1 and 5")
        if "category_id" in changes:
            self._ensure_category(changes["category_id"])
        if not changes:
            return content
        updated = self.repository.update_content(kind, content_id, changes)
        if updated is None:
            raise NotFoundError(kind.capitalize(), content_id)
        return updated

    def delete_content(self, auth: AuthContext, kind: ContentKind, content_id: int) -> None:
        """Delete content owned by the caller, or any content for an admin."""
        self._load_owned(auth, kind, content_id, "delete")
        if not self.repository.delete_content(kind, content_id):
            raise NotFoundError(kind.capitalize(), content_id)
        _logger.info("%s %s deleted by %s", kind.capitalize(), content_id, auth.subject_id)

    def _load_owned(
        self, auth: AuthContext, kind: ContentKind, content_id: int, verb: str
    ) -> ContentRecord:
        content = self._load(kind, content_id)
        if content.owner_id != auth.subject_id and not auth.is_admin:
            raise ForbiddenError(f"Not authorized to {verb} this {kind}")
        return content

    def _ensure_category(self, category_id: object) -> None:
        if not isinstance(category_id, int) or (
            self.category_repository.get_category(category_id) is None
        ):
            raise NotFoundError("Category", category_id)

    def _load(self, kind: ContentKind, content_id: int) -> ContentRecord:
        content = self.repository.get_content(kind, content_id)
        if content is None:
            raise NotFoundError(kind.capitalize(), content_id)
        return content


def _can_see_hidden(viewer: AuthContext | None, content: ContentRecord) -> bool:
    if viewer is None:
        return False
    return viewer.is_admin or viewer.subject_id == content.owner_id
