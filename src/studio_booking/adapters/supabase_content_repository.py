"""Supabase-backed repository for photos and reviews."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from supabase import Client

from studio_booking.domain.content import (
    ContentKind,
    ContentRecord,
    ContentStatus,
    ModerationState,
)
from studio_booking.services.content import ContentRepository

_TABLES = {ContentKind.PHOTO: "photos", ContentKind.REVIEW: "reviews"}
_OWNER_COLUMNS = {ContentKind.PHOTO: "photographer_id", ContentKind.REVIEW: "user_id"}
_ATTRIBUTE_COLUMNS = {
    ContentKind.PHOTO: ("title", "description", "image_url", "category_id"),
    ContentKind.REVIEW: ("photo_id", "rating", "comment"),
}
_MODERATION_COLUMNS = "is_visible, needs_review, status, is_moderated, created_at"


@dataclass
class SupabaseContentRepository(ContentRepository):
    """Supabase implementation for moderatable content."""

    client: Client

    def create_content(
        self,
        kind: ContentKind,
        owner_id: int,
        attributes: dict[str, object],
        moderation: ModerationState,
    ) -> ContentRecord:
        """Create a content row and return it."""
        response = (
            self.client.table(_TABLES[kind])
            .insert(
                {
                    **attributes,
                    _OWNER_COLUMNS[kind]: owner_id,
                    **_prepare(moderation.as_changes()),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to create {kind}")
        return _parse_row(kind, response.data[0])

    def get_content(self, kind: ContentKind, content_id: int) -> ContentRecord | None:
        """Return a content row by id, if present."""
        response = (
            self.client.table(_TABLES[kind])
            .select(_select_columns(kind))
            .eq("id", content_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(kind, response.data[0])

    def list_content(
        self,
        kind: ContentKind,
        photo_id: int | None = None,
        visible_only: bool = False,
        category_id: int | None = None,
    ) -> list[ContentRecord]:
        """Return content rows, newest first."""
        query = self.client.table(_TABLES[kind]).select(_select_columns(kind))
        if photo_id is not None:
            query = query.eq("photo_id", photo_id)
        if category_id is not None:
            query = query.eq("category_id", category_id)
        if visible_only:
            query = query.eq("is_visible", True)
        response = query.order("created_at", desc=True).execute()
        return [_parse_row(kind, row) for row in response.data or []]

    def update_content(
        self, kind: ContentKind, content_id: int, changes: dict[str, object]
    ) -> ContentRecord | None:
        """Update content fields and return the updated row."""
        response = (
            self.client.table(_TABLES[kind])
            .update(_prepare(changes))
            .eq("id", content_id)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(kind, response.data[0])

    def set_moderation(
        self, kind: ContentKind, content_id: int, state: ModerationState
    ) -> ContentRecord | None:
        """Write the four moderation fields in one update statement."""
        return self.update_content(kind, content_id, state.as_changes())

    def delete_content(self, kind: ContentKind, content_id: int) -> bool:
        """Delete a content row."""
        response = (
            self.client.table(_TABLES[kind]).delete().eq("id", content_id).execute()
        )
        return bool(response.data)


def _select_columns(kind: ContentKind) -> str:
    columns = ("id", _OWNER_COLUMNS[kind], *_ATTRIBUTE_COLUMNS[kind])
    return f"{', '.join(columns)}, {_MODERATION_COLUMNS}"


def _prepare(changes: dict[str, object]) -> dict[str, object]:
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in changes.items()
    }


def _parse_row(kind: ContentKind, row: dict[str, object]) -> ContentRecord:
    created_raw = row.get("created_at")
    return ContentRecord(
        id=int(row["id"]),
        kind=kind,
        owner_id=int(row[_OWNER_COLUMNS[kind]]),
        moderation=ModerationState(
            is_visible=bool(row.get("is_visible", True)),
            needs_review=bool(row.get("needs_review", False)),
            status=ContentStatus(row.get("status") or ContentStatus.APPROVED),
            is_moderated=bool(row.get("is_moderated", False)),
        ),
        attributes={
            column: row.get(column) for column in _ATTRIBUTE_COLUMNS[kind]
        },
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
