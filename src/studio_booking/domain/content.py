"""Domain models for moderatable showcase content."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class ContentKind(StrEnum):
    """Kinds of content an admin can moderate."""

    PHOTO = "photo"
    REVIEW = "review"


class ModerationAction(StrEnum):
    """The closed set of moderation actions."""

    DELETE = "delete"
    FLAG = "flag"
    RESTORE = "restore"


class ContentStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


CONTENT_STATUSES: dict[ContentKind, frozenset[str]] = {
    ContentKind.PHOTO: frozenset(
        {ContentStatus.PENDING, ContentStatus.APPROVED, ContentStatus.REJECTED}
    ),
    ContentKind.REVIEW: frozenset({ContentStatus.PENDING, ContentStatus.APPROVED}),
}

# Fields an owner (or admin) may edit outside of moderation.
EDITABLE_CONTENT_FIELDS: dict[ContentKind, frozenset[str]] = {
    ContentKind.PHOTO: frozenset({"title", "description", "category_id"}),
    ContentKind.REVIEW: frozenset({"rating", "comment"}),
}

MODERATION_FIELDS = frozenset({"is_visible", "needs_review", "status", "is_moderated"})


@dataclass(frozen=True)
class ModerationState:
    """The four moderation fields, always written together."""

    is_visible: bool
    needs_review: bool
    status: str
    is_moderated: bool

    def as_changes(self) -> dict[str, object]:
        return {
            "is_visible": self.is_visible,
            "needs_review": self.needs_review,
            "status": self.status,
            "is_moderated": self.is_moderated,
        }


FLAGGED = ModerationState(
    is_visible=False,
    needs_review=True,
    status=ContentStatus.PENDING,
    is_moderated=False,
)
RESTORED = ModerationState(
    is_visible=True,
    needs_review=False,
    status=ContentStatus.APPROVED,
    is_moderated=True,
)
# New uploads start visible and approved but have not been looked at yet.
PUBLISHED = ModerationState(
    is_visible=True,
    needs_review=False,
    status=ContentStatus.APPROVED,
    is_moderated=False,
)


@dataclass(frozen=True)
class ContentRecord:
    """A photo or review together with its moderation state."""

    id: int
    kind: ContentKind
    owner_id: int
    moderation: ModerationState
    attributes: dict[str, object] = field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def is_visible(self) -> bool:
        return self.moderation.is_visible
