"""Tests for admin moderation."""

import logging

import pytest

from studio_booking.domain.auth import AuthContext
from studio_booking.domain.content import (
    FLAGGED,
    PUBLISHED,
    RESTORED,
    ContentKind,
    ModerationAction,
)
from studio_booking.errors import (
    ContentUnavailableError,
    ForbiddenError,
    InvalidActionError,
    NotFoundError,
)
from studio_booking.services.audit import AuditService
from studio_booking.services.content import ContentService
from studio_booking.services.moderation import ModerationService
from tests.conftest import (
    LANDSCAPE_ID,
    PHOTOGRAPHER_ID,
    InMemoryAuditRepository,
    InMemoryContentRepository,
)


def _photo(repository: InMemoryContentRepository, state=PUBLISHED):  # type: ignore[no-untyped-def]
    return repository.create_content(
        ContentKind.PHOTO,
        PHOTOGRAPHER_ID,
        {
            "title": "Dunes",
            "image_url": "https://img/1.jpg",
            "category_id": LANDSCAPE_ID,
        },
        state,
    )


def test_flag_hides_and_marks_for_review(
    moderation_service: ModerationService,
    content_repository: InMemoryContentRepository,
    audit_repository: InMemoryAuditRepository,
    admin_auth: AuthContext,
) -> None:
    photo = _photo(content_repository)

    result = moderation_service.moderate(admin_auth, "photo", photo.id, "flag")

    assert result.content is not None
    assert result.content.moderation == FLAGGED
    assert result.message == "photo has been flagged successfully"
    assert audit_repository.events[-1]["action"] == "MODERATE_PHOTO"


def test_flag_then_restore_round_trip(
    moderation_service: ModerationService,
    content_repository: InMemoryContentRepository,
    admin_auth: AuthContext,
) -> None:
    photo = _photo(content_repository, RESTORED)

    moderation_service.moderate(admin_auth, "photo", photo.id, "flag")
    result = moderation_service.moderate(admin_auth, "photo", photo.id, "restore")

    assert result.content is not None
    assert result.content.moderation == photo.moderation


def test_restore_marks_new_content_as_moderated(
    moderation_service: ModerationService,
    content_repository: InMemoryContentRepository,
    admin_auth: AuthContext,
) -> None:
    photo = _photo(content_repository)

    moderation_service.moderate(admin_auth, "photo", photo.id, "flag")
    result = moderation_service.moderate(admin_auth, "photo", photo.id, "restore")

    assert result.content is not None
    assert result.content.moderation == RESTORED


def test_flag_twice_is_stable(
    moderation_service: ModerationService,
    content_repository: InMemoryContentRepository,
    admin_auth: AuthContext,
) -> None:
    photo = _photo(content_repository)

    first = moderation_service.moderate(admin_auth, "photo", photo.id, "flag")
    second = moderation_service.moderate(admin_auth, "photo", photo.id, "flag")

    assert first.content is not None
    assert second.content is not None
    assert first.content.moderation == second.content.moderation == FLAGGED


def test_flagged_review_is_hidden_and_pending(
    moderation_service: ModerationService,
    content_repository: InMemoryContentRepository,
    admin_auth: AuthContext,
) -> None:
    review = content_repository.create_content(
        ContentKind.REVIEW, 1, {"photo_id": 1, "rating": 4, "comment": "ok"}, PUBLISHED
    )

    result = moderation_service.moderate(admin_auth, "review", review.id, "flag")

    assert result.content is not None
    assert not result.content.moderation.is_visible
    assert result.content.moderation.needs_review


def test_delete_removes_content(
    moderation_service: ModerationService,
    content_repository: InMemoryContentRepository,
    admin_auth: AuthContext,
) -> None:
    photo = _photo(content_repository)

    result = moderation_service.moderate(admin_auth, "photo", photo.id, "delete")

    assert result.action == ModerationAction.DELETE
    assert result.content is None
    assert content_repository.get_content(ContentKind.PHOTO, photo.id) is None


@pytest.mark.parametrize(
    ("kind", "action"),
    [("photo", "hide"), ("video", "flag"), ("PHOTO", "flag"), ("photo", "")],
)
def test_invalid_command_rejected_before_store_is_touched(
    moderation_service: ModerationService,
    content_repository: InMemoryContentRepository,
    admin_auth: AuthContext,
    kind: str,
    action: str,
) -> None:
    photo = _photo(content_repository)

    with pytest.raises(InvalidActionError):
        moderation_service.moderate(admin_auth, kind, photo.id, action)
    assert content_repository.moderation_writes == 0
    assert content_repository.get_content(ContentKind.PHOTO, photo.id) == photo


def test_invalid_action_reported_even_for_missing_record(
    moderation_service: ModerationService, admin_auth: AuthContext
) -> None:
    with pytest.raises(InvalidActionError):
        moderation_service.moderate(admin_auth, "photo", 404, "hide")


def test_moderation_requires_admin(
    moderation_service: ModerationService,
    content_repository: InMemoryContentRepository,
    photographer_auth: AuthContext,
) -> None:
    photo = _photo(content_repository)

    with pytest.raises(ForbiddenError):
        moderation_service.moderate(photographer_auth, "photo", photo.id, "flag")
    assert content_repository.moderation_writes == 0


def test_moderate_missing_content(
    moderation_service: ModerationService, admin_auth: AuthContext
) -> None:
    with pytest.raises(NotFoundError):
        moderation_service.moderate(admin_auth, "review", 404, "restore")


def test_flagged_photo_is_unavailable_to_other_clients(
    moderation_service: ModerationService,
    content_service: ContentService,
    content_repository: InMemoryContentRepository,
    admin_auth: AuthContext,
    client_auth: AuthContext,
) -> None:
    photo = _photo(content_repository)

    moderation_service.moderate(admin_auth, "photo", photo.id, "flag")

    with pytest.raises(ContentUnavailableError, match="unavailable"):
        content_service.get_content(client_auth, ContentKind.PHOTO, photo.id)
    with pytest.raises(ContentUnavailableError):
        content_service.get_content(None, ContentKind.PHOTO, photo.id)
    assert content_service.list_photos(client_auth) == []


class _BrokenAuditRepository(InMemoryAuditRepository):
    def create_event(self, **_kwargs) -> None:  # type: ignore[no-untyped-def]
        raise RuntimeError("activity log unavailable")


def test_failed_activity_log_does_not_undo_moderation(
    content_repository: InMemoryContentRepository,
    admin_auth: AuthContext,
    caplog: pytest.LogCaptureFixture,
) -> None:
    service = ModerationService(
        repository=content_repository,
        audit_service=AuditService(_BrokenAuditRepository()),
    )
    photo = _photo(content_repository)
    audit_logger = logging.getLogger("studio_booking.services.audit")
    audit_logger.addHandler(caplog.handler)
    try:
        result = service.moderate(admin_auth, "photo", photo.id, "flag")
    finally:
        audit_logger.removeHandler(caplog.handler)

    assert result.content is not None
    assert result.content.moderation == FLAGGED
    assert "Failed to record MODERATE_PHOTO" in caplog.text
