"""Admin moderation of photos and reviews."""

import logging
from dataclasses import dataclass

from studio_booking.domain.auth import AuthContext
from studio_booking.domain.content import (
    FLAGGED,
    MODERATION_FIELDS,
    RESTORED,
    ContentKind,
    ContentRecord,
    ModerationAction,
)
from studio_booking.domain.serialization import content_to_dict
from studio_booking.errors import (
    ForbiddenError,
    InvalidActionError,
    InvalidTransitionError,
    NotFoundError,
)
from studio_booking.services.audit import AuditService
from studio_booking.services.authorizer import decide
from studio_booking.services.content import ContentRepository

_logger = logging.getLogger(__name__)

_TARGET_STATES = {
    ModerationAction.FLAG: FLAGGED,
    ModerationAction.RESTORE: RESTORED,
}
_PAST_TENSE = {
    ModerationAction.DELETE: "deleted",
    ModerationAction.FLAG: "flagged",
    ModerationAction.RESTORE: "restored",
}


@dataclass(frozen=True)
class ModerationResult:
    """Outcome of a moderation action; ``content`` is None after a delete."""

    kind: ContentKind
    content_id: int
    action: ModerationAction
    content: ContentRecord | None
    message: str


@dataclass
class ModerationService:
    """Applies delete, flag and restore to moderatable content."""

    repository: ContentRepository
    audit_service: AuditService

    def moderate(
        self, auth: AuthContext, content_kind: str, content_id: int, action: str
    ) -> ModerationResult:
        """Run one moderation action as an atomic write."""
        kind, moderation_action = _parse_command(content_kind, action)
        if not auth.is_admin:
            raise ForbiddenError("Admin access required")

        content = self.repository.get_content(kind, content_id)
        if content is None:
            raise NotFoundError(kind.capitalize(), content_id)

        if moderation_action == ModerationAction.DELETE:
            if not self.repository.delete_content(kind, content_id):
                raise NotFoundError(kind.capitalize(), content_id)
            updated = None
        else:
            target = _TARGET_STATES[moderation_action]
            decision = decide(
                auth.role,
                kind,
                content.moderation.status,
                is_owner=False,
                is_assignee=False,
                requested_fields=MODERATION_FIELDS,
            )
            if (
                target.status != content.moderation.status
                and target.status not in decision.allowed_status_targets
            ):
                raise InvalidTransitionError(
                    content.moderation.status, target.status, auth.role
                )
            updated = self.repository.set_moderation(kind, content_id, target)
            if updated is None:
                raise NotFoundError(kind.capitalize(), content_id)

        past = _PAST_TENSE[moderation_action]
        self.audit_service.record_event(
            actor_id=auth.subject_id,
            action=f"MODERATE_{kind.upper()}",
            entity_type=kind,
            entity_id=content_id,
            details=f"{past} {kind} {content_id}",
            before=content_to_dict(content),
            after=content_to_dict(updated) if updated else None,
        )
        _logger.info("%s %s %s by admin %s", kind.capitalize(), content_id, past, auth.subject_id)
        return ModerationResult(
            kind=kind,
            content_id=content_id,
            action=moderation_action,
            content=updated,
            message=f"{kind} has been {past} successfully",
        )


def _parse_command(
    content_kind: str, action: str
) -> tuple[ContentKind, ModerationAction]:
    if action not in set(ModerationAction):
        raise InvalidActionError("Action must be either delete, flag, or restore")
    if content_kind not in set(ContentKind):
        raise InvalidActionError("Content type must be either review or photo")
    return ContentKind(content_kind), ModerationAction(action)
