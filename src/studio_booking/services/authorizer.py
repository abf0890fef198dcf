"""Declarative role policy for booking and content mutations.

``decide`` is the single place that answers "which fields may this caller
write and which statuses may they move the record to". It is pure: no I/O,
no logging, and it never touches the caller's patch.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from studio_booking.domain.auth import Role
from studio_booking.domain.bookings import BOOKING_FIELDS, BookingStatus
from studio_booking.domain.content import (
    CONTENT_STATUSES,
    MODERATION_FIELDS,
    ContentKind,
)

BOOKING = "booking"

# Pending product sign-off: the assignee may cancel. Set to False to restrict
# cancellation to the client and admins.
ASSIGNEE_MAY_CANCEL = True

_OWNER = "owner"
_ASSIGNEE = "assignee"
_ANY = "any"


@dataclass(frozen=True)
class RolePolicy:
    """What one role may do to a booking it is related to."""

    fields: frozenset[str]
    transitions: Mapping[str, frozenset[str]]
    relationship: str
    # A disallowed target is a hard failure for strict roles. Lenient roles
    # only have it dropped when the patch also carries fields they may write.
    strict_status: bool


@dataclass(frozen=True)
class Decision:
    """Outcome of an authorization check."""

    allowed_fields: frozenset[str] = field(default_factory=frozenset)
    denied_fields: frozenset[str] = field(default_factory=frozenset)
    allowed_status_targets: frozenset[str] = field(default_factory=frozenset)
    strict_status: bool = False

    @property
    def grants_nothing(self) -> bool:
        return not self.allowed_fields and not self.allowed_status_targets


def _photographer_transitions() -> dict[str, frozenset[str]]:
    transitions = {
        BookingStatus.PENDING: {BookingStatus.CONFIRMED},
        BookingStatus.CONFIRMED: {BookingStatus.COMPLETED},
    }
    if ASSIGNEE_MAY_CANCEL:
        for targets in transitions.values():
            targets.add(BookingStatus.CANCELLED)
    return {source: frozenset(targets) for source, targets in transitions.items()}


def _admin_transitions() -> dict[str, frozenset[str]]:
    transitions = {}
    for source in BookingStatus:
        targets = set(BookingStatus) - {source}
        # No override reaches completed without going through confirmed.
        if source != BookingStatus.CONFIRMED:
            targets.discard(BookingStatus.COMPLETED)
        transitions[source] = frozenset(targets)
    return transitions


BOOKING_POLICIES: dict[str, RolePolicy] = {
    Role.CLIENT: RolePolicy(
        fields=frozenset({"date", "time", "location", "notes"}),
        transitions={
            BookingStatus.PENDING: frozenset({BookingStatus.CANCELLED}),
            BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
        },
        relationship=_OWNER,
        strict_status=False,
    ),
    Role.PHOTOGRAPHER: RolePolicy(
        fields=frozenset({"notes"}),
        transitions=_photographer_transitions(),
        relationship=_ASSIGNEE,
        strict_status=True,
    ),
    Role.ADMIN: RolePolicy(
        fields=BOOKING_FIELDS - {"status"},
        transitions=_admin_transitions(),
        relationship=_ANY,
        strict_status=True,
    ),
}


def decide(  # noqa: PLR0913
    role: str,
    record_kind: str,
    current_status: str,
    is_owner: bool,
    is_assignee: bool,
    requested_fields: Iterable[str],
) -> Decision:
    """Return the fields and status targets ``role`` may apply to a record.

    ``status`` is never part of ``allowed_fields``; status changes are
    governed by ``allowed_status_targets`` alone. Content records only expose
    their moderation fields here, and only to admins; owner edits of content
    fields go through a separate ownership check.
    """
    requested = frozenset(requested_fields) - {"status"}
    if record_kind == BOOKING:
        return _decide_booking(role, current_status, is_owner, is_assignee, requested)
    if record_kind in CONTENT_STATUSES:
        return _decide_content(role, ContentKind(record_kind), current_status, requested)
    return _deny(requested)


def filter_patch(patch: Mapping[str, object], decision: Decision) -> dict[str, object]:
    """Return a new patch holding only the fields the decision allows."""
    return {
        key: value for key, value in patch.items() if key in decision.allowed_fields
    }


def _decide_booking(
    role: str,
    current_status: str,
    is_owner: bool,
    is_assignee: bool,
    requested: frozenset[str],
) -> Decision:
    policy = BOOKING_POLICIES.get(role)
    if policy is None:
        return _deny(requested)
    if policy.relationship == _OWNER and not is_owner:
        return _deny(requested)
    if policy.relationship == _ASSIGNEE and not is_assignee:
        return _deny(requested)
    allowed = requested & policy.fields
    return Decision(
        allowed_fields=allowed,
        denied_fields=requested - allowed,
        allowed_status_targets=policy.transitions.get(current_status, frozenset()),
        strict_status=policy.strict_status,
    )


def _decide_content(
    role: str, kind: ContentKind, current_status: str, requested: frozenset[str]
) -> Decision:
    if role != Role.ADMIN:
        return _deny(requested)
    moderation_fields = MODERATION_FIELDS - {"status"}
    allowed = requested & moderation_fields
    return Decision(
        allowed_fields=allowed,
        denied_fields=requested - allowed,
        allowed_status_targets=CONTENT_STATUSES[kind] - {current_status},
        strict_status=True,
    )


def _deny(requested: frozenset[str]) -> Decision:
    return Decision(denied_fields=requested)
