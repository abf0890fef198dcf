"""Booking lifecycle engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from studio_booking.domain.auth import AuthContext, Role
from studio_booking.domain.bookings import (
    BookingRecord,
    BookingStatus,
    CancelResult,
)
from studio_booking.errors import (
    AlreadyAssignedError,
    AlreadyTerminalError,
    ConcurrentUpdateError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from studio_booking.services.authorizer import BOOKING, Decision, decide, filter_patch

if TYPE_CHECKING:
    from studio_booking.services.assignment import AssignmentService
    from studio_booking.services.users import UserService

_logger = logging.getLogger(__name__)

_REQUIRED_ON_CREATE = ("date", "location", "package")
_CREATE_FIELDS = ("date", "time", "location", "package", "notes")


class BookingRepository(Protocol):
    """Persistence interface for bookings."""

    def create_booking(
        self,
        client_id: int,
        photographer_id: int | None,
        payload: dict[str, object],
    ) -> BookingRecord:
        """Create a pending booking and return it."""

    def get_booking(self, booking_id: int) -> BookingRecord | None:
        """Return a booking by id, if present."""

    def list_bookings(
        self, client_id: int | None = None, photographer_id: int | None = None
    ) -> list[BookingRecord]:
        """Return bookings, optionally filtered by client or photographer."""

    def update_booking(
        self,
        booking_id: int,
        changes: dict[str, object],
        expected_status: str | None = None,
    ) -> BookingRecord | None:
        """Apply changes in one write and return the updated booking.

        When ``expected_status`` is given the write only happens if the stored
        status still equals it; ``None`` is returned when no row matched.
        """

    def claim_booking(
        self,
        booking_id: int,
        photographer_id: int,
        changes: dict[str, object] | None = None,
    ) -> BookingRecord | None:
        """Assign and confirm a booking only if it is pending and unassigned.

        ``changes`` are written in the same statement as the claim.
        """


@dataclass
class BookingService:
    """Applies role-scoped patches to bookings through the authorizer."""

    repository: BookingRepository
    user_service: UserService
    assignment_service: AssignmentService
    max_attempts: int = 3

    def create_booking(self, client_id: int, payload: Mapping[str, object]) -> BookingRecord:
        """Create a pending booking owned by ``client_id``."""
        missing = [name for name in _REQUIRED_ON_CREATE if not payload.get(name)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        photographer_id = payload.get("photographer_id")
        if photographer_id is not None:
            if photographer_id == client_id:
                raise ValidationError("You cannot book yourself")
            self.user_service.get_photographer(int(photographer_id))

        fields = {name: payload.get(name) for name in _CREATE_FIELDS}
        booking = self.repository.create_booking(
            client_id=client_id,
            photographer_id=int(photographer_id) if photographer_id is not None else None,
            payload=fields,
        )
        _logger.info("Booking %s created by client %s", booking.id, client_id)
        return booking

    def get_booking(self, auth: AuthContext, booking_id: int) -> BookingRecord:
        """Return a booking visible to its client, its assignee, or an admin."""
        booking = self._load(booking_id)
        if not _is_related(auth, booking):
            raise ForbiddenError("Not authorized to view this booking")
        return booking

    def list_my_bookings(self, auth: AuthContext) -> list[BookingRecord]:
        return self.repository.list_bookings(client_id=auth.subject_id)

    def list_photographer_bookings(
        self, auth: AuthContext, photographer_id: int
    ) -> list[BookingRecord]:
        """Return the bookings assigned to a photographer."""
        if not auth.is_admin and auth.subject_id != photographer_id:
            raise ForbiddenError("Not authorized to view these bookings")
        return self.repository.list_bookings(photographer_id=photographer_id)

    def list_all_bookings(self, auth: AuthContext) -> list[BookingRecord]:
        if not auth.is_admin:
            raise ForbiddenError("Admin access required")
        return self.repository.list_bookings()

    def update_booking(
        self, auth: AuthContext, booking_id: int, patch: Mapping[str, object]
    ) -> BookingRecord:
        """Apply the authorized part of ``patch`` to a booking.

        Unauthorized fields are dropped. A status the caller's role may not
        reach is rejected, except for clients sending it alongside fields
        they may write, whose stray status is dropped like any other field.
        """
        if _is_accept_request(auth, patch):
            booking = self._load(booking_id)
            if booking.photographer_id is None:
                return self._accept(auth, booking, patch)
            if booking.photographer_id != auth.subject_id:
                raise AlreadyAssignedError()
        return self._apply(auth, booking_id, patch)

    def _accept(
        self, auth: AuthContext, booking: BookingRecord, patch: Mapping[str, object]
    ) -> BookingRecord:
        # The claim and the caller's other fields go out as one write.
        rest = {
            key: value
            for key, value in patch.items()
            if key not in ("photographer_id", "status")
        }
        decision = decide(
            auth.role,
            BOOKING,
            BookingStatus.CONFIRMED,
            is_owner=auth.subject_id == booking.client_id,
            is_assignee=True,
            requested_fields=rest.keys(),
        )
        if decision.denied_fields:
            _logger.info(
                "Dropped fields %s from accept of booking %s",
                sorted(decision.denied_fields),
                booking.id,
            )
        return self.assignment_service.accept(
            auth, booking.id, filter_patch(rest, decision)
        )

    def cancel_booking(self, auth: AuthContext, booking_id: int) -> CancelResult:
        """Cancel a booking; repeating the call on a cancelled booking is a no-op."""
        for _ in range(self.max_attempts):
            booking = self._load(booking_id)
            if not _is_related(auth, booking):
                raise ForbiddenError("Not authorized to cancel this booking")
            if booking.status == BookingStatus.CANCELLED:
                return CancelResult(booking=booking, already_cancelled=True)
            if booking.status == BookingStatus.COMPLETED and not auth.is_admin:
                raise AlreadyTerminalError("Cannot cancel a completed booking")

            decision = self._decide(auth, booking, ())
            if BookingStatus.CANCELLED not in decision.allowed_status_targets:
                _logger.warning(
                    "Rejected cancel of booking %s by %s %s",
                    booking_id,
                    auth.role,
                    auth.subject_id,
                )
                raise InvalidTransitionError(
                    booking.status, BookingStatus.CANCELLED, auth.role
                )

            updated = self.repository.update_booking(
                booking_id,
                {"status": BookingStatus.CANCELLED, "cancelled_by": auth.role},
                expected_status=booking.status,
            )
            if updated is not None:
                _logger.info("Booking %s cancelled by %s", booking_id, auth.role)
                return CancelResult(booking=updated)
            _logger.info("Booking %s changed during cancel, re-reading", booking_id)
        raise ConcurrentUpdateError()

    def _apply(
        self, auth: AuthContext, booking_id: int, patch: Mapping[str, object]
    ) -> BookingRecord:
        # Each attempt re-validates against the status it just read.
        for _ in range(self.max_attempts):
            booking = self._load(booking_id)
            if not _is_related(auth, booking):
                raise ForbiddenError("Not authorized to update this booking")

            decision = self._decide(auth, booking, patch.keys())
            changes = filter_patch(patch, decision)
            if decision.denied_fields:
                _logger.info(
                    "Dropped fields %s from %s update of booking %s",
                    sorted(decision.denied_fields),
                    auth.role,
                    booking_id,
                )
            assignee = changes.get("photographer_id")
            if assignee is not None:
                self.user_service.get_photographer(int(assignee))
            target = _resolve_status(auth, booking, decision, patch.get("status"))
            if target is not None:
                changes["status"] = target
                if target == BookingStatus.CANCELLED:
                    changes["cancelled_by"] = auth.role
            if not changes:
                return booking

            updated = self.repository.update_booking(
                booking_id, changes, expected_status=booking.status
            )
            if updated is not None:
                return updated
            _logger.info("Booking %s changed during update, re-reading", booking_id)
        raise ConcurrentUpdateError()

    def _decide(
        self, auth: AuthContext, booking: BookingRecord, fields: Iterable[str]
    ) -> Decision:
        return decide(
            auth.role,
            BOOKING,
            booking.status,
            is_owner=auth.subject_id == booking.client_id,
            is_assignee=auth.subject_id == booking.photographer_id,
            requested_fields=fields,
        )

    def _load(self, booking_id: int) -> BookingRecord:
        booking = self.repository.get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking


def _is_related(auth: AuthContext, booking: BookingRecord) -> bool:
    return (
        auth.is_admin
        or auth.subject_id == booking.client_id
        or auth.subject_id == booking.photographer_id
    )


def _is_accept_request(auth: AuthContext, patch: Mapping[str, object]) -> bool:
    return (
        auth.role == Role.PHOTOGRAPHER
        and patch.get("photographer_id") == auth.subject_id
        and patch.get("status") == BookingStatus.CONFIRMED
    )


def _resolve_status(
    auth: AuthContext,
    booking: BookingRecord,
    decision: Decision,
    requested: object,
) -> str | None:
    if requested is None or requested == booking.status:
        return None
    if requested in decision.allowed_status_targets:
        return BookingStatus(requested)
    if decision.strict_status or not decision.allowed_fields:
        _logger.warning(
            "Rejected %s -> %s on booking %s by %s",
            booking.status,
            requested,
            booking.id,
            auth.role,
        )
        raise InvalidTransitionError(booking.status, str(requested), auth.role)
    _logger.info(
        "Dropped status %s from %s update of booking %s", requested, auth.role, booking.id
    )
    return None
