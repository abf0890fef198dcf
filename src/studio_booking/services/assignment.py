"""Binding photographers to bookings.

Two paths exist and neither goes through the role policy table:

* ``assign``: an admin override that sets the photographer and forces the
  booking to confirmed from whatever status it is in.
* ``accept``: photographer self-service. It is gated only on the booking
  being pending and unassigned, and is the one way a non-admin who is not
  yet the assignee can move a booking to confirmed.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from studio_booking.domain.auth import AuthContext, Role
from studio_booking.domain.bookings import BookingRecord, BookingStatus
from studio_booking.domain.serialization import booking_to_dict
from studio_booking.errors import (
    AlreadyAssignedError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
)
from studio_booking.services.audit import AuditService
from studio_booking.services.bookings import BookingRepository
from studio_booking.services.users import UserService

_logger = logging.getLogger(__name__)


@dataclass
class AssignmentService:
    """Resolves which photographer a booking belongs to."""

    repository: BookingRepository
    user_service: UserService
    audit_service: AuditService

    def assign(
        self, auth: AuthContext, booking_id: int, photographer_id: int
    ) -> BookingRecord:
        """Force-assign a photographer and confirm the booking."""
        if not auth.is_admin:
            raise ForbiddenError("Admin access required")
        booking = self._load(booking_id)
        self.user_service.get_photographer(photographer_id)

        updated = self.repository.update_booking(
            booking_id,
            {"photographer_id": photographer_id, "status": BookingStatus.CONFIRMED},
        )
        if updated is None:
            raise NotFoundError("Booking", booking_id)
        self.audit_service.record_event(
            actor_id=auth.subject_id,
            action="ASSIGN_BOOKING",
            entity_type="booking",
            entity_id=booking_id,
            details=f"Assigned booking {booking_id} to photographer {photographer_id}",
            before=booking_to_dict(booking),
            after=booking_to_dict(updated),
        )
        _logger.info(
            "Booking %s assigned to photographer %s by admin %s",
            booking_id,
            photographer_id,
            auth.subject_id,
        )
        return updated

    def accept(
        self,
        auth: AuthContext,
        booking_id: int,
        changes: Mapping[str, object] | None = None,
    ) -> BookingRecord:
        """Claim an unassigned pending booking for the calling photographer.

        ``changes`` must already be filtered for the assignee; they are
        written together with the claim.
        """
        if auth.role != Role.PHOTOGRAPHER:
            raise ForbiddenError("Only photographers can accept bookings")
        booking = self._load(booking_id)
        _ensure_claimable(booking, auth)

        claimed = self.repository.claim_booking(
            booking_id, auth.subject_id, dict(changes or {})
        )
        if claimed is None:
            # Someone else got there between our read and the write.
            _ensure_claimable(self._load(booking_id), auth)
            raise AlreadyAssignedError()
        _logger.info(
            "Booking %s accepted by photographer %s", booking_id, auth.subject_id
        )
        return claimed

    def _load(self, booking_id: int) -> BookingRecord:
        booking = self.repository.get_booking(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        return booking


def _ensure_claimable(booking: BookingRecord, auth: AuthContext) -> None:
    if booking.is_assigned:
        raise AlreadyAssignedError()
    if booking.status != BookingStatus.PENDING:
        raise InvalidTransitionError(booking.status, BookingStatus.CONFIRMED, auth.role)
