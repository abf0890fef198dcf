"""Supabase-backed booking repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from supabase import Client

from studio_booking.domain.bookings import BookingRecord, BookingStatus
from studio_booking.services.bookings import BookingRepository

_COLUMNS = (
    "id, client_id, photographer_id, date, time, location, package, notes, "
    "status, cancelled_by, created_at, updated_at"
)


@dataclass
class SupabaseBookingRepository(BookingRepository):
    """Supabase implementation for bookings."""

    client: Client

    def create_booking(
        self,
        client_id: int,
        photographer_id: int | None,
        payload: dict[str, object],
    ) -> BookingRecord:
        """Create a pending booking row and return it."""
        response = (
            self.client.table("bookings")
            .insert(
                {
                    **payload,
                    "client_id": client_id,
                    "photographer_id": photographer_id,
                    "status": BookingStatus.PENDING.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create booking")
        return _parse_row(response.data[0])

    def get_booking(self, booking_id: int) -> BookingRecord | None:
        """Return a booking by id, if present."""
        response = (
            self.client.table("bookings")
            .select(_COLUMNS)
            .eq("id", booking_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_bookings(
        self, client_id: int | None = None, photographer_id: int | None = None
    ) -> list[BookingRecord]:
        """Return bookings, newest first."""
        query = self.client.table("bookings").select(_COLUMNS)
        if client_id is not None:
            query = query.eq("client_id", client_id)
        if photographer_id is not None:
            query = query.eq("photographer_id", photographer_id)
        response = query.order("created_at", desc=True).execute()
        return [_parse_row(row) for row in response.data or []]

    def update_booking(
        self,
        booking_id: int,
        changes: dict[str, object],
        expected_status: str | None = None,
    ) -> BookingRecord | None:
        """Update a booking in one statement, guarded by its status when asked."""
        query = (
            self.client.table("bookings")
            .update(_prepare(changes))
            .eq("id", booking_id)
        )
        if expected_status is not None:
            query = query.eq("status", str(expected_status))
        response = query.execute()
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def claim_booking(
        self,
        booking_id: int,
        photographer_id: int,
        changes: dict[str, object] | None = None,
    ) -> BookingRecord | None:
        """Assign and confirm a booking only while it is pending and unassigned."""
        response = (
            self.client.table("bookings")
            .update(
                _prepare(
                    {
                        **(changes or {}),
                        "photographer_id": photographer_id,
                        "status": BookingStatus.CONFIRMED,
                    }
                )
            )
            .eq("id", booking_id)
            .eq("status", BookingStatus.PENDING.value)
            .is_("photographer_id", "null")
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _prepare(changes: dict[str, object]) -> dict[str, object]:
    payload = {
        key: value.value if isinstance(value, Enum) else value
        for key, value in changes.items()
    }
    payload["updated_at"] = datetime.now(tz=UTC).isoformat()
    return payload


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_row(row: dict[str, object]) -> BookingRecord:
    photographer_id = row.get("photographer_id")
    return BookingRecord(
        id=int(row["id"]),
        client_id=int(row["client_id"]),
        photographer_id=int(photographer_id) if photographer_id is not None else None,
        date=str(row["date"]),
        time=row.get("time"),
        location=str(row["location"]),
        package=str(row["package"]),
        notes=row.get("notes"),
        status=BookingStatus(row["status"]),
        cancelled_by=row.get("cancelled_by"),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
