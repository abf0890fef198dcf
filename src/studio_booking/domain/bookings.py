"""Domain models for studio bookings."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class BookingStatus(StrEnum):
    """Lifecycle states of a booking."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


BOOKING_FIELDS = frozenset(
    {"date", "time", "location", "package", "notes", "status", "photographer_id"}
)


@dataclass(frozen=True)
class BookingRecord:
    """Represents a persisted booking."""

    id: int
    client_id: int
    photographer_id: int | None
    date: str
    time: str | None
    location: str
    package: str
    notes: str | None
    status: str
    cancelled_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_assigned(self) -> bool:
        return self.photographer_id is not None


@dataclass(frozen=True)
class CancelResult:
    """Outcome of a cancel request; ``already_cancelled`` marks a repeated call."""

    booking: BookingRecord
    already_cancelled: bool = False
