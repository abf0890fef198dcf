"""JSON-safe views of domain records."""

from studio_booking.domain.bookings import BookingRecord
from studio_booking.domain.categories import CategoryRecord
from studio_booking.domain.content import ContentRecord
from studio_booking.domain.users import UserRecord


def booking_to_dict(booking: BookingRecord) -> dict[str, object]:
    return {
        "id": booking.id,
        "client_id": booking.client_id,
        "photographer_id": booking.photographer_id,
        "date": booking.date,
        "time": booking.time,
        "location": booking.location,
        "package": booking.package,
        "notes": booking.notes,
        "status": str(booking.status),
        "cancelled_by": booking.cancelled_by,
        "created_at": booking.created_at.isoformat() if booking.created_at else None,
        "updated_at": booking.updated_at.isoformat() if booking.updated_at else None,
    }


def content_to_dict(content: ContentRecord) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": content.id,
        "kind": str(content.kind),
        "owner_id": content.owner_id,
        **content.attributes,
        **content.moderation.as_changes(),
    }
    payload["status"] = str(content.moderation.status)
    payload["created_at"] = (
        content.created_at.isoformat() if content.created_at else None
    )
    return payload


def user_to_dict(user: UserRecord) -> dict[str, object]:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "role": user.role,
        "is_active": user.is_active,
    }


def category_to_dict(category: CategoryRecord) -> dict[str, object]:
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug,
        "description": category.description,
        "created_at": category.created_at.isoformat() if category.created_at else None,
    }
