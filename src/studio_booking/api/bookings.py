"""Booking endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from studio_booking.api.identity import get_auth_context
from studio_booking.api.schemas import BookingCreate, BookingPatch
from studio_booking.domain.auth import AuthContext
from studio_booking.domain.serialization import booking_to_dict

if TYPE_CHECKING:
    from studio_booking.containers import AppContainer

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Request a session."""
    container: AppContainer = request.app.state.container
    booking = container.booking_service.create_booking(
        auth.subject_id, body.model_dump(exclude_unset=True)
    )
    return {"success": True, "data": booking_to_dict(booking)}


@router.get("")
async def list_my_bookings(
    request: Request, auth: AuthContext = Depends(get_auth_context)
) -> dict[str, object]:
    """Return the caller's own bookings."""
    container: AppContainer = request.app.state.container
    bookings = container.booking_service.list_my_bookings(auth)
    return {"success": True, "data": [booking_to_dict(b) for b in bookings]}


@router.get("/photographer/{photographer_id}")
async def list_photographer_bookings(
    photographer_id: int,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Return bookings assigned to a photographer."""
    container: AppContainer = request.app.state.container
    bookings = container.booking_service.list_photographer_bookings(
        auth, photographer_id
    )
    return {"success": True, "data": [booking_to_dict(b) for b in bookings]}


@router.get("/{booking_id}")
async def get_booking(
    booking_id: int,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    booking = container.booking_service.get_booking(auth, booking_id)
    return {"success": True, "data": booking_to_dict(booking)}


@router.put("/{booking_id}")
async def update_booking(
    booking_id: int,
    body: BookingPatch,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Apply a partial update; unauthorized fields are dropped."""
    container: AppContainer = request.app.state.container
    booking = container.booking_service.update_booking(
        auth, booking_id, body.model_dump(exclude_unset=True)
    )
    return {"success": True, "data": booking_to_dict(booking)}


@router.delete("/{booking_id}")
async def cancel_booking(
    booking_id: int,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Cancel a booking; cancelling twice succeeds with ``already_cancelled``."""
    container: AppContainer = request.app.state.container
    result = container.booking_service.cancel_booking(auth, booking_id)
    return {
        "success": True,
        "data": booking_to_dict(result.booking),
        "already_cancelled": result.already_cancelled,
    }


@router.post("/{booking_id}/accept")
async def accept_booking(
    booking_id: int,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Claim an unassigned booking as the calling photographer."""
    container: AppContainer = request.app.state.container
    booking = container.assignment_service.accept(auth, booking_id)
    return {"success": True, "data": booking_to_dict(booking)}
