"""Admin API endpoints: moderation, assignment, users and reporting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, Request

from studio_booking.api.identity import get_auth_context
from studio_booking.api.schemas import AssignRequest, ModerationCommand, RoleChange
from studio_booking.domain.auth import AuthContext
from studio_booking.domain.serialization import (
    booking_to_dict,
    content_to_dict,
    user_to_dict,
)

if TYPE_CHECKING:
    from studio_booking.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/moderate")
async def moderate_content(
    body: ModerationCommand,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Delete, flag or restore a photo or review."""
    container: AppContainer = request.app.state.container
    result = container.moderation_service.moderate(
        auth, body.content_kind, body.content_id, body.action
    )
    data = content_to_dict(result.content) if result.content else {}
    return {"success": True, "message": result.message, "data": data}


@router.post("/bookings/{booking_id}/assign")
async def assign_booking(
    booking_id: int,
    body: AssignRequest,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Force-assign a photographer and confirm the booking."""
    container: AppContainer = request.app.state.container
    booking = container.assignment_service.assign(
        auth, booking_id, body.photographer_id
    )
    return {"success": True, "data": booking_to_dict(booking)}


@router.get("/bookings")
async def list_bookings(
    request: Request, auth: AuthContext = Depends(get_auth_context)
) -> dict[str, object]:
    """Return every booking."""
    container: AppContainer = request.app.state.container
    bookings = container.booking_service.list_all_bookings(auth)
    return {"success": True, "data": [booking_to_dict(b) for b in bookings]}


@router.get("/users")
async def list_users(
    request: Request, auth: AuthContext = Depends(get_auth_context)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    users = container.user_service.list_users(auth)
    return {"success": True, "data": [user_to_dict(u) for u in users]}


@router.put("/users/role")
async def update_user_role(
    body: RoleChange,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Change a user's role."""
    container: AppContainer = request.app.state.container
    user = container.user_service.update_role(auth, body.username, body.new_role)
    return {"success": True, "data": user_to_dict(user)}


@router.get("/dashboard")
async def dashboard(
    request: Request, auth: AuthContext = Depends(get_auth_context)
) -> dict[str, object]:
    """Return user, booking and moderation counts."""
    container: AppContainer = request.app.state.container
    return {"success": True, "data": container.admin_service.dashboard(auth)}


@router.get("/activity")
async def list_activity(
    request: Request,
    limit: int = Query(default=50, ge=1, le=500),
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    """Return recent privileged actions."""
    container: AppContainer = request.app.state.container
    return {"success": True, "data": container.admin_service.list_activity(auth, limit)}
