"""Request identity resolved from the authentication gateway headers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

from studio_booking.domain.auth import AuthContext

if TYPE_CHECKING:
    from studio_booking.containers import AppContainer


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def get_auth_context(
    x_api_token: str | None = Header(default=None),
    x_subject_id: int | None = Header(default=None),
    x_role: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> AuthContext:
    """Require a gateway-authenticated caller."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    if x_subject_id is None or not x_role:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return AuthContext(subject_id=x_subject_id, role=x_role.strip().lower())


async def get_optional_auth_context(
    x_api_token: str | None = Header(default=None),
    x_subject_id: int | None = Header(default=None),
    x_role: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> AuthContext | None:
    """Resolve the caller if identity headers are present; anonymous otherwise."""
    if x_api_token is None and x_subject_id is None and x_role is None:
        return None
    return await get_auth_context(x_api_token, x_subject_id, x_role, api_token)
