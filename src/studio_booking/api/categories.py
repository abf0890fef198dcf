"""Category endpoints; reads are public, changes are admin-only."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from studio_booking.api.identity import get_auth_context, get_optional_auth_context
from studio_booking.api.schemas import CategoryCreate, CategoryPatch
from studio_booking.domain.auth import AuthContext
from studio_booking.domain.serialization import category_to_dict, content_to_dict

if TYPE_CHECKING:
    from studio_booking.containers import AppContainer

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
async def list_categories(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    categories = container.category_service.list_categories()
    return {"success": True, "data": [category_to_dict(c) for c in categories]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> object:
    """Create a category; an existing name is returned with 200."""
    container: AppContainer = request.app.state.container
    result = container.category_service.create_category(
        auth, body.name, body.description
    )
    if not result.created:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "success": True,
                "message": "Category already exists",
                "data": category_to_dict(result.category),
            },
        )
    return {"success": True, "data": category_to_dict(result.category)}


@router.get("/{category_id}")
async def get_category(category_id: int, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    category = container.category_service.get_category(category_id)
    return {"success": True, "data": category_to_dict(category)}


@router.get("/{category_id}/photos")
async def list_category_photos(
    category_id: int,
    request: Request,
    viewer: AuthContext | None = Depends(get_optional_auth_context),
) -> dict[str, object]:
    """Return the photos in a category that the viewer can see."""
    container: AppContainer = request.app.state.container
    photos = container.content_service.list_photos(viewer, category_id=category_id)
    return {"success": True, "data": [content_to_dict(p) for p in photos]}


@router.put("/{category_id}")
async def update_category(
    category_id: int,
    body: CategoryPatch,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    category = container.category_service.update_category(
        auth, category_id, body.model_dump(exclude_unset=True)
    )
    return {"success": True, "data": category_to_dict(category)}


@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.category_service.delete_category(auth, category_id)
    return {"success": True, "data": {}}
