"""Photo and review endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from studio_booking.api.identity import get_auth_context, get_optional_auth_context
from studio_booking.api.schemas import PhotoCreate, PhotoPatch, ReviewCreate, ReviewPatch
from studio_booking.domain.auth import AuthContext
from studio_booking.domain.content import ContentKind
from studio_booking.domain.serialization import content_to_dict

if TYPE_CHECKING:
    from studio_booking.containers import AppContainer

router = APIRouter(tags=["content"])


@router.post("/photos", status_code=status.HTTP_201_CREATED)
async def create_photo(
    body: PhotoCreate,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    photo = container.content_service.create_photo(auth, body.model_dump())
    return {"success": True, "data": content_to_dict(photo)}


@router.get("/photos")
async def list_photos(
    request: Request,
    category_id: int | None = None,
    viewer: AuthContext | None = Depends(get_optional_auth_context),
) -> dict[str, object]:
    """Return the photos the viewer can see, optionally from one category."""
    container: AppContainer = request.app.state.container
    photos = container.content_service.list_photos(viewer, category_id=category_id)
    return {"success": True, "data": [content_to_dict(p) for p in photos]}


@router.get("/photos/{photo_id}")
async def get_photo(
    photo_id: int,
    request: Request,
    viewer: AuthContext | None = Depends(get_optional_auth_context),
) -> dict[str, object]:
    """Return a photo; hidden photos are reported as unavailable."""
    container: AppContainer = request.app.state.container
    photo = container.content_service.get_content(viewer, ContentKind.PHOTO, photo_id)
    return {"success": True, "data": content_to_dict(photo)}


@router.put("/photos/{photo_id}")
async def update_photo(
    photo_id: int,
    body: PhotoPatch,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    photo = container.content_service.update_content(
        auth, ContentKind.PHOTO, photo_id, body.model_dump(exclude_unset=True)
    )
    return {"success": True, "data": content_to_dict(photo)}


@router.delete("/photos/{photo_id}")
async def delete_photo(
    photo_id: int,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.content_service.delete_content(auth, ContentKind.PHOTO, photo_id)
    return {"success": True, "data": {}}


@router.post("/photos/{photo_id}/reviews", status_code=status.HTTP_201_CREATED)
async def create_review(
    photo_id: int,
    body: ReviewCreate,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    review = container.content_service.create_review(auth, photo_id, body.model_dump())
    return {"success": True, "data": content_to_dict(review)}


@router.get("/photos/{photo_id}/reviews")
async def list_reviews(
    photo_id: int,
    request: Request,
    viewer: AuthContext | None = Depends(get_optional_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    reviews = container.content_service.list_reviews(viewer, photo_id)
    return {"success": True, "data": [content_to_dict(r) for r in reviews]}


@router.put("/reviews/{review_id}")
async def update_review(
    review_id: int,
    body: ReviewPatch,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    review = container.content_service.update_content(
        auth, ContentKind.REVIEW, review_id, body.model_dump(exclude_unset=True)
    )
    return {"success": True, "data": content_to_dict(review)}


@router.delete("/reviews/{review_id}")
async def delete_review(
    review_id: int,
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.content_service.delete_content(auth, ContentKind.REVIEW, review_id)
    return {"success": True, "data": {}}
