"""Pydantic request bodies for the HTTP surface."""

from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    """Booking request from a client."""

    date: str = Field(min_length=1)
    time: str | None = None
    location: str = Field(min_length=1)
    package: str = Field(min_length=1)
    notes: str | None = None
    photographer_id: int | None = None


class BookingPatch(BaseModel):
    """Any subset of booking fields; only the fields sent are forwarded."""

    date: str | None = None
    time: str | None = None
    location: str | None = None
    package: str | None = None
    notes: str | None = None
    status: str | None = None
    photographer_id: int | None = None


class AssignRequest(BaseModel):
    photographer_id: int


class ModerationCommand(BaseModel):
    """Admin moderation request; kind and action are checked by the engine."""

    content_kind: str
    content_id: int
    action: str


class RoleChange(BaseModel):
    username: str = Field(min_length=1)
    new_role: str


class PhotoCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str | None = None
    image_url: str = Field(min_length=1)
    category_id: int


class PhotoPatch(BaseModel):
    title: str | None = None
    description: str | None = None
    category_id: int | None = None


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None


class CategoryPatch(BaseModel):
    name: str | None = None
    description: str | None = None


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1)


class ReviewPatch(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = None
