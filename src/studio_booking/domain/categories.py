"""Domain model for photo categories."""

import re
from dataclasses import dataclass
from datetime import datetime

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class CategoryRecord:
    """An admin-managed category photos are filed under."""

    id: int
    name: str
    slug: str
    description: str | None = None
    created_at: datetime | None = None


def slugify(name: str) -> str:
    """Return the URL slug for a category name."""
    return _WHITESPACE.sub("-", name.strip().lower())
