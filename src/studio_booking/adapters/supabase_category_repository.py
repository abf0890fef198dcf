"""Supabase-backed category repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from studio_booking.domain.categories import CategoryRecord
from studio_booking.services.categories import CategoryRepository

_COLUMNS = "id, name, slug, description, created_at"


@dataclass
class SupabaseCategoryRepository(CategoryRepository):
    """Supabase implementation for photo categories."""

    client: Client

    def create_category(
        self, name: str, slug: str, description: str | None
    ) -> CategoryRecord:
        """Create a category row and return it."""
        response = (
            self.client.table("categories")
            .insert({"name": name, "slug": slug, "description": description})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create category")
        return _parse_row(response.data[0])

    def get_category(self, category_id: int) -> CategoryRecord | None:
        """Return a category by id, if present."""
        response = (
            self.client.table("categories")
            .select(_COLUMNS)
            .eq("id", category_id)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def get_by_name(self, name: str) -> CategoryRecord | None:
        """Return a category by exact name, if present."""
        response = (
            self.client.table("categories")
            .select(_COLUMNS)
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def list_categories(self) -> list[CategoryRecord]:
        """Return all categories ordered by name."""
        response = (
            self.client.table("categories")
            .select(_COLUMNS)
            .order("name", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def update_category(
        self, category_id: int, changes: dict[str, object]
    ) -> CategoryRecord | None:
        """Update a category and return the updated row."""
        response = (
            self.client.table("categories")
            .update(changes)
            .eq("id", category_id)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def delete_category(self, category_id: int) -> bool:
        """Delete a category row."""
        response = (
            self.client.table("categories").delete().eq("id", category_id).execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> CategoryRecord:
    created_raw = row.get("created_at")
    return CategoryRecord(
        id=int(row["id"]),
        name=str(row["name"]),
        slug=str(row["slug"]),
        description=row.get("description"),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
