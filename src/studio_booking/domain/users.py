"""Domain models for studio users."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    username: str
    role: str
    email: str | None = None
    is_active: bool = True
