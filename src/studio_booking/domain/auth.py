"""Caller identity as resolved by the authentication gateway."""

from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    """Roles a caller can hold."""

    CLIENT = "client"
    PHOTOGRAPHER = "photographer"
    ADMIN = "admin"


@dataclass(frozen=True)
class AuthContext:
    """The (subject, role) pair attached to every request.

    ``role`` stays a plain string so that a role the gateway invents later
    reaches the authorizer untouched and is denied there.
    """

    subject_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
