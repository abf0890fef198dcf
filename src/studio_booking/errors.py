"""Failures raised by the booking and moderation core.

Every error carries the HTTP status the API layer reports it with, so the
core never has to import the web framework.
"""


class StudioError(Exception):
    """Base class for recoverable, reported failures."""

    status_code = 500
    default_detail = "An unexpected error occurred"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(StudioError):
    """Request payload violates a business rule."""

    status_code = 400
    default_detail = "Validation failed"


class NotFoundError(StudioError):
    """Record id does not resolve."""

    status_code = 404

    def __init__(self, resource: str = "Resource", identifier: object = None) -> None:
        detail = f"{resource} not found"
        if identifier is not None:
            detail = f"{resource} with id '{identifier}' not found"
        super().__init__(detail)


class ForbiddenError(StudioError):
    """Caller has no owner, assignee or admin relationship to the record."""

    status_code = 403
    default_detail = "You don't have permission to access this resource"


class InvalidTransitionError(StudioError):
    """Requested status is not reachable from the current one for this role."""

    status_code = 400

    def __init__(self, current: str, target: str, role: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Role '{role}' cannot move this record from {current} to {target}")


class InvalidActionError(StudioError):
    """Moderation action or content kind outside the closed set."""

    status_code = 400
    default_detail = "Action must be either delete, flag, or restore"


class AlreadyAssignedError(StudioError):
    status_code = 400
    default_detail = "Booking already has a photographer assigned"


class AlreadyTerminalError(StudioError):
    status_code = 400
    default_detail = "Booking is already in a terminal state"


class ContentUnavailableError(StudioError):
    """Content exists but is hidden from this caller by moderation."""

    status_code = 404

    def __init__(self, kind: str, identifier: object) -> None:
        super().__init__(f"{kind.capitalize()} {identifier} is unavailable")


class ConcurrentUpdateError(StudioError):
    """The record kept changing underneath every attempt to write it."""

    status_code = 409
    default_detail = "Booking was modified concurrently, please retry"
