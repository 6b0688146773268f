"""Service-layer exceptions.

Routers translate these into HTTP responses; services never build
responses themselves.
"""

from eventcare.policy.lifecycle import Rejected


class EventCareError(Exception):
    """Base exception for service errors."""

    pass


class NotFoundError(EventCareError):
    """Raised when a record does not exist (and the caller may know that)."""

    pass


class ForbiddenError(EventCareError):
    """Raised for every access denial.

    Carries no detail on purpose: a missing assignment, an expired window
    and a nonexistent patient must look the same to the caller.
    """

    def __init__(self) -> None:
        super().__init__("Forbidden")


class ConflictError(EventCareError):
    """Raised on a version mismatch or a duplicate record."""

    pass


class TransitionRejectedError(EventCareError):
    """Raised when the record lifecycle refuses a change."""

    def __init__(self, rejection: Rejected) -> None:
        super().__init__(rejection.message)
        self.rejection = rejection


class InvalidInputError(EventCareError):
    """Raised when a request is well-formed but inconsistent with stored data."""

    pass
