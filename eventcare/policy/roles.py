"""Staff roles."""

from enum import Enum


class Role(str, Enum):
    """Closed set of staff roles.

    ADMIN bypasses every time and assignment rule; EMT visibility is
    granted per event through staff assignments.
    """

    EMT = "EMT"
    ADMIN = "ADMIN"

    @property
    def is_admin(self) -> bool:
        return self is Role.ADMIN
