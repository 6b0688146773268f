"""Role-Based Access Control (RBAC) for administrative operations.

Patient-record access is decided by ``eventcare.policy.access``; this
table only covers the management surface (users, venues, events, staff,
audit) that is not tied to a patient.
"""

from enum import Enum

from eventcare.models.user import UserRole


class Permission(str, Enum):
    """Available permissions in the system."""

    # Events and staffing
    EVENTS_MANAGE = "events:manage"
    STAFF_MANAGE = "staff:manage"
    VENUES_MANAGE = "venues:manage"

    # Patient records
    PATIENTS_DELETE = "patients:delete"

    # Administration
    USERS_MANAGE = "users:manage"
    AUDIT_READ = "audit:read"


# Role to permissions mapping
ROLE_PERMISSIONS: dict[UserRole, frozenset[Permission]] = {
    UserRole.ADMIN: frozenset(Permission),
    UserRole.EMT: frozenset(),
}


class RBACService:
    """Service for checking role-based permissions."""

    @staticmethod
    def get_permissions(role: UserRole) -> frozenset[Permission]:
        """Get all permissions for a role."""
        return ROLE_PERMISSIONS.get(UserRole(role), frozenset())

    @staticmethod
    def has_all_permissions(role: UserRole, permissions: list[Permission]) -> bool:
        """Check if a role has all specified permissions."""
        role_permissions = RBACService.get_permissions(role)
        return all(p in role_permissions for p in permissions)
