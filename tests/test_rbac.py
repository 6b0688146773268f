"""Tests for RBAC on the management surface."""

from eventcare.models.user import UserRole
from eventcare.services.rbac import Permission, RBACService


class TestRBACService:
    """Tests for RBACService class."""

    def test_admin_has_all_permissions(self) -> None:
        permissions = RBACService.get_permissions(UserRole.ADMIN)

        assert permissions == frozenset(Permission)

    def test_emt_has_no_management_permissions(self) -> None:
        assert RBACService.get_permissions(UserRole.EMT) == frozenset()

    def test_accepts_stored_role_string(self) -> None:
        assert RBACService.has_all_permissions("ADMIN", [Permission.AUDIT_READ])
        assert not RBACService.has_all_permissions("EMT", [Permission.PATIENTS_DELETE])

    def test_has_all_permissions(self) -> None:
        assert RBACService.has_all_permissions(
            UserRole.ADMIN, [Permission.EVENTS_MANAGE, Permission.STAFF_MANAGE]
        )
        assert not RBACService.has_all_permissions(UserRole.EMT, [Permission.EVENTS_MANAGE])
