"""Business logic services."""

from eventcare.services.access import AccessService, AssignmentLookup, get_access_controller
from eventcare.services.assessments import AssessmentService
from eventcare.services.audit import AuditRecorder, AuditService, write_audit_log
from eventcare.services.auth import AuthService
from eventcare.services.clinical import ClinicalService
from eventcare.services.events import EventService
from eventcare.services.patients import PatientRecord, PatientService
from eventcare.services.rbac import Permission, RBACService
from eventcare.services.staff import StaffService
from eventcare.services.users import UserService
from eventcare.services.venues import VenueService

__all__ = [
    "AccessService",
    "AssignmentLookup",
    "get_access_controller",
    "AssessmentService",
    "AuditRecorder",
    "AuditService",
    "write_audit_log",
    "AuthService",
    "ClinicalService",
    "EventService",
    "PatientRecord",
    "PatientService",
    "Permission",
    "RBACService",
    "StaffService",
    "UserService",
    "VenueService",
]
