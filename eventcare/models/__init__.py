"""Database models for EventCare."""

from eventcare.models.audit_log import AuditAction, AuditLog, AuditResource
from eventcare.models.event import Event, StaffAssignment
from eventcare.models.patient import Assessment, Patient, Treatment, Vital
from eventcare.models.user import User, UserRole
from eventcare.models.venue import Venue

__all__ = [
    # Users
    "User",
    "UserRole",
    # Events
    "Venue",
    "Event",
    "StaffAssignment",
    # Patient care
    "Patient",
    "Assessment",
    "Vital",
    "Treatment",
    # Audit
    "AuditLog",
    "AuditAction",
    "AuditResource",
]
