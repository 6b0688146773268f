"""Pydantic schemas for request/response validation."""

from eventcare.schemas.assessment import AssessmentDetail, AssessmentRead, AssessmentUpdate
from eventcare.schemas.audit_log import AuditLogFilter, AuditLogRead
from eventcare.schemas.auth import LoginRequest, TokenResponse
from eventcare.schemas.clinical import TreatmentCreate, TreatmentRead, VitalCreate, VitalRead
from eventcare.schemas.event import (
    EventCreate,
    EventDetail,
    EventRead,
    EventUpdate,
    StaffAssignmentCreate,
    StaffAssignmentRead,
)
from eventcare.schemas.patient import (
    PatientCreate,
    PatientDetail,
    PatientListItem,
    PatientRead,
    PatientUpdate,
)
from eventcare.schemas.user import UserCreate, UserRead, UserUpdate
from eventcare.schemas.venue import VenueCreate, VenueRead, VenueUpdate

__all__ = [
    "LoginRequest",
    "TokenResponse",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "VenueCreate",
    "VenueRead",
    "VenueUpdate",
    "EventCreate",
    "EventRead",
    "EventUpdate",
    "EventDetail",
    "StaffAssignmentCreate",
    "StaffAssignmentRead",
    "PatientCreate",
    "PatientRead",
    "PatientUpdate",
    "PatientListItem",
    "PatientDetail",
    "AssessmentRead",
    "AssessmentUpdate",
    "AssessmentDetail",
    "VitalCreate",
    "VitalRead",
    "TreatmentCreate",
    "TreatmentRead",
    "AuditLogRead",
    "AuditLogFilter",
]
