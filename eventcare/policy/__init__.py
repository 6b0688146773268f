"""Access control and record lifecycle policy.

Pure functions only: no database, no clock reads, no logging.
"""

from eventcare.policy.access import (
    AccessController,
    AccessDecision,
    Actor,
    EventRef,
    PatientRef,
    can_view_event,
    resolve_access,
)
from eventcare.policy.clock import Clock, FixedClock, SystemClock
from eventcare.policy.lifecycle import (
    Accepted,
    AssessmentState,
    AssessmentStatus,
    Disposition,
    InvalidAssessmentState,
    Rejected,
    RejectionReason,
    check_record_unlocked,
    validate_transition,
)
from eventcare.policy.roles import Role

__all__ = [
    "Role",
    "Clock",
    "SystemClock",
    "FixedClock",
    "Actor",
    "EventRef",
    "PatientRef",
    "AccessDecision",
    "AccessController",
    "can_view_event",
    "resolve_access",
    "AssessmentState",
    "AssessmentStatus",
    "Disposition",
    "Accepted",
    "Rejected",
    "RejectionReason",
    "InvalidAssessmentState",
    "check_record_unlocked",
    "validate_transition",
]
