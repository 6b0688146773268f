"""Assessment (patient care record) lifecycle rules.

An assessment is either ``incomplete`` or ``complete``. Completing it
requires an EMT signature plus the fields its disposition demands:

- transported: hospital name and EMS unit
- rma: patient signature
- eloped: nothing further

Once complete the record is locked for everyone but ADMIN, who may edit
it or reopen it. ``validate_transition`` is pure: it returns the merged
state on acceptance and never touches storage.
"""

from dataclasses import dataclass, fields, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Union

from eventcare.policy.roles import Role


class AssessmentStatus(str, Enum):
    """Completion status of an assessment."""

    INCOMPLETE = "incomplete"
    COMPLETE = "complete"


class Disposition(str, Enum):
    """Outcome category of a patient encounter."""

    TRANSPORTED = "transported"
    RMA = "rma"  # refusal of medical assistance
    ELOPED = "eloped"


class RejectionReason(str, Enum):
    """Why a proposed change was refused."""

    RECORD_LOCKED = "record_locked"
    MISSING_REQUIRED_FIELD = "missing_required_field"


class InvalidAssessmentState(ValueError):
    """Raised when the caller passes a structurally invalid state or change."""


# (signature field, timestamp field)
SIGNATURE_FIELDS: tuple[tuple[str, str], ...] = (
    ("patient_signature", "patient_signature_timestamp"),
    ("emt_signature", "emt_signature_timestamp"),
)

# Fields a caller may propose. Signature timestamps are derived.
EDITABLE_FIELDS = frozenset(
    {
        "status",
        "disposition",
        "hospital_name",
        "ems_unit",
        "patient_signature",
        "emt_signature",
        "chief_complaint",
        "narrative",
    }
)

# Extra fields required to complete a record, per disposition
DISPOSITION_REQUIREMENTS: dict[Disposition, tuple[str, ...]] = {
    Disposition.TRANSPORTED: ("hospital_name", "ems_unit"),
    Disposition.RMA: ("patient_signature",),
    Disposition.ELOPED: (),
}


@dataclass(frozen=True)
class AssessmentState:
    """Snapshot of the lifecycle-relevant assessment fields."""

    status: AssessmentStatus = AssessmentStatus.INCOMPLETE
    disposition: Disposition | None = None
    hospital_name: str | None = None
    ems_unit: str | None = None
    patient_signature: str | None = None
    patient_signature_timestamp: datetime | None = None
    emt_signature: str | None = None
    emt_signature_timestamp: datetime | None = None
    chief_complaint: str | None = None
    narrative: str | None = None

    @property
    def is_complete(self) -> bool:
        return self.status is AssessmentStatus.COMPLETE

    @classmethod
    def from_record(cls, record: Any) -> "AssessmentState":
        """Build a state from any object exposing the assessment attributes.

        Raises:
            InvalidAssessmentState: If stored status or disposition is unknown
        """
        values = {f.name: getattr(record, f.name) for f in fields(cls)}
        try:
            values["status"] = AssessmentStatus(values["status"])
            if values["disposition"] is not None:
                values["disposition"] = Disposition(values["disposition"])
        except ValueError as exc:
            raise InvalidAssessmentState(str(exc)) from exc
        return cls(**values)

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Accepted:
    """The change is legal; ``state`` is the fully merged result."""

    state: AssessmentState
    changed_fields: tuple[str, ...] = ()

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The change is illegal for ``reason``."""

    reason: RejectionReason
    field: str | None = None

    @property
    def accepted(self) -> bool:
        return False

    @property
    def message(self) -> str:
        if self.reason is RejectionReason.RECORD_LOCKED:
            return "Record is complete and can only be changed by an administrator"
        return f"Missing required field: {self.field}"


TransitionResult = Union[Accepted, Rejected]


def _present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def _check_state(state: AssessmentState) -> None:
    if not isinstance(state.status, AssessmentStatus):
        raise InvalidAssessmentState(f"Unknown status: {state.status!r}")
    if state.disposition is not None and not isinstance(state.disposition, Disposition):
        raise InvalidAssessmentState(f"Unknown disposition: {state.disposition!r}")


def _coerce_changes(proposed: Mapping[str, Any]) -> dict[str, Any]:
    unknown = set(proposed) - EDITABLE_FIELDS
    if unknown:
        raise InvalidAssessmentState(f"Fields not editable: {sorted(unknown)}")

    changes = dict(proposed)
    try:
        if "status" in changes:
            if changes["status"] is None:
                raise InvalidAssessmentState("Status cannot be cleared")
            changes["status"] = AssessmentStatus(changes["status"])
        if changes.get("disposition") is not None:
            changes["disposition"] = Disposition(changes["disposition"])
    except ValueError as exc:
        raise InvalidAssessmentState(str(exc)) from exc
    return changes


def missing_completion_field(state: AssessmentState) -> str | None:
    """Return the first field preventing ``state`` from being complete."""
    if state.disposition is None:
        return "disposition"
    for field_name in DISPOSITION_REQUIREMENTS[state.disposition]:
        if not _present(getattr(state, field_name)):
            return field_name
    if not _present(state.emt_signature):
        return "emt_signature"
    return None


def check_record_unlocked(current: AssessmentState, actor_role: Role) -> Rejected | None:
    """Reject any mutation of a complete record by a non-admin.

    Applies to the assessment itself and to the vitals and treatments
    attached to it.
    """
    if current.is_complete and actor_role is not Role.ADMIN:
        return Rejected(RejectionReason.RECORD_LOCKED)
    return None


def validate_transition(
    current: AssessmentState,
    proposed: Mapping[str, Any],
    actor_role: Role,
    now: datetime,
) -> TransitionResult:
    """Validate a proposed assessment change and compute the result.

    Args:
        current: Current stored state
        proposed: Partial change, keyed by editable field name
        actor_role: Role of the staff member making the change
        now: Current instant from the injected clock, used for signature
            timestamps

    Returns:
        Accepted with the merged state, or Rejected with a reason

    Raises:
        InvalidAssessmentState: If ``current`` or ``proposed`` is malformed
    """
    _check_state(current)
    changes = _coerce_changes(proposed)

    locked = check_record_unlocked(current, actor_role)
    if locked is not None:
        return locked

    merged = replace(current, **changes)

    # Supplying a signature stamps it; clearing it clears the stamp
    for signature_field, timestamp_field in SIGNATURE_FIELDS:
        if signature_field not in changes:
            continue
        if _present(changes[signature_field]):
            merged = replace(merged, **{timestamp_field: now})
        else:
            merged = replace(merged, **{signature_field: None, timestamp_field: None})

    if merged.is_complete:
        missing = missing_completion_field(merged)
        if missing is not None:
            return Rejected(RejectionReason.MISSING_REQUIRED_FIELD, missing)

    changed = tuple(
        f.name
        for f in fields(AssessmentState)
        if getattr(current, f.name) != getattr(merged, f.name)
    )
    return Accepted(state=merged, changed_fields=changed)
