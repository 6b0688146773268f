"""Assessment (patient care record) schemas."""

from pydantic import BaseModel, Field

from eventcare.policy.lifecycle import AssessmentStatus, Disposition
from eventcare.schemas.clinical import TreatmentRead, VitalRead
from eventcare.schemas.common import UTCDateTime


class AssessmentUpdate(BaseModel):
    """Partial assessment change.

    Only fields present in the request body are applied. Signature
    timestamps are set by the server and cannot be supplied.
    """

    expected_version: int = Field(
        ..., ge=1, description="Version the client last read; stale versions are rejected"
    )
    status: AssessmentStatus | None = None
    disposition: Disposition | None = None
    chief_complaint: str | None = None
    narrative: str | None = None
    hospital_name: str | None = Field(None, max_length=255)
    ems_unit: str | None = Field(None, max_length=100)
    patient_signature: str | None = None
    emt_signature: str | None = None

    model_config = {"extra": "forbid"}

    def changes(self) -> dict:
        """Fields explicitly set in the request, minus the version token."""
        data = self.model_dump(exclude_unset=True, exclude={"expected_version"})
        # A status cannot be cleared; ignore an explicit null
        if "status" in data and data["status"] is None:
            del data["status"]
        return data


class AssessmentRead(BaseModel):
    """Schema for reading an assessment."""

    id: str
    patient_id: str
    status: AssessmentStatus
    disposition: Disposition | None
    chief_complaint: str | None
    narrative: str | None
    hospital_name: str | None
    ems_unit: str | None
    patient_signature: str | None
    patient_signature_timestamp: UTCDateTime | None
    emt_signature: str | None
    emt_signature_timestamp: UTCDateTime | None
    version: int
    updated_by: str | None

    model_config = {"from_attributes": True}


class AssessmentDetail(AssessmentRead):
    """Assessment with its vitals and treatments, newest first."""

    vitals: list[VitalRead] = []
    treatments: list[TreatmentRead] = []
