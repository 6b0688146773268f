"""Patient schemas."""

from pydantic import BaseModel, Field

from eventcare.policy.lifecycle import AssessmentStatus
from eventcare.schemas.assessment import AssessmentDetail
from eventcare.schemas.common import UTCDateTime


class PatientCreate(BaseModel):
    """Schema for registering a patient at an event."""

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    dob: UTCDateTime
    alcohol_involved: bool = False
    triage_tag: str | None = Field(None, max_length=50)


class PatientUpdate(BaseModel):
    """Schema for updating patient demographics.

    Triage tag changes are not gated by the record lifecycle.
    """

    first_name: str | None = Field(None, min_length=1, max_length=255)
    last_name: str | None = Field(None, min_length=1, max_length=255)
    dob: UTCDateTime | None = None
    alcohol_involved: bool | None = None
    triage_tag: str | None = Field(None, max_length=50)


class PatientRead(BaseModel):
    """Schema for reading a patient."""

    id: str
    event_id: str
    first_name: str
    last_name: str
    dob: UTCDateTime
    alcohol_involved: bool
    triage_tag: str | None
    created_at: UTCDateTime
    created_by: str

    model_config = {"from_attributes": True}


class PatientListItem(PatientRead):
    """Patient row in an event's patient list."""

    status: AssessmentStatus


class PatientDetail(PatientRead):
    """Patient with the full care record."""

    assessment: AssessmentDetail
