"""Vital sign and treatment schemas."""

from pydantic import BaseModel, Field

from eventcare.schemas.common import UTCDateTime


class VitalCreate(BaseModel):
    """Schema for recording vital signs."""

    timestamp: UTCDateTime | None = None
    blood_pressure: str | None = Field(None, max_length=50)
    heart_rate: int | None = Field(None, ge=0, le=400)
    respiratory_rate: int | None = Field(None, ge=0, le=150)
    oxygen_saturation: int | None = Field(None, ge=0, le=100)
    temperature: float | None = None
    glucose_level: int | None = Field(None, ge=0)
    pain_scale: int | None = Field(None, ge=0, le=10)
    notes: str | None = None


class VitalRead(BaseModel):
    """Schema for reading vital signs."""

    id: str
    assessment_id: str
    timestamp: UTCDateTime
    blood_pressure: str | None
    heart_rate: int | None
    respiratory_rate: int | None
    oxygen_saturation: int | None
    temperature: float | None
    glucose_level: int | None
    pain_scale: int | None
    notes: str | None
    created_by: str

    model_config = {"from_attributes": True}


class TreatmentCreate(BaseModel):
    """Schema for recording a treatment."""

    name: str = Field(min_length=1, max_length=255)
    timestamp: UTCDateTime | None = None
    notes: str | None = None


class TreatmentRead(BaseModel):
    """Schema for reading a treatment."""

    id: str
    assessment_id: str
    timestamp: UTCDateTime
    name: str
    notes: str | None
    created_by: str

    model_config = {"from_attributes": True}
