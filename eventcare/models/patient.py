"""Patient care record models.

Includes:
- Patient: person seen at an event
- Assessment: the patient care record, one per patient
- Vital: timed vital-sign measurements on an assessment
- Treatment: timed interventions on an assessment
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from eventcare.db.base import Base, TimestampMixin
from eventcare.policy.lifecycle import AssessmentStatus, Disposition
from eventcare.utils.time import utc_now


class Patient(Base, TimestampMixin):
    """A patient encountered at an event.

    ``created_at`` anchors the EMT access window and never changes.
    """

    __tablename__ = "patients"

    event_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("events.id"),
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    dob: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    alcohol_involved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Free-form severity tag, not part of the record lifecycle
    triage_tag: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_by: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
    )
    updated_by: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Patient {self.id} event={self.event_id}>"


class Assessment(Base, TimestampMixin):
    """Electronic patient care record.

    Created in the same transaction as its patient. ``version`` is bumped
    on every accepted write and checked by conditional updates.
    """

    __tablename__ = "assessments"
    __table_args__ = (
        CheckConstraint("status IN ('incomplete', 'complete')", name="status"),
        CheckConstraint(
            "disposition IS NULL OR disposition IN ('transported', 'rma', 'eloped')",
            name="disposition",
        ),
    )

    patient_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("patients.id"),
        nullable=False,
        unique=True,
        index=True,
    )
    status: Mapped[AssessmentStatus] = mapped_column(
        String(50),
        default=AssessmentStatus.INCOMPLETE.value,
        nullable=False,
        index=True,
    )
    disposition: Mapped[Disposition | None] = mapped_column(String(100), nullable=True)
    chief_complaint: Mapped[str | None] = mapped_column(Text, nullable=True)
    narrative: Mapped[str | None] = mapped_column(Text, nullable=True)
    hospital_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ems_unit: Mapped[str | None] = mapped_column(String(100), nullable=True)
    patient_signature: Mapped[str | None] = mapped_column(Text, nullable=True)
    patient_signature_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    emt_signature: Mapped[str | None] = mapped_column(Text, nullable=True)
    emt_signature_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    updated_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Assessment patient={self.patient_id} {self.status} v{self.version}>"


class Vital(Base):
    """A set of vital signs taken at one moment."""

    __tablename__ = "vitals"

    assessment_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("assessments.id"),
        nullable=False,
        index=True,
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    blood_pressure: Mapped[str | None] = mapped_column(String(50), nullable=True)
    heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    respiratory_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    oxygen_saturation: Mapped[int | None] = mapped_column(Integer, nullable=True)
    temperature: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    glucose_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pain_scale: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    created_by: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
    )


class Treatment(Base):
    """An intervention given to the patient."""

    __tablename__ = "treatments"

    assessment_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("assessments.id"),
        nullable=False,
        index=True,
    )
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )
    created_by: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id"),
        nullable=False,
    )
