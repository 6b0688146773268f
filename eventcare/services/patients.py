"""Patient registration and retrieval."""

import logging
from dataclasses import dataclass

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.models.patient import Assessment, Patient, Treatment, Vital
from eventcare.models.user import User
from eventcare.policy.clock import Clock
from eventcare.policy.lifecycle import AssessmentStatus
from eventcare.schemas.patient import PatientCreate, PatientUpdate
from eventcare.services.access import AccessService, actor_for, event_ref, patient_ref
from eventcare.services.audit import AuditRecorder
from eventcare.services.exceptions import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class PatientRecord:
    """A patient with the full care record."""

    patient: Patient
    assessment: Assessment
    vitals: list[Vital]
    treatments: list[Treatment]


class PatientService:
    """Patients seen at an event, and their care records."""

    def __init__(
        self,
        session: AsyncSession,
        access: AccessService,
        audit: AuditRecorder,
        clock: Clock,
    ) -> None:
        self.session = session
        self.access = access
        self.audit = audit
        self.clock = clock

    async def list_patients(
        self, user: User, event_id: str
    ) -> list[tuple[Patient, AssessmentStatus]]:
        """Patients of an event the user may open, newest first.

        For non-admins the query is narrowed with the access window and
        every row is then checked against the access policy, so the list
        never shows a patient that would be refused on open.
        """
        event = await self.access.require_event_visible(user, event_id)

        query = (
            select(Patient, Assessment.status)
            .join(Assessment, Assessment.patient_id == Patient.id)
            .where(Patient.event_id == event.id)
            .order_by(Patient.created_at.desc())
        )

        if user.is_admin:
            result = await self.session.execute(query)
            return [(patient, AssessmentStatus(status)) for patient, status in result.all()]

        controller = self.access.controller
        now = self.clock.now()
        ref = event_ref(event)
        day_start, day_end = controller.event_day(ref)
        query = query.where(
            or_(
                Patient.created_at >= controller.window_start(now),
                and_(Patient.created_at >= day_start, Patient.created_at < day_end),
            )
        )
        result = await self.session.execute(query)

        # Listing the event already required an assignment
        actor = actor_for(user)
        return [
            (patient, AssessmentStatus(status))
            for patient, status in result.all()
            if controller.resolve(actor, ref, patient_ref(patient), now, has_assignment=True)
        ]

    async def create_patient(self, user: User, event_id: str, data: PatientCreate) -> PatientRecord:
        """Register a patient together with an empty care record.

        Both rows are written in one transaction.
        """
        event = await self.access.require_event_visible(user, event_id)
        now = self.clock.now()

        patient = Patient(
            **data.model_dump(),
            event_id=event.id,
            created_by=user.id,
            updated_by=user.id,
            created_at=now,
        )
        self.session.add(patient)
        await self.session.flush()

        assessment = Assessment(
            patient_id=patient.id,
            status=AssessmentStatus.INCOMPLETE.value,
            version=1,
            updated_by=user.id,
            created_at=now,
        )
        self.session.add(assessment)
        await self.session.commit()
        await self.session.refresh(patient)
        await self.session.refresh(assessment)

        logger.info(f"Registered patient {patient.id} at event {event.id}")
        await self.audit.log(
            user.id,
            AuditAction.CREATE,
            AuditResource.PATIENT,
            patient.id,
            {"event_id": event.id, "assessment_id": assessment.id},
        )
        return PatientRecord(patient=patient, assessment=assessment, vitals=[], treatments=[])

    async def load_record(self, patient: Patient) -> PatientRecord:
        assessment = await self.get_assessment(patient.id)
        vitals = await self.session.execute(
            select(Vital)
            .where(Vital.assessment_id == assessment.id)
            .order_by(Vital.timestamp.desc())
        )
        treatments = await self.session.execute(
            select(Treatment)
            .where(Treatment.assessment_id == assessment.id)
            .order_by(Treatment.timestamp.desc())
        )
        return PatientRecord(
            patient=patient,
            assessment=assessment,
            vitals=list(vitals.scalars().all()),
            treatments=list(treatments.scalars().all()),
        )

    async def get_assessment(self, patient_id: str) -> Assessment:
        result = await self.session.execute(
            select(Assessment).where(Assessment.patient_id == patient_id)
        )
        assessment = result.scalar_one_or_none()
        if assessment is None:
            # Every patient is created with an assessment
            logger.error(f"Patient {patient_id} has no assessment")
            raise NotFoundError(f"Assessment for patient {patient_id} not found")
        return assessment

    async def get_patient(self, user: User, event_id: str, patient_id: str) -> PatientRecord:
        _, patient = await self.access.require_patient_access(user, event_id, patient_id)
        record = await self.load_record(patient)

        await self.audit.log(
            user.id,
            AuditAction.READ,
            AuditResource.PATIENT,
            patient.id,
            {"event_id": event_id},
        )
        return record

    async def update_patient(
        self, user: User, event_id: str, patient_id: str, data: PatientUpdate
    ) -> PatientRecord:
        _, patient = await self.access.require_patient_access(user, event_id, patient_id)

        changes = data.model_dump(exclude_unset=True)
        for required in ("first_name", "last_name", "dob", "alcohol_involved"):
            if changes.get(required, "") is None:
                del changes[required]
        for field, value in changes.items():
            setattr(patient, field, value)
        patient.updated_by = user.id

        await self.session.commit()
        await self.session.refresh(patient)

        await self.audit.log(
            user.id,
            AuditAction.UPDATE,
            AuditResource.PATIENT,
            patient.id,
            {"event_id": event_id, "fields": sorted(changes)},
        )
        return await self.load_record(patient)

    async def delete_patient(self, user: User, event_id: str, patient_id: str) -> None:
        """Delete a patient and the care record (admin only)."""
        if not user.is_admin:
            raise ForbiddenError()
        _, patient = await self.access.require_patient_access(user, event_id, patient_id)

        assessment_ids = select(Assessment.id).where(Assessment.patient_id == patient.id)
        await self.session.execute(delete(Vital).where(Vital.assessment_id.in_(assessment_ids)))
        await self.session.execute(
            delete(Treatment).where(Treatment.assessment_id.in_(assessment_ids))
        )
        await self.session.execute(delete(Assessment).where(Assessment.patient_id == patient.id))
        await self.session.delete(patient)
        await self.session.commit()

        logger.warning(f"Deleted patient {patient_id} from event {event_id}")
        await self.audit.log(
            user.id,
            AuditAction.DELETE,
            AuditResource.PATIENT,
            patient_id,
            {"event_id": event_id},
        )
