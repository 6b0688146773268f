"""Vital signs and treatments attached to a care record."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.models.patient import Treatment, Vital
from eventcare.models.user import User
from eventcare.policy.clock import Clock
from eventcare.policy.lifecycle import AssessmentState, check_record_unlocked
from eventcare.schemas.clinical import TreatmentCreate, VitalCreate
from eventcare.services.access import AccessService
from eventcare.services.audit import AuditRecorder
from eventcare.services.exceptions import TransitionRejectedError
from eventcare.services.patients import PatientService


class ClinicalService:
    """Adds and lists vitals and treatments.

    Additions follow the assessment lock: once the record is complete only
    an admin may add to it.
    """

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
        self.patients = PatientService(session, access, audit, clock)

    async def _unlocked_assessment(self, user: User, patient_id: str):
        _, patient = await self.access.require_patient_access_by_id(user, patient_id)
        assessment = await self.patients.get_assessment(patient.id)
        rejected = check_record_unlocked(AssessmentState.from_record(assessment), user.user_role)
        if rejected is not None:
            raise TransitionRejectedError(rejected)
        return assessment

    async def list_vitals(self, user: User, patient_id: str) -> list[Vital]:
        _, patient = await self.access.require_patient_access_by_id(user, patient_id)
        assessment = await self.patients.get_assessment(patient.id)
        result = await self.session.execute(
            select(Vital)
            .where(Vital.assessment_id == assessment.id)
            .order_by(Vital.timestamp.desc())
        )
        return list(result.scalars().all())

    async def add_vital(self, user: User, patient_id: str, data: VitalCreate) -> Vital:
        assessment = await self._unlocked_assessment(user, patient_id)
        now = self.clock.now()

        values = data.model_dump()
        values["timestamp"] = values["timestamp"] or now
        vital = Vital(**values, assessment_id=assessment.id, created_by=user.id, created_at=now)
        self.session.add(vital)
        await self.session.commit()
        await self.session.refresh(vital)

        await self.audit.log(
            user.id,
            AuditAction.CREATE,
            AuditResource.VITAL,
            vital.id,
            {"patient_id": patient_id, "assessment_id": assessment.id},
        )
        return vital

    async def list_treatments(self, user: User, patient_id: str) -> list[Treatment]:
        _, patient = await self.access.require_patient_access_by_id(user, patient_id)
        assessment = await self.patients.get_assessment(patient.id)
        result = await self.session.execute(
            select(Treatment)
            .where(Treatment.assessment_id == assessment.id)
            .order_by(Treatment.timestamp.desc())
        )
        return list(result.scalars().all())

    async def add_treatment(self, user: User, patient_id: str, data: TreatmentCreate) -> Treatment:
        assessment = await self._unlocked_assessment(user, patient_id)
        now = self.clock.now()

        values = data.model_dump()
        values["timestamp"] = values["timestamp"] or now
        treatment = Treatment(
            **values, assessment_id=assessment.id, created_by=user.id, created_at=now
        )
        self.session.add(treatment)
        await self.session.commit()
        await self.session.refresh(treatment)

        await self.audit.log(
            user.id,
            AuditAction.CREATE,
            AuditResource.TREATMENT,
            treatment.id,
            {"patient_id": patient_id, "assessment_id": assessment.id, "name": treatment.name},
        )
        return treatment
