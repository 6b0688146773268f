"""Assessment (patient care record) reads and versioned writes."""

import logging

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.models.audit_log import AuditAction, AuditResource
from eventcare.models.patient import Assessment
from eventcare.models.user import User
from eventcare.policy.clock import Clock
from eventcare.policy.lifecycle import (
    Accepted,
    AssessmentState,
    AssessmentStatus,
    Rejected,
    check_record_unlocked,
    validate_transition,
)
from eventcare.schemas.assessment import AssessmentUpdate
from eventcare.services.access import AccessService
from eventcare.services.audit import AuditRecorder
from eventcare.services.exceptions import ConflictError, TransitionRejectedError
from eventcare.services.patients import PatientRecord, PatientService

logger = logging.getLogger(__name__)


def _column_values(state: AssessmentState) -> dict:
    values = state.as_dict()
    values["status"] = state.status.value
    values["disposition"] = state.disposition.value if state.disposition else None
    return values


class AssessmentService:
    """Applies lifecycle-checked changes to a patient's assessment."""

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

    async def get_assessment(self, user: User, patient_id: str) -> PatientRecord:
        _, patient = await self.access.require_patient_access_by_id(user, patient_id)
        record = await self.patients.load_record(patient)

        await self.audit.log(
            user.id,
            AuditAction.READ,
            AuditResource.ASSESSMENT,
            record.assessment.id,
            {"patient_id": patient.id},
        )
        return record

    async def update_assessment(
        self, user: User, patient_id: str, data: AssessmentUpdate
    ) -> PatientRecord:
        """Validate and apply a partial change.

        The write only succeeds if the stored version still equals
        ``data.expected_version``; the version is then incremented.

        Raises:
            ForbiddenError: If the user may not access the patient
            ConflictError: If the record changed since the client read it
            TransitionRejectedError: If the lifecycle refuses the change
            InvalidAssessmentState: If the stored record is corrupt
        """
        _, patient = await self.access.require_patient_access_by_id(user, patient_id)
        assessment = await self.patients.get_assessment(patient.id)
        current = AssessmentState.from_record(assessment)

        # A locked record is refused before the version is compared
        locked = check_record_unlocked(current, user.user_role)
        if locked is not None:
            self._log_rejection(user, assessment, locked)
            raise TransitionRejectedError(locked)

        if assessment.version != data.expected_version:
            raise ConflictError(
                f"Assessment was modified (version {assessment.version}, "
                f"expected {data.expected_version})"
            )

        now = self.clock.now()
        result = validate_transition(current, data.changes(), user.user_role, now)

        if not isinstance(result, Accepted):
            self._log_rejection(user, assessment, result)
            raise TransitionRejectedError(result)

        new_version = data.expected_version + 1
        outcome = await self.session.execute(
            update(Assessment)
            .where(Assessment.id == assessment.id)
            .where(Assessment.version == data.expected_version)
            .values(
                **_column_values(result.state),
                version=new_version,
                updated_by=user.id,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        if outcome.rowcount != 1:
            await self.session.rollback()
            raise ConflictError("Assessment was modified by another request")

        await self.session.commit()
        await self.session.refresh(assessment)

        if current.is_complete and not result.state.is_complete:
            logger.warning(f"Assessment {assessment.id} reopened by admin {user.id}")
        elif result.state.status is AssessmentStatus.COMPLETE and not current.is_complete:
            logger.info(f"Assessment {assessment.id} completed")

        await self.audit.log(
            user.id,
            AuditAction.UPDATE,
            AuditResource.ASSESSMENT,
            assessment.id,
            {
                "patient_id": patient.id,
                "status": result.state.status.value,
                "changed_fields": list(result.changed_fields),
                "version": new_version,
            },
        )
        return await self.patients.load_record(patient)

    def _log_rejection(self, user: User, assessment: Assessment, rejection: Rejected) -> None:
        logger.info(
            f"Rejected change to assessment {assessment.id}: "
            f"{rejection.reason.value} {rejection.field or ''}".rstrip(),
            extra={
                "user_id": user.id,
                "action": "assessment_rejected",
                "patient_id": assessment.patient_id,
            },
        )
