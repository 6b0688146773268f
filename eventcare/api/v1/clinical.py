"""Vital sign and treatment endpoints."""

from fastapi import APIRouter, status

from eventcare.api.deps import Access, Audit, CurrentUser, DbSession, RequestClock
from eventcare.api.errors import service_errors
from eventcare.schemas.clinical import TreatmentCreate, TreatmentRead, VitalCreate, VitalRead
from eventcare.services.clinical import ClinicalService

router = APIRouter()


@router.get("/{patient_id}/vitals", response_model=list[VitalRead])
async def list_vitals(
    patient_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> list[VitalRead]:
    with service_errors():
        vitals = await ClinicalService(session, access, audit, clock).list_vitals(
            user, patient_id
        )
    return [VitalRead.model_validate(v) for v in vitals]


@router.post(
    "/{patient_id}/vitals",
    response_model=VitalRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_vital(
    patient_id: str,
    data: VitalCreate,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> VitalRead:
    """Record vital signs. Refused with 423 once the record is complete."""
    with service_errors():
        vital = await ClinicalService(session, access, audit, clock).add_vital(
            user, patient_id, data
        )
    return VitalRead.model_validate(vital)


@router.get("/{patient_id}/treatments", response_model=list[TreatmentRead])
async def list_treatments(
    patient_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> list[TreatmentRead]:
    with service_errors():
        treatments = await ClinicalService(session, access, audit, clock).list_treatments(
            user, patient_id
        )
    return [TreatmentRead.model_validate(t) for t in treatments]


@router.post(
    "/{patient_id}/treatments",
    response_model=TreatmentRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_treatment(
    patient_id: str,
    data: TreatmentCreate,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> TreatmentRead:
    with service_errors():
        treatment = await ClinicalService(session, access, audit, clock).add_treatment(
            user, patient_id, data
        )
    return TreatmentRead.model_validate(treatment)
