"""Patient endpoints nested under an event."""

from fastapi import APIRouter, Depends, Response, status

from eventcare.api.deps import (
    Access,
    Audit,
    CurrentUser,
    DbSession,
    RequestClock,
    require_permissions,
)
from eventcare.api.errors import service_errors
from eventcare.schemas.assessment import AssessmentDetail
from eventcare.schemas.clinical import TreatmentRead, VitalRead
from eventcare.schemas.patient import (
    PatientCreate,
    PatientDetail,
    PatientListItem,
    PatientRead,
    PatientUpdate,
)
from eventcare.services.patients import PatientRecord, PatientService
from eventcare.services.rbac import Permission

router = APIRouter()


def to_detail(record: PatientRecord) -> PatientDetail:
    """Build the patient detail response from a loaded record."""
    assessment = AssessmentDetail.model_validate(record.assessment).model_copy(
        update={
            "vitals": [VitalRead.model_validate(v) for v in record.vitals],
            "treatments": [TreatmentRead.model_validate(t) for t in record.treatments],
        }
    )
    return PatientDetail(
        **PatientRead.model_validate(record.patient).model_dump(),
        assessment=assessment,
    )


@router.get(
    "/{event_id}/patients",
    response_model=list[PatientListItem],
    summary="List patients",
    description="Assigned EMTs only see patients inside the access window",
)
async def list_patients(
    event_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> list[PatientListItem]:
    with service_errors():
        rows = await PatientService(session, access, audit, clock).list_patients(user, event_id)
    return [
        PatientListItem(**PatientRead.model_validate(patient).model_dump(), status=status_)
        for patient, status_ in rows
    ]


@router.post(
    "/{event_id}/patients",
    response_model=PatientDetail,
    status_code=status.HTTP_201_CREATED,
)
async def create_patient(
    event_id: str,
    data: PatientCreate,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> PatientDetail:
    """Register a patient. The care record is created with it."""
    with service_errors():
        record = await PatientService(session, access, audit, clock).create_patient(
            user, event_id, data
        )
    return to_detail(record)


@router.get("/{event_id}/patients/{patient_id}", response_model=PatientDetail)
async def get_patient(
    event_id: str,
    patient_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> PatientDetail:
    with service_errors():
        record = await PatientService(session, access, audit, clock).get_patient(
            user, event_id, patient_id
        )
    return to_detail(record)


@router.patch("/{event_id}/patients/{patient_id}", response_model=PatientDetail)
async def update_patient(
    event_id: str,
    patient_id: str,
    data: PatientUpdate,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> PatientDetail:
    with service_errors():
        record = await PatientService(session, access, audit, clock).update_patient(
            user, event_id, patient_id, data
        )
    return to_detail(record)


@router.delete(
    "/{event_id}/patients/{patient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permissions(Permission.PATIENTS_DELETE))],
)
async def delete_patient(
    event_id: str,
    patient_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> Response:
    with service_errors():
        await PatientService(session, access, audit, clock).delete_patient(
            user, event_id, patient_id
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
