"""Assessment (patient care record) endpoints."""

from fastapi import APIRouter

from eventcare.api.deps import Access, Audit, CurrentUser, DbSession, RequestClock
from eventcare.api.errors import service_errors
from eventcare.api.v1.patients import to_detail
from eventcare.schemas.assessment import AssessmentDetail, AssessmentUpdate
from eventcare.services.assessments import AssessmentService

router = APIRouter()


@router.get("/{patient_id}/assessment", response_model=AssessmentDetail)
async def get_assessment(
    patient_id: str,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> AssessmentDetail:
    with service_errors():
        record = await AssessmentService(session, access, audit, clock).get_assessment(
            user, patient_id
        )
    return to_detail(record).assessment


@router.patch(
    "/{patient_id}/assessment",
    response_model=AssessmentDetail,
    responses={
        409: {"description": "Record changed since expected_version"},
        422: {"description": "Missing field required to complete the record"},
        423: {"description": "Record is complete and locked"},
    },
)
async def update_assessment(
    patient_id: str,
    data: AssessmentUpdate,
    user: CurrentUser,
    session: DbSession,
    access: Access,
    audit: Audit,
    clock: RequestClock,
) -> AssessmentDetail:
    """Apply a partial change to the care record.

    The body must carry the ``version`` the client last read as
    ``expected_version``. Signature timestamps are set by the server.
    """
    with service_errors():
        record = await AssessmentService(session, access, audit, clock).update_assessment(
            user, patient_id, data
        )
    return to_detail(record).assessment
