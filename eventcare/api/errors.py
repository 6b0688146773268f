"""Translation of service exceptions into HTTP errors."""

from contextlib import contextmanager
from typing import Iterator

from fastapi import HTTPException, status

from eventcare.policy.lifecycle import RejectionReason
from eventcare.services.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    TransitionRejectedError,
)

def rejection_to_http(exc: TransitionRejectedError) -> HTTPException:
    rejection = exc.rejection
    if rejection.reason is RejectionReason.RECORD_LOCKED:
        return HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail={"code": rejection.reason.value, "message": rejection.message},
        )
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "code": rejection.reason.value,
            "field": rejection.field,
            "message": rejection.message,
        },
    )


@contextmanager
def service_errors() -> Iterator[None]:
    """Raise the matching HTTPException for a service-layer error.

    Usage:
        with service_errors():
            return await service.get_event(user, event_id)
    """
    try:
        yield
    except ForbiddenError as exc:
        # Same body for every denial
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden") from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except InvalidInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    except TransitionRejectedError as exc:
        raise rejection_to_http(exc) from exc
