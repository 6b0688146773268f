"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from eventcare.api.v1 import (
    assessments,
    audit,
    auth,
    clinical,
    events,
    health,
    patients,
    staff,
    users,
    venues,
)

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Authentication
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"],
)

# Staff accounts
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"],
)

api_router.include_router(
    venues.router,
    prefix="/venues",
    tags=["venues"],
)

# Events and their staff and patients
api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"],
)

api_router.include_router(
    staff.router,
    prefix="/events",
    tags=["staff"],
)

api_router.include_router(
    patients.router,
    prefix="/events",
    tags=["patients"],
)

# Care record
api_router.include_router(
    assessments.router,
    prefix="/patients",
    tags=["assessments"],
)

api_router.include_router(
    clinical.router,
    prefix="/patients",
    tags=["clinical"],
)

# Audit
api_router.include_router(
    audit.router,
    prefix="/audit",
    tags=["audit"],
)
