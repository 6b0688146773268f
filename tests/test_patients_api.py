"""Tests for patient endpoints and access enforcement."""

import uuid
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.models.audit_log import AuditLog
from eventcare.models.event import Event
from eventcare.models.patient import Assessment, Patient
from eventcare.models.user import User
from eventcare.policy.clock import FixedClock
from tests.conftest import NOW, create_patient

PATIENT_BODY = {
    "first_name": "Alex",
    "last_name": "Rivera",
    "dob": "1988-03-14T00:00:00Z",
    "alcohol_involved": True,
    "triage_tag": "yellow",
}


def patients_url(event_id: str, patient_id: str | None = None) -> str:
    url = f"/api/v1/events/{event_id}/patients"
    return f"{url}/{patient_id}" if patient_id else url


class TestCreatePatient:
    """Tests for patient registration."""

    @pytest.mark.asyncio
    async def test_creates_patient_with_assessment(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        event: Event,
        assignment,
        emt_user: User,
        emt_headers: dict,
    ) -> None:
        response = await client.post(patients_url(event.id), json=PATIENT_BODY, headers=emt_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["created_by"] == emt_user.id
        assert data["assessment"]["status"] == "incomplete"
        assert data["assessment"]["version"] == 1
        assert data["assessment"]["vitals"] == []

        count = await async_session.scalar(
            select(func.count()).select_from(Assessment).where(Assessment.patient_id == data["id"])
        )
        assert count == 1

    @pytest.mark.asyncio
    async def test_created_at_comes_from_clock(
        self,
        client: AsyncClient,
        event: Event,
        assignment,
        emt_headers: dict,
    ) -> None:
        response = await client.post(patients_url(event.id), json=PATIENT_BODY, headers=emt_headers)

        assert response.json()["created_at"].startswith("2024-07-04T15:00:00")

    @pytest.mark.asyncio
    async def test_unassigned_emt_cannot_create(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        event: Event,
        other_headers: dict,
    ) -> None:
        response = await client.post(
            patients_url(event.id), json=PATIENT_BODY, headers=other_headers
        )

        assert response.status_code == 403
        assert response.json() == {"detail": "Forbidden"}
        assert await async_session.scalar(select(func.count()).select_from(Patient)) == 0

    @pytest.mark.asyncio
    async def test_admin_can_create_without_assignment(
        self, client: AsyncClient, event: Event, admin_headers: dict
    ) -> None:
        response = await client.post(
            patients_url(event.id), json=PATIENT_BODY, headers=admin_headers
        )

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient, event: Event) -> None:
        response = await client.post(patients_url(event.id), json=PATIENT_BODY)

        assert response.status_code == 401


class TestForbiddenIsUniform:
    """Every denial looks the same to a non-admin."""

    @pytest.mark.asyncio
    async def test_denials_are_indistinguishable(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        clock: FixedClock,
        event: Event,
        patient: Patient,
        emt_user: User,
        emt_headers: dict,
        other_headers: dict,
    ) -> None:
        # Registered the day after the event started
        old = await create_patient(async_session, event, emt_user, NOW + timedelta(hours=12))
        clock.advance(timedelta(days=3))

        responses = [
            # Unassigned staff member
            await client.get(patients_url(event.id, patient.id), headers=other_headers),
            # Assigned, but the patient no longer falls in the window
            await client.get(patients_url(event.id, old.id), headers=emt_headers),
            # Nonexistent patient
            await client.get(patients_url(event.id, str(uuid.uuid4())), headers=emt_headers),
            # Nonexistent event
            await client.get(patients_url(str(uuid.uuid4()), patient.id), headers=other_headers),
        ]

        assert {r.status_code for r in responses} == {403}
        assert {r.text for r in responses} == {'{"detail":"Forbidden"}'}

    @pytest.mark.asyncio
    async def test_admin_gets_404_for_missing_patient(
        self, client: AsyncClient, event: Event, admin_headers: dict
    ) -> None:
        response = await client.get(patients_url(event.id, str(uuid.uuid4())), headers=admin_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_patient_from_another_event_is_rejected(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        event: Event,
        patient: Patient,
        admin_user: User,
        admin_headers: dict,
    ) -> None:
        other_event = Event(
            name="Other Event",
            start_date=NOW,
            end_date=NOW,
            state="NJ",
            timezone="America/New_York",
        )
        async_session.add(other_event)
        await async_session.commit()

        response = await client.get(patients_url(other_event.id, patient.id), headers=admin_headers)

        assert response.status_code == 404


class TestGetPatient:
    """Tests for reading a patient record."""

    @pytest.mark.asyncio
    async def test_assigned_emt_reads_within_window(
        self,
        client: AsyncClient,
        event: Event,
        patient: Patient,
        emt_headers: dict,
    ) -> None:
        response = await client.get(patients_url(event.id, patient.id), headers=emt_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == patient.id
        assert data["assessment"]["patient_id"] == patient.id

    @pytest.mark.asyncio
    async def test_window_expiry_then_same_day_rule(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        clock: FixedClock,
        event: Event,
        emt_user: User,
        assignment,
        emt_headers: dict,
    ) -> None:
        # Event starts July 4 13:00 UTC; patient from the start day
        same_day = await create_patient(async_session, event, emt_user, NOW - timedelta(hours=1))
        # Patient registered the next day
        next_day = await create_patient(async_session, event, emt_user, NOW + timedelta(hours=12))

        clock.advance(timedelta(days=5))

        ok = await client.get(patients_url(event.id, same_day.id), headers=emt_headers)
        denied = await client.get(patients_url(event.id, next_day.id), headers=emt_headers)

        assert ok.status_code == 200
        assert denied.status_code == 403

    @pytest.mark.asyncio
    async def test_read_is_audited(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        event: Event,
        patient: Patient,
        emt_user: User,
        emt_headers: dict,
    ) -> None:
        await client.get(patients_url(event.id, patient.id), headers=emt_headers)

        result = await async_session.execute(
            select(AuditLog).where(AuditLog.resource_id == patient.id)
        )
        entries = result.scalars().all()
        assert [(e.action, e.resource, e.user_id) for e in entries] == [
            ("READ", "PATIENT", emt_user.id)
        ]


class TestListPatients:
    """The list shows exactly the patients the caller may open."""

    @pytest.mark.asyncio
    async def test_emt_list_is_window_filtered(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        clock: FixedClock,
        event: Event,
        emt_user: User,
        assignment,
        emt_headers: dict,
        admin_headers: dict,
    ) -> None:
        start_day = await create_patient(
            async_session, event, emt_user, NOW - timedelta(hours=1), first_name="StartDay"
        )
        await create_patient(
            async_session, event, emt_user, NOW + timedelta(hours=12), first_name="NextDay"
        )
        recent = await create_patient(
            async_session, event, emt_user, NOW + timedelta(days=3), first_name="Recent"
        )
        clock.set(NOW + timedelta(days=3, hours=2))

        emt_list = await client.get(patients_url(event.id), headers=emt_headers)
        admin_list = await client.get(patients_url(event.id), headers=admin_headers)

        assert emt_list.status_code == 200
        assert {p["id"] for p in emt_list.json()} == {start_day.id, recent.id}
        assert len(admin_list.json()) == 3
        assert all(p["status"] == "incomplete" for p in admin_list.json())

    @pytest.mark.asyncio
    async def test_unassigned_emt_cannot_list(
        self, client: AsyncClient, event: Event, other_headers: dict
    ) -> None:
        response = await client.get(patients_url(event.id), headers=other_headers)

        assert response.status_code == 403


class TestUpdatePatient:
    """Tests for demographic updates."""

    @pytest.mark.asyncio
    async def test_update_sets_updated_by(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        event: Event,
        patient: Patient,
        admin_user: User,
        admin_headers: dict,
    ) -> None:
        response = await client.patch(
            patients_url(event.id, patient.id),
            json={"triage_tag": "red"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["triage_tag"] == "red"
        await async_session.refresh(patient)
        assert patient.updated_by == admin_user.id


class TestDeletePatient:
    """Only admins delete patients."""

    @pytest.mark.asyncio
    async def test_emt_cannot_delete(
        self, client: AsyncClient, event: Event, patient: Patient, emt_headers: dict
    ) -> None:
        response = await client.delete(patients_url(event.id, patient.id), headers=emt_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_delete_removes_record(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        event: Event,
        patient: Patient,
        admin_headers: dict,
    ) -> None:
        patient_id = patient.id
        response = await client.delete(patients_url(event.id, patient_id), headers=admin_headers)

        assert response.status_code == 204
        assert await async_session.scalar(
            select(func.count()).select_from(Assessment).where(Assessment.patient_id == patient_id)
        ) == 0
        follow_up = await client.get(patients_url(event.id, patient_id), headers=admin_headers)
        assert follow_up.status_code == 404
