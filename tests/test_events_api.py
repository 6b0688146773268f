"""Tests for event and staff assignment endpoints."""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventcare.models.event import Event, StaffAssignment
from eventcare.models.patient import Assessment, Patient
from eventcare.models.user import User

EVENT_BODY = {
    "name": "City Marathon",
    "start_date": "2024-10-06T11:00:00Z",
    "end_date": "2024-10-06T19:00:00Z",
    "state": "IL",
    "timezone": "America/Chicago",
}


class TestEventCrud:
    """Events are managed by admins."""

    @pytest.mark.asyncio
    async def test_admin_creates_event(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.post("/api/v1/events", json=EVENT_BODY, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["timezone"] == "America/Chicago"

    @pytest.mark.asyncio
    async def test_emt_cannot_create_event(self, client: AsyncClient, emt_headers: dict) -> None:
        response = await client.post("/api/v1/events", json=EVENT_BODY, headers=emt_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_end_before_start_rejected(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        body = {**EVENT_BODY, "end_date": "2024-10-05T11:00:00Z"}
        response = await client.post("/api/v1/events", json=body, headers=admin_headers)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_timezone_rejected(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        body = {**EVENT_BODY, "timezone": "Moon/Base"}
        response = await client.post("/api/v1/events", json=body, headers=admin_headers)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_end_before_stored_start_rejected(
        self, client: AsyncClient, event: Event, admin_headers: dict
    ) -> None:
        response = await client.patch(
            f"/api/v1/events/{event.id}",
            json={"end_date": "2020-01-01T00:00:00Z"},
            headers=admin_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_event(
        self, client: AsyncClient, event: Event, admin_headers: dict
    ) -> None:
        response = await client.patch(
            f"/api/v1/events/{event.id}", json={"notes": "Gate B"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["notes"] == "Gate B"

    @pytest.mark.asyncio
    async def test_delete_event_cascades(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        event: Event,
        patient: Patient,
        admin_headers: dict,
    ) -> None:
        response = await client.delete(f"/api/v1/events/{event.id}", headers=admin_headers)

        assert response.status_code == 204
        for model in (Event, StaffAssignment, Patient, Assessment):
            assert await async_session.scalar(select(func.count()).select_from(model)) == 0


class TestEventVisibility:
    """Reads depend on assignment."""

    @pytest.mark.asyncio
    async def test_list_events_by_role(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        event: Event,
        assignment,
        emt_headers: dict,
        other_headers: dict,
        admin_headers: dict,
    ) -> None:
        other = Event(
            name="Unstaffed",
            start_date=event.start_date,
            end_date=event.end_date,
            state="NY",
            timezone="UTC",
        )
        async_session.add(other)
        await async_session.commit()

        admin_ids = {e["id"] for e in (await client.get("/api/v1/events", headers=admin_headers)).json()}
        emt_ids = [e["id"] for e in (await client.get("/api/v1/events", headers=emt_headers)).json()]
        other_ids = (await client.get("/api/v1/events", headers=other_headers)).json()

        assert admin_ids == {event.id, other.id}
        assert emt_ids == [event.id]
        assert other_ids == []

    @pytest.mark.asyncio
    async def test_event_detail(
        self,
        client: AsyncClient,
        event: Event,
        patient: Patient,
        emt_user: User,
        emt_headers: dict,
    ) -> None:
        response = await client.get(f"/api/v1/events/{event.id}", headers=emt_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["patient_count"] == 1
        assert data["staff_count"] == 1
        assert data["staff"][0]["user"]["email"] == emt_user.email
        assert data["can_edit"] is False

    @pytest.mark.asyncio
    async def test_unassigned_detail_forbidden(
        self, client: AsyncClient, event: Event, other_headers: dict
    ) -> None:
        response = await client.get(f"/api/v1/events/{event.id}", headers=other_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_missing_event_404(
        self, client: AsyncClient, admin_headers: dict
    ) -> None:
        response = await client.get(f"/api/v1/events/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == 404


class TestStaffAssignments:
    """Only admins manage staff."""

    @pytest.mark.asyncio
    async def test_assign_and_list(
        self,
        client: AsyncClient,
        event: Event,
        other_emt: User,
        admin_headers: dict,
        other_headers: dict,
    ) -> None:
        # Not yet assigned
        before = await client.get(f"/api/v1/events/{event.id}/staff", headers=other_headers)
        assert before.status_code == 403

        response = await client.post(
            f"/api/v1/events/{event.id}/staff",
            json={"user_id": other_emt.id, "role": "Lead"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["user"]["id"] == other_emt.id

        after = await client.get(f"/api/v1/events/{event.id}/staff", headers=other_headers)
        assert after.status_code == 200
        assert [s["role"] for s in after.json()] == ["Lead"]

    @pytest.mark.asyncio
    async def test_duplicate_assignment_conflicts(
        self,
        client: AsyncClient,
        event: Event,
        assignment: StaffAssignment,
        emt_user: User,
        admin_headers: dict,
    ) -> None:
        response = await client.post(
            f"/api/v1/events/{event.id}/staff",
            json={"user_id": emt_user.id, "role": "EMT"},
            headers=admin_headers,
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_emt_cannot_assign(
        self,
        client: AsyncClient,
        event: Event,
        assignment: StaffAssignment,
        other_emt: User,
        emt_headers: dict,
    ) -> None:
        response = await client.post(
            f"/api/v1/events/{event.id}/staff",
            json={"user_id": other_emt.id, "role": "EMT"},
            headers=emt_headers,
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_assign_unknown_user(
        self, client: AsyncClient, event: Event, admin_headers: dict
    ) -> None:
        response = await client.post(
            f"/api/v1/events/{event.id}/staff",
            json={"user_id": str(uuid.uuid4()), "role": "EMT"},
            headers=admin_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unassign_revokes_access(
        self,
        client: AsyncClient,
        event: Event,
        assignment: StaffAssignment,
        patient: Patient,
        admin_headers: dict,
        emt_headers: dict,
    ) -> None:
        patient_url = f"/api/v1/events/{event.id}/patients/{patient.id}"
        assert (await client.get(patient_url, headers=emt_headers)).status_code == 200

        response = await client.delete(
            f"/api/v1/events/{event.id}/staff/{assignment.id}", headers=admin_headers
        )
        assert response.status_code == 204

        assert (await client.get(patient_url, headers=emt_headers)).status_code == 403
