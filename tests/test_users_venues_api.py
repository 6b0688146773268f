"""Tests for staff account and venue management."""

import pytest
from httpx import AsyncClient

from eventcare.models.event import Event
from eventcare.models.user import User


class TestUsers:
    """User management is admin only, except reading oneself."""

    @pytest.mark.asyncio
    async def test_admin_creates_user(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.post(
            "/api/v1/users",
            json={
                "email": "New.Medic@EventCare.local",
                "name": "New Medic",
                "password": "securepass1",
                "region": "North",
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "new.medic@eventcare.local"
        assert data["role"] == "EMT"
        assert "hashed_password" not in data

        login = await client.post(
            "/api/v1/auth/login",
            json={"email": "new.medic@eventcare.local", "password": "securepass1"},
        )
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(
        self, client: AsyncClient, emt_user: User, admin_headers: dict
    ) -> None:
        response = await client.post(
            "/api/v1/users",
            json={"email": emt_user.email, "name": "Dup", "password": "securepass1"},
            headers=admin_headers,
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_emt_cannot_list_users(self, client: AsyncClient, emt_headers: dict) -> None:
        response = await client.get("/api/v1/users", headers=emt_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_emt_reads_self_only(
        self,
        client: AsyncClient,
        emt_user: User,
        admin_user: User,
        emt_headers: dict,
    ) -> None:
        own = await client.get(f"/api/v1/users/{emt_user.id}", headers=emt_headers)
        other = await client.get(f"/api/v1/users/{admin_user.id}", headers=emt_headers)

        assert own.status_code == 200
        assert other.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_promotes_user(
        self, client: AsyncClient, emt_user: User, admin_headers: dict
    ) -> None:
        response = await client.patch(
            f"/api/v1/users/{emt_user.id}",
            json={"role": "ADMIN", "name": None},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["role"] == "ADMIN"
        assert response.json()["name"] == "Assigned EMT"


class TestVenues:
    """Any user reads venues; admins write them."""

    VENUE = {"name": "Riverside Park", "address": "1 River Rd", "city": "Albany", "state": "NY"}

    @pytest.mark.asyncio
    async def test_create_and_read(
        self, client: AsyncClient, admin_headers: dict, emt_headers: dict
    ) -> None:
        created = await client.post("/api/v1/venues", json=self.VENUE, headers=admin_headers)
        assert created.status_code == 201

        listed = await client.get("/api/v1/venues", headers=emt_headers)
        assert [v["name"] for v in listed.json()] == ["Riverside Park"]

    @pytest.mark.asyncio
    async def test_emt_cannot_create(self, client: AsyncClient, emt_headers: dict) -> None:
        response = await client.post("/api/v1/venues", json=self.VENUE, headers=emt_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_venue_in_use_cannot_be_deleted(
        self,
        client: AsyncClient,
        event: Event,
        admin_headers: dict,
    ) -> None:
        venue = (await client.post("/api/v1/venues", json=self.VENUE, headers=admin_headers)).json()
        await client.patch(
            f"/api/v1/events/{event.id}", json={"venue_id": venue["id"]}, headers=admin_headers
        )

        blocked = await client.delete(f"/api/v1/venues/{venue['id']}", headers=admin_headers)
        assert blocked.status_code == 409

        detail = await client.get(f"/api/v1/events/{event.id}", headers=admin_headers)
        assert detail.json()["venue"]["name"] == "Riverside Park"
        assert detail.json()["can_edit"] is True
