"""Integration tests for Settings API."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import ProfileModel
from tests.conftest import FakeIdentityService, TEST_USER_ID


class TestSettingsAPI:
    """Integration tests for Settings API."""

    @pytest.mark.asyncio
    async def test_defaults(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.get("/api/v1/settings")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "email_notifications": True,
            "push_notifications": False,
            "visibility": "everyone",
            "location": "El Paso, TX",
            "max_distance_miles": 25,
        }

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_settings(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.patch(
            "/api/v1/settings",
            json={"visibility": "hidden", "max_distance_miles": 50},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["visibility"] == "hidden"
        assert data["max_distance_miles"] == 50
        assert data["email_notifications"] is True

        again = await authenticated_client.get("/api/v1/settings")
        assert again.json()["data"]["visibility"] == "hidden"

    @pytest.mark.asyncio
    async def test_rejects_distance_outside_options(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.patch(
            "/api/v1/settings", json={"max_distance_miles": 30}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_delete_account(
        self,
        authenticated_client: AsyncClient,
        db_session: AsyncSession,
        identity: FakeIdentityService,
        seed_profile,
    ) -> None:
        await seed_profile(TEST_USER_ID)

        response = await authenticated_client.delete("/api/v1/settings/account")

        assert response.status_code == 204
        assert await db_session.get(ProfileModel, TEST_USER_ID) is None
        assert TEST_USER_ID not in identity.users
