import pytest
from httpx import AsyncClient

from app.core.config import settings
from app.models import User
from app.services.token_service import token_service

PROFILE_URL = "/api/v1/profile"


@pytest.mark.anyio
class TestProfile:
    async def test_read_profile(self, client: AsyncClient, auth_headers, user: User):
        response = await client.get(PROFILE_URL, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == user.id
        assert data["email"] == user.email

    async def test_read_profile_with_bare_token(self, client: AsyncClient, token: str, user: User):
        response = await client.get(PROFILE_URL, headers={"Authorization": token})

        assert response.status_code == 200
        assert response.json()["data"]["id"] == user.id

    async def test_read_profile_unauthenticated(self, client: AsyncClient):
        response = await client.get(PROFILE_URL)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    async def test_read_profile_of_deleted_user(self, client: AsyncClient, auth_headers, user):
        await client.delete(f"/api/v1/users/{user.id}", headers=auth_headers)

        response = await client.get(PROFILE_URL, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "user_not_found"

    async def test_read_profile_of_unknown_subject(self, client: AsyncClient):
        token = token_service.issue(424242, "ghost@example.com", settings.jwt_secret)

        response = await client.get(PROFILE_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404

    async def test_update_profile(self, client: AsyncClient, auth_headers, user: User):
        response = await client.put(PROFILE_URL, json={"name": "New Name"}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        assert body["data"]["id"] == user.id
        assert body["data"]["name"] == "New Name"

    async def test_update_profile_email_conflict(
        self, client: AsyncClient, auth_headers, other_user: User
    ):
        response = await client.put(
            PROFILE_URL, json={"email": other_user.email}, headers=auth_headers
        )

        assert response.status_code == 409
        assert response.json()["error"] == "update_failed"

    async def test_update_profile_invalid_email(self, client: AsyncClient, auth_headers):
        response = await client.put(
            PROFILE_URL, json={"email": "not-an-email"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
