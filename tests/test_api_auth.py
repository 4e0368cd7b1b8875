"""
Authentication API Tests
"""

import pytest


class TestRegister:
    """Tests for POST /auth/register."""

    @pytest.mark.asyncio
    async def test_register_returns_user_and_token(self, client):
        response = await client.post(
            "/api/v1/auth/register",
            json={"name": "Ada", "email": "Ada@Example.com", "password": "secret1", "role": "creator"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "ada@example.com"
        assert body["data"]["user"]["role"] == "creator"
        assert "password_hash" not in body["data"]["user"]
        assert body["data"]["token"]

    @pytest.mark.asyncio
    async def test_role_defaults_to_supporter(self, client, register):
        data = await register("sam@example.com", role=None)
        assert data["user"]["role"] == "supporter"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, client, register):
        await register("dup@example.com")

        response = await client.post(
            "/api/v1/auth/register",
            json={"name": "Again", "email": "DUP@example.com", "password": "secret1"},
        )

        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "User already exists with this email"}

    @pytest.mark.asyncio
    async def test_validation_errors_are_listed(self, client):
        response = await client.post(
            "/api/v1/auth/register",
            json={"name": "", "email": "not-an-email", "password": "123"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        fields = {error["field"] for error in body["errors"]}
        assert {"name", "email", "password"} <= fields


class TestLogin:
    """Tests for POST /auth/login, /auth/token and GET /auth/me."""

    @pytest.mark.asyncio
    async def test_login_and_me(self, client, register):
        await register("ada@example.com", role="creator")

        login = await client.post(
            "/api/v1/auth/login",
            json={"email": "ADA@example.com", "password": "secret1"},
        )
        token = login.json()["data"]["token"]
        me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert login.status_code == 200
        assert me.status_code == 200
        assert me.json()["data"]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_wrong_password(self, client, register):
        await register("ada@example.com")

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "ada@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Incorrect email or password"}

    @pytest.mark.asyncio
    async def test_oauth2_token_form(self, client, register):
        await register("ada@example.com")

        response = await client.post(
            "/api/v1/auth/token",
            data={"username": "ada@example.com", "password": "secret1"},
        )

        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client):
        response = await client.get("/api/v1/auth/me")

        assert response.status_code == 401
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_logout(self, client, register):
        data = await register("ada@example.com")

        response = await client.post(
            "/api/v1/auth/logout",
            headers={"Authorization": f"Bearer {data['token']}"},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"
