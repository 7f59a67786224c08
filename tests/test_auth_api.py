"""
Integration tests for authentication endpoints
"""

import pytest

import cleanbooker.services.auth_service as auth_module
from conftest import register, registration_payload

pytestmark = pytest.mark.integration


class TestHealthEndpoint:
    async def test_health_check(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_root_endpoint(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "CleanBooker"


class TestRegister:
    async def test_register_returns_tokens_in_envelope(self, client):
        response = await client.post(
            "/api/v1/auth/register", json=registration_payload("Owner@Sparkle-Cleaning.com")
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Business registered successfully"
        assert body["data"]["business"]["email"] == "owner@sparkle-cleaning.com"
        assert body["data"]["access_token"]
        assert body["data"]["refresh_token"]
        assert body["meta"]["request_id"] == response.headers["X-Request-ID"]

    async def test_duplicate_email_conflicts(self, client):
        await register(client, "owner@sparkle-cleaning.com")
        response = await client.post(
            "/api/v1/auth/register", json=registration_payload("OWNER@sparkle-cleaning.com")
        )

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Business already exists with this email"

    async def test_duplicate_email_at_insert_conflicts(self, client, monkeypatch):
        """A registration that loses the race for an email gets 409, not 500"""
        await register(client, "owner@sparkle-cleaning.com")

        async def email_looks_free(*args, **kwargs):
            return None

        monkeypatch.setattr(auth_module, "ensure_email_available", email_looks_free)
        response = await client.post(
            "/api/v1/auth/register", json=registration_payload("owner@sparkle-cleaning.com")
        )

        assert response.status_code == 409
        assert response.json()["message"] == auth_module.DUPLICATE_EMAIL

    async def test_invalid_payload_envelope(self, client):
        payload = registration_payload()
        payload["password"] = "short"
        del payload["phone"]

        response = await client.post("/api/v1/auth/register", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        fields = {error.split(":")[0] for error in body["errors"]}
        assert {"password", "phone"} <= fields


class TestLogin:
    async def test_login(self, client):
        await register(client, "owner@sparkle-cleaning.com")
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "owner@sparkle-cleaning.com", "password": "Password123"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["token_type"] == "bearer"

    async def test_wrong_password(self, client):
        await register(client, "owner@sparkle-cleaning.com")
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "owner@sparkle-cleaning.com", "password": "WrongPassword"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    async def test_unknown_email(self, client):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@sparkle-cleaning.com", "password": "Password123"},
        )

        assert response.status_code == 401


class TestRefreshRotation:
    async def test_refresh_rotates_and_revokes_old_token(self, client):
        tokens = await register(client)

        response = await client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert response.status_code == 200
        rotated = response.json()["data"]
        assert rotated["refresh_token"] != tokens["refresh_token"]

        reused = await client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert reused.status_code == 401

        again = await client.post(
            "/api/v1/auth/refresh", json={"refresh_token": rotated["refresh_token"]}
        )
        assert again.status_code == 200

    async def test_access_token_is_not_a_refresh_token(self, client):
        tokens = await register(client)

        response = await client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["access_token"]}
        )

        assert response.status_code == 401

    async def test_logout_revokes_refresh_token(self, client):
        tokens = await register(client)
        headers = {"Authorization": f"Bearer {tokens['access_token']}"}

        response = await client.post(
            "/api/v1/auth/logout",
            json={"refresh_token": tokens["refresh_token"]},
            headers=headers,
        )
        assert response.status_code == 200

        response = await client.post(
            "/api/v1/auth/refresh", json={"refresh_token": tokens["refresh_token"]}
        )
        assert response.status_code == 401


class TestProfile:
    async def test_requires_token(self, client):
        response = await client.get("/api/v1/auth/profile")

        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_garbage_token(self, client):
        response = await client.get(
            "/api/v1/auth/profile", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    async def test_profile(self, client):
        tokens = await register(client, "owner@sparkle-cleaning.com")
        response = await client.get(
            "/api/v1/auth/profile",
            headers={"Authorization": f"Bearer {tokens['access_token']}"},
        )

        assert response.status_code == 200
        profile = response.json()["data"]
        assert profile["email"] == "owner@sparkle-cleaning.com"
        assert profile["service_area"] == ["62701"]
