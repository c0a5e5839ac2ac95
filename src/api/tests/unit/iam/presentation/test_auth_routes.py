"""Unit tests for the authentication routes.

Runs the full application on the in-memory storage adapter.
"""

from __future__ import annotations

from fastapi import status
from fastapi.testclient import TestClient

from shared_kernel.auth import TokenClaims, TokenService

SIGNUP = {
    "username": "alice",
    "email": "alice@example.com",
    "password": "secret1",
}


def _signup(client: TestClient, **overrides):
    return client.post("/auth/signup", json={**SIGNUP, **overrides})


class TestSignupRoute:
    """Tests for POST /auth/signup."""

    def test_returns_user_and_sets_cookie(self, app_client):
        response = _signup(app_client, displayName="Alice A.")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "user": {
                "id": "1",
                "username": "alice",
                "email": "alice@example.com",
                "displayName": "Alice A.",
            },
        }
        assert "auth-token" in response.cookies

    def test_cookie_attributes(self, app_client):
        response = _signup(app_client)

        header = response.headers["set-cookie"]
        assert "HttpOnly" in header
        assert "Max-Age=604800" in header
        assert "SameSite=lax" in header
        assert "Path=/" in header

    def test_cookie_holds_valid_session_token(self, app_client, token_service):
        response = _signup(app_client)

        claims = token_service.verify_token(response.cookies["auth-token"])
        assert claims == TokenClaims(id=1, username="alice", email="alice@example.com")

    def test_missing_fields(self, app_client):
        response = app_client.post("/auth/signup", json={"username": "alice"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Username, email and password are required"}

    def test_oversized_email(self, app_client):
        response = _signup(app_client, email="a" * 251 + "@b.co")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Email must be at most 255 characters"}

    def test_short_password(self, app_client):
        response = _signup(app_client, password="12345")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Password must be at least 6 characters"

    def test_duplicate_username(self, app_client):
        _signup(app_client)

        response = _signup(app_client, email="other@example.com")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Username already taken"
        assert "set-cookie" not in response.headers

    def test_duplicate_email(self, app_client):
        _signup(app_client)

        response = _signup(app_client, username="alice2")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Email already registered"

    def test_non_string_field_is_a_validation_error(self, app_client):
        response = _signup(app_client, username=123)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith("Invalid request: username")


class TestLoginRoute:
    """Tests for POST /auth/login."""

    def test_login_with_email(self, app_client):
        _signup(app_client)
        app_client.cookies.clear()

        response = app_client.post(
            "/auth/login",
            json={"email": "alice@example.com", "password": "secret1"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True
        assert response.json()["user"]["username"] == "alice"
        assert "auth-token" in response.cookies

    def test_login_with_username_in_email_field(self, app_client):
        _signup(app_client)

        response = app_client.post(
            "/auth/login", json={"email": "alice", "password": "secret1"}
        )

        assert response.status_code == status.HTTP_200_OK

    def test_wrong_password(self, app_client):
        _signup(app_client)
        app_client.cookies.clear()

        response = app_client.post(
            "/auth/login",
            json={"email": "alice@example.com", "password": "nope-nope"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Invalid credentials"}
        assert "set-cookie" not in response.headers

    def test_missing_fields(self, app_client):
        response = app_client.post("/auth/login", json={"email": "alice@example.com"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Email and password are required"}


class TestLogoutRoute:
    """Tests for POST /auth/logout."""

    def test_clears_cookie(self, app_client):
        _signup(app_client)

        response = app_client.post("/auth/logout")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True}
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert app_client.get("/user").status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_without_session_succeeds(self, app_client):
        response = app_client.post("/auth/logout")

        assert response.status_code == status.HTTP_200_OK


class TestSessionCookie:
    """Tests for cookie-based authentication of /user."""

    def test_missing_cookie(self, app_client):
        response = app_client.get("/user")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Not authenticated"}

    def test_garbage_cookie(self, app_client):
        app_client.cookies.set("auth-token", "garbage")

        response = app_client.get("/user")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Invalid token"}

    def test_token_signed_with_other_secret(self, app_client):
        forged = TokenService(secret="attacker").issue_token(
            TokenClaims(id=1, username="alice", email="alice@example.com")
        )
        _signup(app_client)
        app_client.cookies.clear()
        app_client.cookies.set("auth-token", forged)

        response = app_client.get("/user")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"error": "Invalid token"}
