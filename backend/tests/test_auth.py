"""Tests for registration, login, and the authentication gate."""

import pytest
from fastapi.testclient import TestClient

PASSWORD = "Abcdef12"


class TestRegistration:
    def test_register_starts_session(self, client, register):
        user = register(client, "alice")

        assert user["username"] == "alice"
        assert "password" not in user and "password_hash" not in user
        assert client.get("/api/user").json()["id"] == user["id"]

    @pytest.mark.parametrize("password", ["abc", "abcdefgh", "ABCDEFG1", "abcdefg1", "Abcdefgh"])
    def test_weak_passwords_rejected(self, client, password):
        response = client.post("/api/register", json={"username": "alice", "password": password})

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["password"]

    def test_policy_minimum_accepted(self, client):
        response = client.post("/api/register", json={"username": "alice", "password": "Abcdef12"})

        assert response.status_code == 200

    def test_blank_username_rejected(self, client):
        response = client.post("/api/register", json={"username": "   ", "password": PASSWORD})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "username"

    def test_duplicate_username_conflicts(self, client, other_client, register):
        register(client, "alice")

        response = other_client.post("/api/register", json={"username": "alice", "password": PASSWORD})

        assert response.status_code == 409

    def test_register_replaces_existing_session(self, client, register):
        register(client, "alice")

        bob = register(client, "bob")

        assert client.get("/api/user").json()["id"] == bob["id"]


class TestLogin:
    def test_login_and_logout(self, client, other_client, register):
        register(client, "alice")

        response = other_client.post("/api/login", json={"username": "alice", "password": PASSWORD})
        assert response.status_code == 200
        assert other_client.get("/api/user").status_code == 200

        other_client.post("/api/logout")
        assert other_client.get("/api/user").status_code == 401

    def test_wrong_password(self, client, other_client, register):
        register(client, "alice")

        response = other_client.post("/api/login", json={"username": "alice", "password": "Wrong1234"})

        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post("/api/login", json={"username": "ghost", "password": PASSWORD})

        assert response.status_code == 401


class TestAuthenticationGate:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("GET", "/api/journals"),
            ("GET", "/api/journals/1"),
            ("POST", "/api/journals"),
            ("PATCH", "/api/journals/1"),
            ("DELETE", "/api/journals/1"),
            ("GET", "/api/entities"),
            ("GET", "/api/entities/1"),
            ("POST", "/api/entities"),
            ("PATCH", "/api/entities/1"),
            ("DELETE", "/api/entities/1"),
            ("GET", "/api/user"),
            ("DELETE", "/api/user"),
        ],
    )
    def test_requires_session(self, client, method, path):
        response = client.request(method, path, json={"content": "x"} if method in ("POST", "PATCH") else None)

        assert response.status_code == 401

    def test_tampered_cookie(self, app, settings):
        forged = TestClient(app, cookies={settings.SESSION_COOKIE_NAME: "not-a-signed-session"})

        assert forged.get("/api/journals").status_code == 401

    def test_malformed_body_is_rejected_before_session_check(self, client):
        malformed = client.post(
            "/api/journals", content="{not json", headers={"Content-Type": "application/json"}
        )
        wrong_shape = client.post("/api/entities", json={"content": "x"})

        assert malformed.status_code == 400
        assert wrong_shape.status_code == 401
