"""Tests for register and login endpoints."""

from fastapi.testclient import TestClient

from recipe_box.api.app import create_app
from recipe_box.containers import AppContainer


def test_register_then_login(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    registered = client.post(
        "/api/auth/register",
        json={"email": "Cook@Example.com", "password": "secret-pass"},
    )
    logged_in = client.post(
        "/api/auth/login",
        json={"email": "cook@example.com", "password": "secret-pass"},
    )

    assert registered.status_code == 201
    assert registered.json()["message"] == "User registered successfully"
    assert logged_in.status_code == 200
    token = logged_in.json()["token"]
    listed = client.get(
        "/api/recipes/saved/all", headers={"Authorization": f"Bearer {token}"}
    )
    assert listed.status_code == 200


def test_register_duplicate_email_conflicts(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    payload = {"email": "cook@example.com", "password": "secret-pass"}

    client.post("/api/auth/register", json=payload)
    response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 409
    assert response.json()["message"] == "User already exists"


def test_login_with_wrong_password_is_unauthorized(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    client.post(
        "/api/auth/register",
        json={"email": "cook@example.com", "password": "secret-pass"},
    )

    response = client.post(
        "/api/auth/login",
        json={"email": "cook@example.com", "password": "wrong-pass"},
    )

    assert response.status_code == 401
    assert response.json() == {
        "kind": "unauthorized",
        "message": "Invalid credentials",
    }


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    assert client.get("/health").json() == {"status": "ok"}
