"""Tests for registration, login and the current-user endpoints."""

from datetime import timedelta

from app.core.security import create_access_token, hash_password, verify_password


def test_password_hashing():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_register_and_me(client, register_user):
    headers = register_user(email="ana@example.com", name="Ana")

    response = client.get("/api/v1/auth/me", headers=headers)

    assert response.status_code == 200
    me = response.json()
    assert me["email"] == "ana@example.com"
    assert me["dashboard_view"] == "member"
    assert me["onboarding"] is True
    assert "hashed_password" not in me


def test_register_duplicate_email(client, register_user):
    register_user()

    response = client.post(
        "/api/v1/auth/register",
        json={"email": "owner@example.com", "name": "Someone Else", "password": "secret123"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email already registered"


def test_register_rejects_short_password(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "short@example.com", "name": "Short", "password": "123"},
    )
    assert response.status_code == 422


def test_register_rejects_password_over_bcrypt_limit(client):
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "long@example.com", "name": "Long", "password": "p" * 100},
    )
    assert response.status_code == 422


def test_register_counts_password_bytes_not_characters(client):
    # 40 two-byte characters: short enough as text, too long for bcrypt
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "wide@example.com", "name": "Wide", "password": "\u00e9" * 40},
    )
    assert response.status_code == 422


def test_login(client, register_user):
    register_user()

    response = client.post(
        "/api/v1/auth/login",
        data={"username": "owner@example.com", "password": "secret123"},
    )

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"


def test_login_wrong_password(client, register_user):
    register_user()

    response = client.post(
        "/api/v1/auth/login",
        data={"username": "owner@example.com", "password": "not-it"},
    )

    assert response.status_code == 401


def test_login_with_overlong_password_is_unauthorized(client, register_user):
    register_user()

    response = client.post(
        "/api/v1/auth/login",
        data={"username": "owner@example.com", "password": "p" * 100},
    )

    assert response.status_code == 401


def test_verify_password_rejects_overlong_input():
    assert not verify_password("p" * 100, hash_password("secret123"))


def test_invalid_and_expired_tokens_are_rejected(client, register_user):
    register_user()
    expired = create_access_token({"sub": "1"}, expires_delta=timedelta(minutes=-1))

    assert client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"}).status_code == 401
    assert client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {expired}"}).status_code == 401


def test_token_for_unknown_user_is_rejected(client):
    token = create_access_token({"sub": "4242"})
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_switch_dashboard_view(client, owner_headers):
    response = client.put(
        "/api/v1/auth/me/dashboard-view",
        json={"dashboard_view": "owner"},
        headers=owner_headers,
    )

    assert response.status_code == 200
    assert response.json()["dashboard_view"] == "owner"

    invalid = client.put(
        "/api/v1/auth/me/dashboard-view",
        json={"dashboard_view": "admin"},
        headers=owner_headers,
    )
    assert invalid.status_code == 422
