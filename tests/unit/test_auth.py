from __future__ import annotations

import time

import pytest
from fastapi import HTTPException
from jose import jwt

from app.core.auth import (
    create_session_token,
    hash_password,
    validate_session_token,
    verify_password,
)
from app.core.config import settings
from app.core.dependencies import require_admin

ADMIN_DIGEST = "8c6976e5b5410415bde908bd4dee15dfb167a9c873fc4bb8a81f6f2ab448a918"


def test_hash_password_is_sha256_hex():
    assert hash_password("admin") == ADMIN_DIGEST


def test_verify_password_matches_reference_digest():
    assert verify_password("admin", ADMIN_DIGEST) is True
    assert verify_password("admin", ADMIN_DIGEST.upper()) is True
    assert verify_password("Admin", ADMIN_DIGEST) is False
    assert verify_password("", ADMIN_DIGEST) is False


def test_session_token_round_trip():
    token, expires_in = create_session_token("secret", ttl_minutes=10)
    payload = validate_session_token(token, "secret")

    assert expires_in == 600
    assert payload["role"] == "admin"
    assert payload["sub"].startswith("session-")


def test_token_signed_with_other_secret_is_rejected():
    token, _ = create_session_token("other-secret", ttl_minutes=10)
    with pytest.raises(HTTPException) as exc_info:
        validate_session_token(token, "secret")
    assert exc_info.value.status_code == 401


def test_expired_token_is_rejected():
    now = int(time.time())
    token = jwt.encode(
        {"sub": "session-x", "role": "admin", "aud": "chronos-admin", "iat": now - 7200, "exp": now - 3600},
        "secret",
        algorithm="HS256",
    )
    with pytest.raises(HTTPException) as exc_info:
        validate_session_token(token, "secret")
    assert exc_info.value.status_code == 401
    assert "expired" in exc_info.value.detail


def test_non_admin_token_is_forbidden():
    now = int(time.time())
    token = jwt.encode(
        {"sub": "session-x", "role": "viewer", "aud": "chronos-admin", "exp": now + 3600},
        "secret",
        algorithm="HS256",
    )
    with pytest.raises(HTTPException) as exc_info:
        validate_session_token(token, "secret")
    assert exc_info.value.status_code == 403


@pytest.mark.anyio
async def test_require_admin_without_header():
    with pytest.raises(HTTPException) as exc_info:
        await require_admin(authorization=None)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Not authenticated"


@pytest.mark.anyio
async def test_require_admin_with_valid_token(admin_token):
    session = await require_admin(authorization=f"Bearer {admin_token}")
    assert session.role == "admin"
    assert session.expires_at > time.time()


def test_login_with_correct_password(client):
    response = client.post("/api/v1/auth/login", json={"password": "admin"})
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert validate_session_token(data["access_token"], settings.SESSION_SECRET)["role"] == "admin"


def test_login_with_wrong_password(client):
    response = client.post("/api/v1/auth/login", json={"password": "letmein"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Incorrect password"


def test_session_endpoint_requires_token(client):
    assert client.get("/api/v1/auth/session").status_code == 401

    response = client.get("/api/v1/auth/session", headers={"Authorization": "Bearer not-a-valid-token"})
    assert response.status_code == 401


def test_session_endpoint_with_token(authenticated_client):
    response = authenticated_client.get("/api/v1/auth/session")
    assert response.status_code == 200
    assert response.json()["role"] == "admin"
