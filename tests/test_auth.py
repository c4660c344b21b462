# =============================================================================
# tests/test_auth.py - Access Token Tests
# =============================================================================
# This module contains tests for:
# - decode_access_token (valid, expired, wrong secret, bad claims)
# - extract_token (cookie first, then Bearer header)
# - JWTSessionLookup and get_request_user
# - The /auth/verify and /auth/me endpoints
# =============================================================================

import asyncio
import threading
from unittest.mock import patch
from uuid import uuid4

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.dependencies import JWTSessionLookup, decode_access_token, get_request_user
from app.auth.models import AuthUser
from app.config import settings
from tests.conftest import make_access_token


# =============================================================================
# Token Decoding
# =============================================================================

class TestDecodeAccessToken:
    """Local verification of Supabase access tokens."""

    def test_valid_token(self, user_id):
        user = decode_access_token(make_access_token(user_id, email="a@b.kr"))

        assert user.id == user_id
        assert user.email == "a@b.kr"

    def test_expired_token(self, user_id):
        token = make_access_token(user_id, expires_in=-60)

        with pytest.raises(ExpiredSignatureError):
            decode_access_token(token)

    def test_wrong_secret(self, user_id):
        token = make_access_token(user_id, secret="some-other-project-secret")

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_wrong_audience(self, user_id):
        token = jwt.encode(
            {"sub": str(user_id), "aud": "anon"},
            settings.SUPABASE_JWT_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_missing_subject(self):
        token = jwt.encode({"aud": "authenticated"}, settings.SUPABASE_JWT_SECRET, algorithm="HS256")

        with pytest.raises(JWTError):
            decode_access_token(token)

    def test_malformed_subject(self):
        token = make_access_token("not-a-uuid")

        with pytest.raises(JWTError):
            decode_access_token(token)


class TestJWTSessionLookup:
    """The session lookup the default gate uses."""

    def test_no_token(self):
        assert asyncio.run(JWTSessionLookup().lookup(None)) is None
        assert asyncio.run(JWTSessionLookup().lookup("")) is None

    def test_valid_token(self, user_id, access_token):
        user = asyncio.run(JWTSessionLookup().lookup(access_token))
        assert user.id == user_id

    def test_bad_token_raises(self):
        with pytest.raises(JWTError):
            asyncio.run(JWTSessionLookup().lookup("garbage"))

    def test_decodes_off_the_event_loop(self, access_token):
        threads = {}

        def recording_decode(token):
            threads["decode"] = threading.get_ident()
            return decode_access_token(token)

        async def run():
            threads["loop"] = threading.get_ident()
            return await JWTSessionLookup().lookup(access_token)

        with patch("app.auth.dependencies.decode_access_token", side_effect=recording_decode):
            asyncio.run(run())

        assert threads["decode"] != threads["loop"]


class TestRequestUser:
    """get_request_user prefers the gate's user over re-reading the token."""

    @pytest.fixture
    def bare_app(self):
        app = FastAPI()

        @app.get("/whoami")
        async def whoami(user=Depends(get_request_user)):
            return {"user_id": str(user.id) if user else None}

        return app

    def test_falls_back_to_token_without_gate(self, bare_app, user_id, access_token):
        client = TestClient(bare_app)
        client.cookies.set(settings.AUTH_COOKIE_NAME, access_token)

        assert client.get("/whoami").json() == {"user_id": str(user_id)}

    def test_visitor_without_gate(self, bare_app):
        assert TestClient(bare_app).get("/whoami").json() == {"user_id": None}

    def test_gate_user_wins(self, bare_app, access_token):
        gate_user = AuthUser(id=uuid4(), email="gate@example.com")

        @bare_app.middleware("http")
        async def set_user(request, call_next):
            request.state.user = gate_user
            return await call_next(request)

        client = TestClient(bare_app)
        client.cookies.set(settings.AUTH_COOKIE_NAME, access_token)

        assert client.get("/whoami").json() == {"user_id": str(gate_user.id)}

    def test_gate_visitor_is_not_reverified(self, bare_app, access_token):
        @bare_app.middleware("http")
        async def set_visitor(request, call_next):
            request.state.user = None
            return await call_next(request)

        client = TestClient(bare_app)
        client.cookies.set(settings.AUTH_COOKIE_NAME, access_token)

        assert client.get("/whoami").json() == {"user_id": None}


# =============================================================================
# Endpoints
# =============================================================================

class TestVerifyEndpoint:
    """GET /auth/verify reads the cookie or the Bearer header."""

    def test_cookie(self, auth_client, user_id):
        response = auth_client.get("/auth/verify")

        assert response.status_code == 200
        assert response.json()["user_id"] == str(user_id)
        assert response.json()["valid"] is True

    def test_bearer_header(self, client, user_id, access_token):
        response = client.get("/auth/verify", headers={"Authorization": f"Bearer {access_token}"})

        assert response.status_code == 200
        assert response.json()["email"] == "nomad@example.com"

    def test_cookie_wins_over_header(self, auth_client, user_id):
        other = make_access_token(uuid4())

        response = auth_client.get("/auth/verify", headers={"Authorization": f"Bearer {other}"})

        assert response.json()["user_id"] == str(user_id)

    def test_missing_token(self, client):
        response = client.get("/auth/verify")

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_expired_token(self, client, user_id):
        token = make_access_token(user_id, expires_in=-60)

        response = client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_invalid_token(self, client):
        response = client.get("/auth/verify", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["detail"].startswith("Invalid token")


class TestMeEndpoint:
    """GET /auth/me merges the profile row with the token claims."""

    def test_with_profile(self, auth_client, user_id):
        profile = {
            "id": str(user_id),
            "username": "nomad",
            "full_name": "Kim Nomad",
            "bio": "Working from Gangneung",
        }

        with patch("app.auth.routes.ProfileService") as mock_service:
            mock_service.get_profile_by_id.return_value = profile
            response = auth_client.get("/auth/me")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == str(user_id)
        assert body["email"] == "nomad@example.com"
        assert body["username"] == "nomad"

    def test_without_profile_row(self, auth_client, user_id):
        with patch("app.auth.routes.ProfileService") as mock_service:
            mock_service.get_profile_by_id.return_value = None
            response = auth_client.get("/auth/me")

        assert response.status_code == 200
        assert response.json()["id"] == str(user_id)
        assert response.json()["username"] is None

    def test_profile_lookup_error_falls_back(self, auth_client, user_id):
        with patch("app.auth.routes.ProfileService") as mock_service:
            mock_service.get_profile_by_id.side_effect = RuntimeError("db down")
            response = auth_client.get("/auth/me")

        assert response.status_code == 200
        assert response.json()["id"] == str(user_id)
