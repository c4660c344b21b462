# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Small city fixtures with known costs, ratings and regions
# - Signed test access tokens and a TestClient for the full app
# =============================================================================

import os
import time
from uuid import UUID, uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-hs256-signing")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import settings
from app.dependencies import get_city_catalog
from core.models.city import City


# =============================================================================
# City Fixtures
# =============================================================================

def make_city(**overrides) -> City:
    """Build a City with sensible defaults for the fields a test doesn't care about."""
    data = {
        "id": "0",
        "slug": "city",
        "name": "City",
        "region": "Region",
        "description": "",
        "monthly_cost": 1_000_000,
        "rating": 4.0,
        "nomads_now": 0,
    }
    data.update(overrides)
    return City(**data)


@pytest.fixture
def three_cities():
    """
    Three cities with distinct sort keys.

    | slug      | nomads_now | rating | monthly_cost |
    |-----------|------------|--------|--------------|
    | seoul     | 156        | 4.6    | 2,800,000    |
    | jinju     | 18         | 4.0    | 1,450,000    |
    | gangneung | 67         | 4.5    | 1,800,000    |
    """
    return [
        make_city(
            id="1", slug="seoul", name="Seoul", region="Capital",
            description="Metropolis with endless coworking spaces",
            monthly_cost=2_800_000, rating=4.6, nomads_now=156,
        ),
        make_city(
            id="2", slug="jinju", name="Jinju", region="Gyeongsang",
            description="Quiet riverside fortress town",
            monthly_cost=1_450_000, rating=4.0, nomads_now=18,
        ),
        make_city(
            id="3", slug="gangneung", name="Gangneung", region="Gangwon",
            description="Coffee street by the East Sea",
            monthly_cost=1_800_000, rating=4.5, nomads_now=67,
        ),
    ]


@pytest.fixture
def regional_cities():
    """Two cities in Gyeongsang (A), one in Capital (B)."""
    return [
        make_city(
            id="1", slug="busan", name="Busan", region="Gyeongsang",
            description="Harbour city with beaches",
            monthly_cost=2_000_000, rating=4.3, nomads_now=98,
        ),
        make_city(
            id="2", slug="seoul", name="Seoul", region="Capital",
            description="Metropolis with endless coworking spaces",
            monthly_cost=2_800_000, rating=4.6, nomads_now=156,
        ),
        make_city(
            id="3", slug="jinju", name="Jinju", region="Gyeongsang",
            description="Quiet riverside fortress town",
            monthly_cost=1_450_000, rating=4.0, nomads_now=18,
        ),
    ]


# =============================================================================
# Auth Fixtures
# =============================================================================

def make_access_token(
    user_id: UUID | str,
    email: str = "nomad@example.com",
    expires_in: int = 3600,
    secret: str | None = None,
) -> str:
    """Sign an access token the way Supabase Auth does (HS256, aud=authenticated)."""
    now = int(time.time())
    return jwt.encode(
        {
            "sub": str(user_id),
            "email": email,
            "aud": "authenticated",
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
        },
        secret or settings.SUPABASE_JWT_SECRET,
        algorithm="HS256",
    )


@pytest.fixture
def user_id():
    return uuid4()


@pytest.fixture
def access_token(user_id):
    return make_access_token(user_id)


@pytest.fixture
def app(three_cities):
    """Full application with the small city fixture as its catalog."""
    from app.main import create_app

    application = create_app()
    application.dependency_overrides[get_city_catalog] = lambda: three_cities
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Signed-out client; redirects are not followed."""
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def auth_client(app, access_token):
    """Client carrying a valid access token cookie."""
    test_client = TestClient(app, follow_redirects=False)
    test_client.cookies.set(settings.AUTH_COOKIE_NAME, access_token)
    return test_client
