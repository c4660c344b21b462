# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources, plus the response
# helpers every form action uses.
#
# Form actions answer in one of two ways:
# - Page forms: 303 redirect with ?error= / ?success= messages
# - Fetch-style actions (like, join, comment): JSON {"success": true}
#   or {"error": "..."}
# =============================================================================

from typing import Annotated, Sequence

from fastapi import Depends
from fastapi.responses import JSONResponse, RedirectResponse

from app.auth.dependencies import get_request_user
from app.auth.models import AuthUser
from core.catalog import CITIES
from core.models.city import City
from core.services.city_service import CityService
from lib.utils import with_message

AUTH_REQUIRED_MESSAGE = "로그인이 필요합니다."


def get_city_catalog() -> Sequence[City]:
    """
    Get the city catalog.

    Routes depend on this instead of importing CITIES, so tests can swap
    in a small fixture with app.dependency_overrides.
    """
    return CITIES


def city_options() -> list[dict]:
    """
    Cities for the post and meetup forms.

    Posts and meetups reference rows in the `cities` table by UUID, so the
    pickers list those rows rather than the static catalog.
    """
    return [
        {"id": c["id"], "name": c["name"], "slug": c["slug"]}
        for c in CityService.get_cities()
    ]


# Type aliases for dependency injection
CatalogDep = Annotated[Sequence[City], Depends(get_city_catalog)]
OptionalUserDep = Annotated[AuthUser | None, Depends(get_request_user)]


def redirect_to(path: str, key: str | None = None, message: str | None = None) -> RedirectResponse:
    """303 redirect, optionally carrying an error/success message."""
    if key and message:
        path = with_message(path, key, message)
    return RedirectResponse(url=path, status_code=303)


def login_redirect() -> RedirectResponse:
    return redirect_to("/login", "error", AUTH_REQUIRED_MESSAGE)


def action_success(**extra) -> dict:
    return {"success": True, **extra}


def action_error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def auth_required_error() -> JSONResponse:
    return action_error(AUTH_REQUIRED_MESSAGE, status_code=401)


def error_message(exc: Exception, fallback: str) -> str:
    """User-facing message for a failed action."""
    return getattr(exc, "message", None) or str(exc) or fallback
