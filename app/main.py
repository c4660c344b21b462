# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Konomads service.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    KonomadsException,
    application_error_handler,
    konomads_exception_handler,
)
from app.auth import routes as auth_routes
from app.auth.dependencies import JWTSessionLookup
from app.auth.gate import AccessGate
from app.auth.middleware import AccessGateMiddleware
from app.routers import cities, health, meetups, posts, profile
from core.catalog import CITIES
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the configuration on startup; there are no background tasks
    or pooled connections to tear down.
    """
    logger.info(f"Starting Konomads in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"City catalog loaded: {len(CITIES)} cities")

    yield

    logger.info("Shutting down Konomads")


def create_app(gate: AccessGate | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        gate: Access gate to install; defaults to one that verifies
              Supabase access tokens locally
    """
    app = FastAPI(
        title="Konomads API",
        description="""
## 코노마드 - Digital Nomad Cities in Korea

City discovery and community service for digital nomads in Korea.

### Sections

| Section | Access |
|---------|--------|
| **Cities** | Public: listing with search, region filter and sort |
| **Auth** | Public: login, sign-up, password reset |
| **Posts** | Members: board with comments and likes |
| **Meetups** | Members: meetups with participant tracking |
| **Profile** | Members: profile and avatar |

Signed-out visitors requesting a members-only page are redirected to
`/login?next=<page>`.
""",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Cities", "description": "City listing, detail and homepage"},
            {"name": "Auth", "description": "Login, sign-up, logout and password reset"},
            {"name": "Posts", "description": "Community board, comments and likes"},
            {"name": "Meetups", "description": "Meetups and participation"},
            {"name": "Profile", "description": "User profiles and avatars"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    # Added first so it runs inside CORS
    app.add_middleware(
        AccessGateMiddleware,
        gate=gate or AccessGate(session_lookup=JWTSessionLookup()),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(KonomadsException, konomads_exception_handler)
    app.add_exception_handler(ApplicationError, application_error_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(auth_routes.router)
    app.include_router(auth_routes.pages_router)
    app.include_router(cities.router, tags=["Cities"])
    app.include_router(posts.router, tags=["Posts"])
    app.include_router(meetups.router, tags=["Meetups"])
    app.include_router(profile.router, tags=["Profile"])

    return app


app = create_app()
