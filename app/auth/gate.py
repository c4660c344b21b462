# =============================================================================
# app/auth/gate.py - Session-Gated Routing
# =============================================================================
# Decides, per request, whether the caller may reach a path:
#
#   | Session present? | Path exempt? | Outcome                 |
#   |------------------|--------------|-------------------------|
#   | yes              | yes          | forward                 |
#   | yes              | no           | forward                 |
#   | no               | yes          | forward                 |
#   | no               | no           | redirect to login page  |
#
# Exempt routes are an explicit routing table matched on path-segment
# boundaries: "/cities" covers "/cities" and "/cities/seoul" but not
# "/cities-secret".
#
# Any error from the session lookup counts as "no session" (fail closed).
# The gate keeps no per-request state and never touches the session.
#
# Usage:
#   gate = AccessGate(session_lookup=JWTSessionLookup())
#   decision = await gate.decide("/posts", token)
#   if decision.outcome is GateOutcome.REDIRECTED:
#       return RedirectResponse(decision.location, status_code=303)
# =============================================================================

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Protocol
from urllib.parse import quote

from app.auth.models import AuthUser

logger = logging.getLogger(__name__)


class GateOutcome(str, Enum):
    FORWARDED = "forwarded"
    REDIRECTED = "redirected"


@dataclass(frozen=True)
class GateDecision:
    """
    Result of one gate check.

    location is the login URL when redirected, otherwise None.
    user is the resolved principal, when there is one.
    """
    outcome: GateOutcome
    location: Optional[str] = None
    user: Optional[AuthUser] = None

    @property
    def forwarded(self) -> bool:
        return self.outcome is GateOutcome.FORWARDED


class SessionLookup(Protocol):
    """
    Resolves a credential to its user.

    Returns None when there is no session. May raise for transport errors
    or bad credentials; the gate treats both as "no session".
    """

    async def lookup(self, token: Optional[str]) -> Optional[AuthUser]:
        ...


def _normalize(path: str) -> str:
    """Drop trailing slashes, keeping the root as "/"."""
    stripped = path.rstrip("/")
    return stripped or "/"


@dataclass(frozen=True)
class RoutePattern:
    """
    One exempt route.

    exact=True matches only the path itself; otherwise the path and
    everything below it (on a "/" boundary) match.
    """
    path: str
    exact: bool = False

    def matches(self, path: str) -> bool:
        target = _normalize(self.path)
        candidate = _normalize(path)

        if candidate == target:
            return True
        if self.exact:
            return False
        if target == "/":
            return True
        return candidate.startswith(target + "/")


class ExemptRoutes:
    """Enumerable table of routes that never require a session."""

    def __init__(self, patterns: Iterable[RoutePattern]):
        self._patterns = tuple(patterns)

    def __iter__(self) -> Iterator[RoutePattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def is_exempt(self, path: str) -> bool:
        return any(pattern.matches(path) for pattern in self._patterns)


DEFAULT_EXEMPT_ROUTES = ExemptRoutes([
    RoutePattern("/", exact=True),
    # Auth pages and their form actions
    RoutePattern("/login"),
    RoutePattern("/register"),
    RoutePattern("/forgot-password"),
    RoutePattern("/reset-password"),
    RoutePattern("/auth"),
    # Public read-only listing
    RoutePattern("/cities"),
    # Infrastructure
    RoutePattern("/api/v1/health"),
    RoutePattern("/docs"),
    RoutePattern("/redoc"),
    RoutePattern("/openapi.json"),
    RoutePattern("/static"),
])


class AccessGate:
    """
    Session gate for incoming requests.

    The session lookup is passed in, so tests (and alternative providers)
    can substitute their own.
    """

    def __init__(
        self,
        session_lookup: SessionLookup,
        exempt_routes: ExemptRoutes = DEFAULT_EXEMPT_ROUTES,
        login_path: str = "/login",
    ):
        self.session_lookup = session_lookup
        self.exempt_routes = exempt_routes
        self.login_path = login_path

    async def resolve_user(self, token: Optional[str]) -> Optional[AuthUser]:
        """The session's user, or None when absent or unverifiable."""
        try:
            return await self.session_lookup.lookup(token)
        except Exception as e:
            logger.warning(f"Session lookup failed, treating as signed out: {e}")
            return None

    def login_location(self, requested: str) -> str:
        """Login URL that returns the user to `requested` afterwards."""
        return f"{self.login_path}?next={quote(requested, safe='/')}"

    async def decide(
        self,
        path: str,
        token: Optional[str],
        query: str = "",
    ) -> GateDecision:
        """
        Forward or redirect a request for `path`.

        Args:
            path: Request path (no query string)
            token: Access token from the request, if any
            query: Raw query string, preserved in the `next` parameter

        Returns:
            GateDecision with FORWARDED, or REDIRECTED plus the login location
        """
        user = await self.resolve_user(token)

        if user is not None or self.exempt_routes.is_exempt(path):
            return GateDecision(GateOutcome.FORWARDED, user=user)

        requested = f"{path}?{query}" if query else path
        logger.debug(f"Redirecting unauthenticated request for {path} to login")
        return GateDecision(GateOutcome.REDIRECTED, location=self.login_location(requested))
