# =============================================================================
# app/auth/middleware.py - Access Gate Middleware
# =============================================================================
# Runs the AccessGate in front of every route.
#
# Forwarded requests get the resolved user on `request.state.user`
# (None for visitors on exempt routes). Redirected requests never reach
# a route handler.
# =============================================================================

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.auth.dependencies import extract_token
from app.auth.gate import AccessGate


class AccessGateMiddleware(BaseHTTPMiddleware):
    """
    Usage:
        app.add_middleware(AccessGateMiddleware, gate=AccessGate(JWTSessionLookup()))
    """

    def __init__(self, app, gate: AccessGate):
        super().__init__(app)
        self.gate = gate

    async def dispatch(self, request: Request, call_next):
        # CORS preflights carry no credentials
        if request.method == "OPTIONS":
            return await call_next(request)

        decision = await self.gate.decide(
            request.url.path,
            extract_token(request),
            query=request.url.query,
        )

        if not decision.forwarded:
            return RedirectResponse(url=decision.location, status_code=303)

        request.state.user = decision.user
        return await call_next(request)
