# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Supabase Auth integration:
# - dependencies.py: access-token verification and FastAPI dependencies
# - gate.py / middleware.py: redirect signed-out visitors away from
#   gated pages
# - routes.py: login, signup, logout and password-reset actions
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    JWTSessionLookup,
    get_current_user,
    get_current_user_optional,
    get_request_user,
)
from app.auth.gate import AccessGate, GateDecision, GateOutcome
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "get_request_user",
    "JWTSessionLookup",
    "AccessGate",
    "GateDecision",
    "GateOutcome",
    "AuthUser",
    "UserResponse",
]
