# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Auth pages and the form actions behind them.
#
# Form actions (POST /auth/...) talk to Supabase Auth with a fresh anon
# client per request, store the resulting session in HttpOnly cookies and
# answer with 303 redirects carrying ?error= / ?success= messages.
#
# Pages (GET /login, /register, ...) return the view payload: the message
# to display, with known provider errors translated to Korean.
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse

from app.auth.dependencies import decode_access_token, extract_token, get_current_user
from app.auth.models import AuthUser, UserResponse
from app.config import settings
from app.dependencies import AUTH_REQUIRED_MESSAGE, redirect_to
from core.services.profile_service import ProfileService
from lib.supabase_client import SupabaseClient
from lib.utils import is_safe_redirect
from lib.validation import validate_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])
pages_router = APIRouter(tags=["Auth"])

REFRESH_COOKIE_MAX_AGE = 60 * 60 * 24 * 30  # 30 days
MIN_RESET_PASSWORD_LENGTH = 6

# Provider messages shown on the login page in Korean
LOGIN_ERROR_MESSAGES = {
    "Invalid login credentials": "이메일 또는 비밀번호가 올바르지 않습니다.",
    "Email not confirmed": "이메일 인증이 완료되지 않았습니다.",
}

RESET_LINK_SENT_MESSAGE = "비밀번호 재설정 링크가 이메일로 발송되었습니다."
PASSWORD_CHANGED_MESSAGE = "비밀번호가 성공적으로 변경되었습니다."
PASSWORD_MISMATCH_MESSAGE = "비밀번호가 일치하지 않습니다."
PASSWORD_TOO_SHORT_MESSAGE = f"비밀번호는 최소 {MIN_RESET_PASSWORD_LENGTH}자 이상이어야 합니다."


def translate_auth_error(message: Optional[str]) -> Optional[str]:
    """Known Supabase Auth messages in Korean; anything else unchanged."""
    if not message:
        return None
    return LOGIN_ERROR_MESSAGES.get(message, message)


def _provider_message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc)


def _set_session_cookies(response: RedirectResponse, session) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=session.access_token,
        httponly=True,
        max_age=session.expires_in,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=session.refresh_token,
        httponly=True,
        max_age=REFRESH_COOKIE_MAX_AGE,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )


def _clear_session_cookies(response: RedirectResponse) -> None:
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME)
    response.delete_cookie(key=settings.REFRESH_COOKIE_NAME)


# =============================================================================
# Form Actions
# =============================================================================

@router.post("/login")
async def login(
    email: str = Form(""),
    password: str = Form(""),
    next: Optional[str] = Form(None),
) -> RedirectResponse:
    """
    Sign in with email and password.

    Success sets the session cookies and returns the user to `next` (a
    local path) or the homepage. Failure goes back to /login with the
    provider's message.
    """
    client = SupabaseClient.create_auth_client()

    try:
        result = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.info(f"Login failed for {email}: {e}")
        return redirect_to("/login", "error", _provider_message(e))

    destination = next if is_safe_redirect(next) else "/"
    response = redirect_to(destination)

    if result.session:
        _set_session_cookies(response, result.session)

    logger.info(f"User logged in: {result.user.id if result.user else email}")
    return response


@router.post("/signup")
async def signup(
    email: str = Form(""),
    password: str = Form(""),
) -> RedirectResponse:
    """
    Register a new account.

    When the project doesn't require email confirmation, Supabase returns
    a session right away and the user is signed in.
    """
    email_check = validate_email(email)
    if not email_check.valid:
        return redirect_to("/register", "error", email_check.error)

    client = SupabaseClient.create_auth_client()

    try:
        result = client.auth.sign_up({
            "email": email,
            "password": password,
            "options": {
                "email_redirect_to": f"{settings.SITE_URL.rstrip('/')}/auth/callback",
            },
        })
    except Exception as e:
        logger.error(f"Signup error: {e}")
        return redirect_to("/register", "error", _provider_message(e))

    response = redirect_to("/")
    if result.session:
        _set_session_cookies(response, result.session)

    return response


@router.post("/logout")
async def logout(request: Request) -> RedirectResponse:
    """Revoke the session (best effort) and clear the cookies."""
    token = extract_token(request)

    if token:
        try:
            SupabaseClient.get_client().auth.admin.sign_out(token)
        except Exception as e:
            logger.warning(f"Sign-out with provider failed: {e}")

    response = redirect_to("/")
    _clear_session_cookies(response)
    return response


@router.post("/forgot-password")
async def forgot_password(email: str = Form("")) -> RedirectResponse:
    """Email a password-reset link pointing at /reset-password."""
    if not email.strip():
        return redirect_to("/forgot-password", "error", "이메일을 입력해주세요.")

    client = SupabaseClient.create_auth_client()

    try:
        client.auth.reset_password_for_email(
            email.strip(),
            {"redirect_to": f"{settings.SITE_URL.rstrip('/')}/reset-password"},
        )
    except Exception as e:
        return redirect_to("/forgot-password", "error", _provider_message(e))

    return redirect_to("/forgot-password", "success", RESET_LINK_SENT_MESSAGE)


@router.post("/reset-password")
async def reset_password(
    request: Request,
    password: str = Form(""),
    confirm_password: str = Form(""),
) -> RedirectResponse:
    """
    Set a new password for the user signed in through the reset link.
    """
    if password != confirm_password:
        return redirect_to("/reset-password", "error", PASSWORD_MISMATCH_MESSAGE)

    if len(password) < MIN_RESET_PASSWORD_LENGTH:
        return redirect_to("/reset-password", "error", PASSWORD_TOO_SHORT_MESSAGE)

    token = extract_token(request)
    if not token:
        return redirect_to("/reset-password", "error", AUTH_REQUIRED_MESSAGE)

    try:
        user = await run_in_threadpool(decode_access_token, token)
        SupabaseClient.get_client().auth.admin.update_user_by_id(
            str(user.id), {"password": password}
        )
    except Exception as e:
        return redirect_to("/reset-password", "error", _provider_message(e))

    logger.info(f"Password changed for user: {user.id}")
    return redirect_to("/login", "success", PASSWORD_CHANGED_MESSAGE)


@router.get("/callback")
async def auth_callback(
    token_hash: str,
    otp_type: str = Query("email", alias="type"),
    next: Optional[str] = None,
) -> RedirectResponse:
    """
    Landing point for email links (sign-up confirmation, password reset).

    Verifies the one-time token, stores the session and continues to
    /reset-password for recovery links or `next` otherwise.
    """
    client = SupabaseClient.create_auth_client()

    try:
        result = client.auth.verify_otp({"token_hash": token_hash, "type": otp_type})
    except Exception as e:
        return redirect_to("/login", "error", _provider_message(e))

    if otp_type == "recovery":
        destination = "/reset-password"
    else:
        destination = next if is_safe_redirect(next) else "/"

    response = redirect_to(destination)
    if result.session:
        _set_session_cookies(response, result.session)
    return response


# =============================================================================
# Token Info
# =============================================================================

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
    """
    try:
        profile = ProfileService.get_profile_by_id(user.id)
        if profile:
            return UserResponse(**{**profile, "id": user.id, "email": user.email})

    except Exception as e:
        logger.warning(f"Could not fetch user profile: {e}")

    # Profile row not created yet (signup trigger still pending)
    return UserResponse(id=user.id, email=user.email)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }


# =============================================================================
# Pages
# =============================================================================

@pages_router.get("/login")
async def login_page(
    error: Optional[str] = None,
    success: Optional[str] = None,
    next: Optional[str] = None,
) -> dict:
    return {
        "error": translate_auth_error(error),
        "success": success,
        "next": next if is_safe_redirect(next) else None,
    }


@pages_router.get("/register")
async def register_page(error: Optional[str] = None) -> dict:
    return {"error": error}


@pages_router.get("/forgot-password")
async def forgot_password_page(
    error: Optional[str] = None,
    success: Optional[str] = None,
) -> dict:
    return {"error": error, "success": success}


@pages_router.get("/reset-password")
async def reset_password_page(error: Optional[str] = None) -> dict:
    return {"error": error, "min_password_length": MIN_RESET_PASSWORD_LENGTH}
