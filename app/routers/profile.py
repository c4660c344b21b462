# =============================================================================
# app/routers/profile.py - Profile Endpoints
# =============================================================================
# - GET  /profile             the signed-in user's profile and activity
# - GET  /profile/{username}  someone's public profile
# - POST /profile             update profile fields (JSON result)
# - POST /profile/avatar      upload a new avatar (JSON result)
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile
from pydantic import ValidationError

from app.config import settings
from app.dependencies import (
    OptionalUserDep,
    action_error,
    action_success,
    auth_required_error,
    error_message,
    login_redirect,
)
from app.exceptions import ImageTooLargeError, InvalidImageTypeError, KonomadsException, ProfileNotFoundError
from core.models.profile import ProfileUpdate
from core.services.meetup_service import MeetupService
from core.services.post_service import PostService
from core.services.profile_service import ProfileService
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClientError
from lib.utils import blank_to_none

logger = logging.getLogger(__name__)

router = APIRouter()

UPDATE_FAILED_MESSAGE = "프로필 업데이트에 실패했습니다."
UPLOAD_FAILED_MESSAGE = "아바타 업로드에 실패했습니다."


@router.get("/profile")
async def my_profile(user: OptionalUserDep):
    if user is None:
        return login_redirect()

    profile = ProfileService.get_profile_by_id(user.id)
    if not profile:
        raise ProfileNotFoundError(str(user.id))

    return {
        "profile": profile,
        "email": user.email,
        "posts": PostService.get_posts_by_user_id(user.id),
        "meetups": MeetupService.get_meetups_by_user_id(user.id),
        "participating_meetups": MeetupService.get_participating_meetups(user.id),
        "is_own_profile": True,
    }


@router.get("/profile/{username}")
async def public_profile(username: str, user: OptionalUserDep):
    """
    Raises:
        404: If no profile has this username
    """
    profile = ProfileService.get_profile_by_username(username)
    if not profile:
        raise ProfileNotFoundError(username)

    return {
        "profile": profile,
        "posts": PostService.get_posts_by_user_id(profile["id"]),
        "meetups": MeetupService.get_meetups_by_user_id(profile["id"]),
        "is_own_profile": bool(user and str(profile["id"]) == str(user.id)),
    }


@router.post("/profile")
async def update_profile(
    user: OptionalUserDep,
    username: str = Form(""),
    full_name: str = Form(""),
    bio: str = Form(""),
    location: str = Form(""),
    website: str = Form(""),
):
    """Save the profile form; empty fields are stored as NULL."""
    if user is None:
        return auth_required_error()

    try:
        updates = ProfileUpdate(
            username=blank_to_none(username),
            full_name=blank_to_none(full_name),
            bio=blank_to_none(bio),
            location=blank_to_none(location),
            website=blank_to_none(website),
        )
    except ValidationError as e:
        logger.info(f"Rejected profile form: {e}")
        return action_error(UPDATE_FAILED_MESSAGE)

    try:
        if updates.username and not ProfileService.is_username_available(updates.username, user.id):
            return action_error("이미 사용 중인 사용자 이름입니다.")

        profile = ProfileService.update_profile(user.id, updates)

    except (KonomadsException, SupabaseClientError) as e:
        return action_error(error_message(e, UPDATE_FAILED_MESSAGE))

    return action_success(profile=profile)


@router.post("/profile/avatar")
async def upload_avatar(
    user: OptionalUserDep,
    avatar: Optional[UploadFile] = File(None),
):
    """Accepts png/jpeg/gif/webp images up to MAX_AVATAR_SIZE_MB."""
    if user is None:
        return auth_required_error()

    # One byte past the limit is enough for validate_image to reject it
    content = await avatar.read(settings.max_avatar_size_bytes + 1) if avatar is not None else b""
    if not content:
        return action_error("파일을 선택해주세요.")

    try:
        stored = StorageService.upload_avatar(
            user.id, content, avatar.filename or "avatar", avatar.content_type
        )
    except (InvalidImageTypeError, ImageTooLargeError) as e:
        return action_error(e.message, status_code=e.status_code)
    except (KonomadsException, SupabaseClientError) as e:
        return action_error(error_message(e, UPLOAD_FAILED_MESSAGE))

    if stored is None:
        return action_error(UPLOAD_FAILED_MESSAGE)

    return action_success(avatar_url=stored.url)
