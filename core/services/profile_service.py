# =============================================================================
# core/services/profile_service.py - Profile Operations
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import ProfileNotFoundError
from core.models.profile import ProfileUpdate
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for `profiles` rows (one per auth user)."""

    @staticmethod
    def _get_one(column: str, value: str) -> dict[str, Any] | None:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("profiles")
                .select("*")
                .eq(column, value)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if SupabaseClient.is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch profile: {e}",
                code="FETCH_PROFILE_FAILED",
                details={column: value}
            )

    @staticmethod
    def get_profile_by_id(user_id: str | UUID) -> dict[str, Any] | None:
        return ProfileService._get_one("id", normalize_uuid(user_id))

    @staticmethod
    def get_profile_by_username(username: str) -> dict[str, Any] | None:
        return ProfileService._get_one("username", username)

    @staticmethod
    def update_profile(user_id: str | UUID, updates: ProfileUpdate) -> dict[str, Any]:
        """
        Overwrite the editable profile fields.

        Raises:
            ProfileNotFoundError: If no profile row exists for the user
        """
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table("profiles")
                .update(updates.model_dump(mode="json"))
                .eq("id", user_id_str)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update profile {user_id_str}: {e}")
            raise SupabaseClientError(
                message=f"Failed to update profile: {e}",
                code="UPDATE_PROFILE_FAILED",
                details={"user_id": user_id_str}
            )

        if not response.data:
            raise ProfileNotFoundError(user_id_str)

        return response.data[0]

    @staticmethod
    def update_avatar(user_id: str | UUID, avatar_url: str) -> dict[str, Any]:
        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table("profiles")
                .update({"avatar_url": avatar_url})
                .eq("id", user_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update avatar: {e}",
                code="UPDATE_PROFILE_FAILED",
                details={"user_id": user_id_str}
            )

        if not response.data:
            raise ProfileNotFoundError(user_id_str)

        return response.data[0]

    @staticmethod
    def is_username_available(username: str, exclude_user_id: str | UUID | None = None) -> bool:
        """
        Check whether a username is free.

        Args:
            username: Candidate username
            exclude_user_id: The current owner, who may keep their own username
        """
        profile = ProfileService.get_profile_by_username(username)

        if not profile:
            return True

        return exclude_user_id is not None and str(profile.get("id")) == str(exclude_user_id)
