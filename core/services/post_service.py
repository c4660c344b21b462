# =============================================================================
# core/services/post_service.py - Community Post Operations
# =============================================================================
# CRUD for `posts` plus the `post_likes` toggle.
#
# The service-role client bypasses row level security, so methods that
# mutate a post take the acting user_id and check ownership here. A post
# owned by someone else is reported exactly like a missing post.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import PostNotFoundError
from core.models.post import PostCategory, PostCreate, PostUpdate
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

# Author profile and city are embedded for list and detail views
POST_SELECT = "*, profiles(id, username, full_name, avatar_url), cities(id, name, slug)"


class PostService:
    """Service for community posts."""

    @staticmethod
    def get_posts(
        city_id: str | UUID | None = None,
        category: PostCategory | str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """
        List posts, pinned first and then newest first.

        Args:
            city_id: Only posts about this city
            category: Only posts in this category
            limit: Page size
            offset: Rows to skip

        Returns:
            List of post dicts with embedded `profiles` and `cities`
        """
        client = SupabaseClient.get_client()

        try:
            query = (
                client.table("posts")
                .select(POST_SELECT)
                .order("is_pinned", desc=True)
                .order("created_at", desc=True)
            )

            if city_id:
                query = query.eq("city_id", normalize_uuid(city_id))
            if category:
                query = query.eq("category", PostCategory(category).value)

            response = query.range(offset, offset + limit - 1).execute()
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list posts: {e}")
            raise SupabaseClientError(
                message=f"Failed to list posts: {e}",
                code="FETCH_POSTS_FAILED",
            )

    @staticmethod
    def get_post_by_id(post_id: str | UUID, count_view: bool = True) -> dict[str, Any] | None:
        """
        Fetch one post.

        Viewing a post bumps its view counter through the
        `increment_post_views` function. A failed bump is logged and ignored.

        Returns:
            Post dict, or None if not found
        """
        client = SupabaseClient.get_client()
        post_id_str = normalize_uuid(post_id)

        try:
            response = (
                client.table("posts")
                .select(POST_SELECT)
                .eq("id", post_id_str)
                .single()
                .execute()
            )
        except Exception as e:
            if SupabaseClient.is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch post: {e}",
                code="FETCH_POST_FAILED",
                details={"post_id": post_id_str}
            )

        if count_view and response.data:
            try:
                client.rpc("increment_post_views", {"post_id": post_id_str}).execute()
            except Exception as e:
                logger.warning(f"Could not increment views for post {post_id_str}: {e}")

        return response.data

    @staticmethod
    def get_posts_by_user_id(user_id: str | UUID) -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("posts")
                .select("*, cities(id, name, slug)")
                .eq("user_id", normalize_uuid(user_id))
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user posts: {e}",
                code="FETCH_POSTS_FAILED",
                details={"user_id": normalize_uuid(user_id)}
            )

    @staticmethod
    def create_post(data: PostCreate) -> dict[str, Any]:
        """
        Create a post.

        Returns:
            Created post dict

        Raises:
            SupabaseClientError: If insert fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("posts")
                .insert(data.model_dump(mode="json", exclude_none=True))
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to create post: {e}")
            raise SupabaseClientError(
                message=f"Failed to create post: {e}",
                code="INSERT_POST_FAILED",
            )

        if not response.data:
            raise SupabaseClientError(message="Insert returned no data", code="INSERT_NO_DATA")

        post = response.data[0]
        logger.info(f"Created post: {post['id']} by user: {data.user_id}")
        return post

    @staticmethod
    def _get_owned_post(post_id: str, user_id: str | UUID | None) -> dict[str, Any]:
        post = PostService.get_post_by_id(post_id, count_view=False)

        if not post:
            raise PostNotFoundError(post_id)

        if user_id and str(post.get("user_id")) != str(user_id):
            # Don't reveal that the post exists
            raise PostNotFoundError(post_id)

        return post

    @staticmethod
    def update_post(
        post_id: str | UUID,
        updates: PostUpdate,
        user_id: str | UUID | None = None,
    ) -> dict[str, Any]:
        """
        Update a post.

        Raises:
            PostNotFoundError: If post doesn't exist or user doesn't own it
        """
        post_id_str = normalize_uuid(post_id)
        PostService._get_owned_post(post_id_str, user_id)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("posts")
                .update(updates.model_dump(mode="json", exclude_unset=True))
                .eq("id", post_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update post: {e}",
                code="UPDATE_POST_FAILED",
                details={"post_id": post_id_str}
            )

        if not response.data:
            raise PostNotFoundError(post_id_str)

        return response.data[0]

    @staticmethod
    def delete_post(post_id: str | UUID, user_id: str | UUID | None = None) -> None:
        """
        Delete a post (comments and likes cascade in the database).

        Raises:
            PostNotFoundError: If post doesn't exist or user doesn't own it
        """
        post_id_str = normalize_uuid(post_id)
        PostService._get_owned_post(post_id_str, user_id)

        client = SupabaseClient.get_client()

        try:
            client.table("posts").delete().eq("id", post_id_str).execute()
            logger.info(f"Deleted post: {post_id_str}")
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete post: {e}",
                code="DELETE_POST_FAILED",
                details={"post_id": post_id_str}
            )

    @staticmethod
    def has_user_liked_post(post_id: str | UUID, user_id: str | UUID) -> bool:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("post_likes")
                .select("id")
                .eq("post_id", normalize_uuid(post_id))
                .eq("user_id", normalize_uuid(user_id))
                .limit(1)
                .execute()
            )
            return bool(response.data)

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to check post like: {e}",
                code="FETCH_LIKE_FAILED",
            )

    @staticmethod
    def toggle_post_like(post_id: str | UUID, user_id: str | UUID) -> bool:
        """
        Like a post, or remove the like if it already exists.

        Returns:
            True if the post is liked after the call, False if unliked
        """
        client = SupabaseClient.get_client()
        post_id_str = normalize_uuid(post_id)
        user_id_str = normalize_uuid(user_id)

        liked = PostService.has_user_liked_post(post_id_str, user_id_str)

        try:
            if liked:
                (
                    client.table("post_likes")
                    .delete()
                    .eq("post_id", post_id_str)
                    .eq("user_id", user_id_str)
                    .execute()
                )
                return False

            client.table("post_likes").insert(
                {"post_id": post_id_str, "user_id": user_id_str}
            ).execute()
            return True

        except Exception as e:
            logger.error(f"Failed to toggle like on post {post_id_str}: {e}")
            raise SupabaseClientError(
                message=f"Failed to toggle post like: {e}",
                code="TOGGLE_LIKE_FAILED",
                details={"post_id": post_id_str}
            )
