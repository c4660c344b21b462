# =============================================================================
# core/services/comment_service.py - Comment Operations
# =============================================================================
# Comments are one level deep: a top-level comment has parent_id NULL,
# replies point at a top-level comment. Only top-level comments count
# towards `posts.comment_count` (via the `increment_post_comments` function).
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import CommentNotFoundError
from core.models.post import CommentCreate, CommentUpdate
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

COMMENT_SELECT = "*, profiles(id, username, full_name, avatar_url)"


class CommentService:
    """Service for post comments and replies."""

    @staticmethod
    def get_comments_by_post_id(post_id: str | UUID) -> list[dict[str, Any]]:
        """Top-level comments of a post, oldest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("comments")
                .select(COMMENT_SELECT)
                .eq("post_id", normalize_uuid(post_id))
                .is_("parent_id", "null")
                .order("created_at")
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch comments: {e}",
                code="FETCH_COMMENTS_FAILED",
                details={"post_id": normalize_uuid(post_id)}
            )

    @staticmethod
    def get_replies_by_comment_id(comment_id: str | UUID) -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("comments")
                .select(COMMENT_SELECT)
                .eq("parent_id", normalize_uuid(comment_id))
                .order("created_at")
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch replies: {e}",
                code="FETCH_COMMENTS_FAILED",
                details={"comment_id": normalize_uuid(comment_id)}
            )

    @staticmethod
    def get_comment_thread(post_id: str | UUID) -> list[dict[str, Any]]:
        """
        Top-level comments with their replies nested under `replies`.

        Returns:
            [{...comment, "replies": [{...reply}, ...]}, ...]
        """
        comments = CommentService.get_comments_by_post_id(post_id)

        return [
            {**comment, "replies": CommentService.get_replies_by_comment_id(comment["id"])}
            for comment in comments
        ]

    @staticmethod
    def get_comment_by_id(comment_id: str | UUID) -> dict[str, Any] | None:
        client = SupabaseClient.get_client()
        comment_id_str = normalize_uuid(comment_id)

        try:
            response = (
                client.table("comments")
                .select("*")
                .eq("id", comment_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if SupabaseClient.is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch comment: {e}",
                code="FETCH_COMMENT_FAILED",
                details={"comment_id": comment_id_str}
            )

    @staticmethod
    def create_comment(data: CommentCreate) -> dict[str, Any]:
        """
        Create a comment or reply.

        Raises:
            SupabaseClientError: If insert fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("comments")
                .insert(data.model_dump(mode="json", exclude_none=True))
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to create comment: {e}")
            raise SupabaseClientError(
                message=f"Failed to create comment: {e}",
                code="INSERT_COMMENT_FAILED",
                details={"post_id": str(data.post_id)}
            )

        if not response.data:
            raise SupabaseClientError(message="Insert returned no data", code="INSERT_NO_DATA")

        if data.parent_id is None:
            try:
                client.rpc("increment_post_comments", {"post_id": str(data.post_id)}).execute()
            except Exception as e:
                logger.warning(f"Could not increment comment count for post {data.post_id}: {e}")

        return response.data[0]

    @staticmethod
    def _get_owned_comment(comment_id: str, user_id: str | UUID | None) -> dict[str, Any]:
        comment = CommentService.get_comment_by_id(comment_id)

        if not comment or (user_id and str(comment.get("user_id")) != str(user_id)):
            raise CommentNotFoundError(comment_id)

        return comment

    @staticmethod
    def update_comment(
        comment_id: str | UUID,
        updates: CommentUpdate,
        user_id: str | UUID | None = None,
    ) -> dict[str, Any]:
        comment_id_str = normalize_uuid(comment_id)
        CommentService._get_owned_comment(comment_id_str, user_id)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("comments")
                .update(updates.model_dump(mode="json"))
                .eq("id", comment_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update comment: {e}",
                code="UPDATE_COMMENT_FAILED",
                details={"comment_id": comment_id_str}
            )

        if not response.data:
            raise CommentNotFoundError(comment_id_str)

        return response.data[0]

    @staticmethod
    def delete_comment(comment_id: str | UUID, user_id: str | UUID | None = None) -> None:
        """
        Delete a comment (its replies cascade in the database).

        Raises:
            CommentNotFoundError: If comment doesn't exist or user doesn't own it
        """
        comment_id_str = normalize_uuid(comment_id)
        CommentService._get_owned_comment(comment_id_str, user_id)

        client = SupabaseClient.get_client()

        try:
            client.table("comments").delete().eq("id", comment_id_str).execute()
            logger.info(f"Deleted comment: {comment_id_str}")
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete comment: {e}",
                code="DELETE_COMMENT_FAILED",
                details={"comment_id": comment_id_str}
            )

    @staticmethod
    def toggle_comment_like(comment_id: str | UUID, user_id: str | UUID) -> bool:
        """
        Like a comment, or remove the like if it already exists.

        Returns:
            True if the comment is liked after the call
        """
        client = SupabaseClient.get_client()
        comment_id_str = normalize_uuid(comment_id)
        user_id_str = normalize_uuid(user_id)

        try:
            existing = (
                client.table("comment_likes")
                .select("id")
                .eq("comment_id", comment_id_str)
                .eq("user_id", user_id_str)
                .limit(1)
                .execute()
            )

            if existing.data:
                (
                    client.table("comment_likes")
                    .delete()
                    .eq("comment_id", comment_id_str)
                    .eq("user_id", user_id_str)
                    .execute()
                )
                return False

            client.table("comment_likes").insert(
                {"comment_id": comment_id_str, "user_id": user_id_str}
            ).execute()
            return True

        except Exception as e:
            logger.error(f"Failed to toggle like on comment {comment_id_str}: {e}")
            raise SupabaseClientError(
                message=f"Failed to toggle comment like: {e}",
                code="TOGGLE_LIKE_FAILED",
                details={"comment_id": comment_id_str}
            )
