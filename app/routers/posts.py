# =============================================================================
# app/routers/posts.py - Community Board Endpoints
# =============================================================================
# Pages:
# - GET /posts, /posts/new, /posts/{id}
#
# Actions:
# - POST /posts                    create (redirects)
# - POST /posts/{id}/delete        delete own post (redirects)
# - POST /posts/{id}/like          toggle like (JSON)
# - POST /posts/{id}/comments      comment or reply (JSON)
# - POST /comments/{id}/like       toggle comment like (JSON)
# =============================================================================

import logging
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Form, Path, Query
from pydantic import ValidationError

from app.dependencies import (
    OptionalUserDep,
    action_error,
    action_success,
    auth_required_error,
    city_options,
    error_message,
    login_redirect,
    redirect_to,
)
from app.exceptions import KonomadsException, PostNotFoundError
from core.models.post import CommentCreate, PostCategory, PostCreate
from core.services.comment_service import CommentService
from core.services.post_service import PostService
from lib.formatting import time_ago
from lib.supabase_client import SupabaseClientError
from lib.utils import blank_to_none, split_tags

logger = logging.getLogger(__name__)

router = APIRouter()

PAGE_SIZE = 20


# =============================================================================
# Pages
# =============================================================================

@router.get("/posts")
async def list_posts(
    user: OptionalUserDep,
    city_id: Optional[UUID] = None,
    category: Optional[PostCategory] = None,
    page: Annotated[int, Query(ge=1)] = 1,
):
    """Board listing, pinned posts first and then newest."""
    posts = PostService.get_posts(
        city_id=city_id,
        category=category,
        limit=PAGE_SIZE,
        offset=(page - 1) * PAGE_SIZE,
    )

    return {
        "posts": [{**p, "created_ago": time_ago(p.get("created_at"))} for p in posts],
        "page": page,
        "has_more": len(posts) == PAGE_SIZE,
        "categories": [c.value for c in PostCategory],
        "can_post": user is not None,
    }


@router.get("/posts/new")
async def new_post_page(error: Optional[str] = None):
    return {
        "error": error,
        "categories": [c.value for c in PostCategory],
        "cities": city_options(),
    }


@router.get("/posts/{post_id}")
async def get_post(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    user: OptionalUserDep,
    error: Optional[str] = None,
):
    """
    Post detail with its comment thread.

    Raises:
        404: If the post doesn't exist
    """
    post = PostService.get_post_by_id(post_id)

    if not post:
        raise PostNotFoundError(str(post_id))

    return {
        "post": {**post, "created_ago": time_ago(post.get("created_at"))},
        "comments": CommentService.get_comment_thread(post_id),
        "liked": PostService.has_user_liked_post(post_id, user.id) if user else False,
        "is_owner": bool(user and str(post.get("user_id")) == str(user.id)),
        "error": error,
    }


# =============================================================================
# Actions
# =============================================================================

@router.post("/posts")
async def create_post(
    user: OptionalUserDep,
    title: str = Form(""),
    content: str = Form(""),
    city_id: str = Form(""),
    category: str = Form(""),
    tags: str = Form(""),
):
    if user is None:
        return login_redirect()

    if not title.strip() or not content.strip():
        return redirect_to("/posts/new", "error", "제목과 내용을 입력해주세요.")

    try:
        data = PostCreate(
            user_id=user.id,
            city_id=blank_to_none(city_id),
            title=title,
            content=content,
            category=category or PostCategory.GENERAL,
            tags=split_tags(tags),
        )
        PostService.create_post(data)

    except ValidationError as e:
        logger.info(f"Rejected post form: {e}")
        return redirect_to("/posts/new", "error", "게시글 작성에 실패했습니다.")

    except SupabaseClientError as e:
        return redirect_to("/posts/new", "error", error_message(e, "게시글 작성에 실패했습니다."))

    return redirect_to("/posts")


@router.post("/posts/{post_id}/delete")
async def delete_post(post_id: UUID, user: OptionalUserDep):
    if user is None:
        return login_redirect()

    try:
        PostService.delete_post(post_id, user_id=user.id)
    except (KonomadsException, SupabaseClientError) as e:
        return redirect_to(f"/posts/{post_id}", "error", error_message(e, "게시글 삭제에 실패했습니다."))

    return redirect_to("/posts")


@router.post("/posts/{post_id}/like")
async def like_post(post_id: UUID, user: OptionalUserDep):
    if user is None:
        return auth_required_error()

    try:
        liked = PostService.toggle_post_like(post_id, user.id)
    except SupabaseClientError as e:
        return action_error(error_message(e, "좋아요 처리에 실패했습니다."))

    return action_success(liked=liked)


@router.post("/posts/{post_id}/comments")
async def create_comment(
    post_id: UUID,
    user: OptionalUserDep,
    content: str = Form(""),
    parent_id: str = Form(""),
):
    if user is None:
        return auth_required_error()

    if not content.strip():
        return action_error("댓글 내용을 입력해주세요.")

    try:
        comment = CommentService.create_comment(CommentCreate(
            user_id=user.id,
            post_id=post_id,
            parent_id=blank_to_none(parent_id),
            content=content,
        ))
    except ValidationError:
        return action_error("댓글 작성에 실패했습니다.")
    except SupabaseClientError as e:
        return action_error(error_message(e, "댓글 작성에 실패했습니다."))

    return action_success(comment=comment)


@router.post("/comments/{comment_id}/like")
async def like_comment(comment_id: UUID, user: OptionalUserDep):
    if user is None:
        return auth_required_error()

    try:
        liked = CommentService.toggle_comment_like(comment_id, user.id)
    except SupabaseClientError as e:
        return action_error(error_message(e, "좋아요 처리에 실패했습니다."))

    return action_success(liked=liked)
