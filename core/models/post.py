# =============================================================================
# core/models/post.py - Post & Comment Schemas
# =============================================================================
# Payloads for the community board:
# - PostCreate / PostUpdate: rows in `posts`
# - CommentCreate / CommentUpdate: rows in `comments` (parent_id for replies)
# =============================================================================

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class PostCategory(str, Enum):
    """Board categories."""
    GENERAL = "general"
    QUESTION = "question"
    REVIEW = "review"
    MEETUP = "meetup"


class PostCreate(BaseModel):
    """
    Insert payload for a post.

    Example:
        {
            "user_id": "550e8400-...",
            "title": "제주 워케이션 후기",
            "content": "한 달 살기 해봤습니다",
            "category": "review",
            "tags": ["제주", "카페"]
        }
    """
    user_id: UUID
    city_id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category: PostCategory = PostCategory.GENERAL
    tags: list[str] | None = None

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class PostUpdate(BaseModel):
    """Partial update payload for a post."""
    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    category: PostCategory | None = None
    tags: list[str] | None = None
    is_pinned: bool | None = None


class CommentCreate(BaseModel):
    """Insert payload for a comment; set parent_id to reply to a comment."""
    user_id: UUID
    post_id: UUID
    parent_id: UUID | None = None
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def strip_content(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1)
