# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors carry a machine-readable code and tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class KonomadsException(Exception):
    """
    Base exception for the Konomads service.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "KONOMADS_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Not Found Exceptions
# =============================================================================

class CityNotFoundError(KonomadsException):
    """Raised when a city slug doesn't exist."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"City not found: {slug}",
            code="CITY_NOT_FOUND",
            status_code=404,
            suggestion="Check the city slug, e.g. /cities/seoul",
            details={"slug": slug}
        )


class PostNotFoundError(KonomadsException):
    """Raised when a post doesn't exist or isn't owned by the caller."""

    def __init__(self, post_id: str):
        super().__init__(
            message=f"Post not found: {post_id}",
            code="POST_NOT_FOUND",
            status_code=404,
            suggestion="Check that the post_id is correct and the post hasn't been deleted",
            details={"post_id": post_id}
        )


class CommentNotFoundError(KonomadsException):
    """Raised when a comment doesn't exist or isn't owned by the caller."""

    def __init__(self, comment_id: str):
        super().__init__(
            message=f"Comment not found: {comment_id}",
            code="COMMENT_NOT_FOUND",
            status_code=404,
            details={"comment_id": comment_id}
        )


class MeetupNotFoundError(KonomadsException):
    """Raised when a meetup doesn't exist or isn't owned by the caller."""

    def __init__(self, meetup_id: str):
        super().__init__(
            message=f"Meetup not found: {meetup_id}",
            code="MEETUP_NOT_FOUND",
            status_code=404,
            suggestion="Check that the meetup_id is correct and the meetup hasn't been deleted",
            details={"meetup_id": meetup_id}
        )


class ProfileNotFoundError(KonomadsException):
    """Raised when a profile doesn't exist."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Profile not found: {identifier}",
            code="PROFILE_NOT_FOUND",
            status_code=404,
            details={"profile": identifier}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidImageTypeError(KonomadsException):
    """Raised when an uploaded image has a disallowed content type."""

    def __init__(self, content_type: str | None, allowed: list[str]):
        super().__init__(
            message="이미지 파일만 업로드할 수 있습니다.",
            code="INVALID_IMAGE_TYPE",
            status_code=400,
            suggestion=f"Only these types are supported: {', '.join(allowed)}",
            details={"content_type": content_type, "allowed_types": allowed}
        )


class ImageTooLargeError(KonomadsException):
    """Raised when an uploaded image exceeds the size limit."""

    def __init__(self, size_bytes: int, max_mb: int):
        super().__init__(
            message=f"파일 크기는 {max_mb}MB 이하여야 합니다.",
            code="IMAGE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload an image smaller than {max_mb}MB",
            details={"size_bytes": size_bytes, "max_mb": max_mb}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def konomads_exception_handler(
    request: Request,
    exc: KonomadsException
) -> JSONResponse:
    """
    Convert KonomadsException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Convert library-level errors (lib.utils.ApplicationError, e.g. a failed
    Supabase query) to a 502: the backing service, not the caller, failed.
    """
    content = {
        "detail": getattr(exc, "message", str(exc)),
        "code": getattr(exc, "code", "UPSTREAM_ERROR"),
    }
    suggestion = getattr(exc, "suggestion", None)
    if suggestion:
        content["suggestion"] = suggestion
    return JSONResponse(status_code=502, content=content)
