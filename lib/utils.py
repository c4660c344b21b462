# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID normalization for PostgREST filters
# - Form value cleanup (blank -> None, comma-separated tags)
# - Base error class with actionable suggestions
# =============================================================================

from typing import Any
from urllib.parse import quote
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Form Utilities
# =============================================================================

def blank_to_none(value: str | None) -> str | None:
    """Return None for missing or whitespace-only form values."""
    if value is None or not value.strip():
        return None
    return value


def split_tags(value: str | None) -> list[str] | None:
    """
    Split a comma-separated tag field.

    Example:
        split_tags("카페, 해변 ,") -> ["카페", "해변"]
        split_tags("") -> None
    """
    if not value:
        return None
    tags = [t.strip() for t in value.split(",") if t.strip()]
    return tags or None


def with_message(path: str, key: str, message: str) -> str:
    """
    Append a URL-encoded message query parameter to a local path.

    Example:
        with_message("/login", "error", "로그인이 필요합니다.")
        -> "/login?error=%EB%A1%9C..."
    """
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{key}={quote(message)}"


def is_safe_redirect(path: str | None) -> bool:
    """Only same-site absolute paths are accepted as post-login destinations."""
    return bool(path) and path.startswith("/") and not path.startswith("//")


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }
