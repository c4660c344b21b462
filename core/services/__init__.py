# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .city_service import CityService
from .post_service import PostService
from .comment_service import CommentService
from .meetup_service import MeetupService
from .profile_service import ProfileService
from .storage_service import StorageService, StoredFile

__all__ = [
    "CityService",
    "PostService",
    "CommentService",
    "MeetupService",
    "ProfileService",
    "StorageService",
    "StoredFile",
]
