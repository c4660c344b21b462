# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - city.py: City records, filter state and sort keys
# - post.py: Post and comment payloads
# - meetup.py: Meetup and participant payloads
# - profile.py: Profile update payload
#
# These models define the "contract" between API and database.
# =============================================================================

# -----------------------------------------------------------------------------
# City Models - Catalog and listing filter
# -----------------------------------------------------------------------------
from .city import (
    ALL_REGIONS,
    City,
    CityCreate,
    CityUpdate,
    FilterState,
    SortKey,
    VisibleCities,
)

# -----------------------------------------------------------------------------
# Community Models - Posts, comments, meetups, profiles
# -----------------------------------------------------------------------------
from .post import (
    CommentCreate,
    CommentUpdate,
    PostCategory,
    PostCreate,
    PostUpdate,
)
from .meetup import (
    MeetupCreate,
    MeetupStatus,
    MeetupUpdate,
    ParticipantStatus,
)
from .profile import ProfileUpdate

__all__ = [
    # City
    "ALL_REGIONS",
    "City",
    "CityCreate",
    "CityUpdate",
    "FilterState",
    "SortKey",
    "VisibleCities",
    # Posts
    "CommentCreate",
    "CommentUpdate",
    "PostCategory",
    "PostCreate",
    "PostUpdate",
    # Meetups
    "MeetupCreate",
    "MeetupStatus",
    "MeetupUpdate",
    "ParticipantStatus",
    # Profiles
    "ProfileUpdate",
]
