# =============================================================================
# core/models/profile.py - Profile Schemas
# =============================================================================
# `profiles` rows are created by a database trigger when a user signs up;
# the application only reads and updates them.
# =============================================================================

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    """
    Update payload for the profile form.

    Empty form fields are stored as NULL, so every field is optional and
    explicitly sent (exclude_unset is not used for this payload).
    """
    username: str | None = Field(default=None, min_length=2, max_length=30, pattern=r"^[A-Za-z0-9_.-]+$")
    full_name: str | None = Field(default=None, max_length=100)
    bio: str | None = Field(default=None, max_length=500)
    location: str | None = Field(default=None, max_length=100)
    website: str | None = Field(default=None, max_length=200)
