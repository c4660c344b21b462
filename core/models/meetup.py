# =============================================================================
# core/models/meetup.py - Meetup Schemas
# =============================================================================
# Payloads for meetups and their participants:
# - MeetupCreate / MeetupUpdate: rows in `meetups`
# - ParticipantStatus: `meetup_participants.status`
#
# Flow: creator creates a meetup -> creator auto-joins as "going" ->
# other users join/leave. Only "going" participants are counted.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class MeetupStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ParticipantStatus(str, Enum):
    GOING = "going"
    MAYBE = "maybe"
    NOT_GOING = "not_going"


class MeetupCreate(BaseModel):
    """
    Insert payload for a meetup.

    Example:
        {
            "user_id": "550e8400-...",
            "city_id": "660e8400-...",
            "title": "강릉 카페 코워킹",
            "description": "안목해변 카페에서 같이 일해요",
            "meetup_date": "2024-02-01T10:00:00+09:00",
            "max_participants": 6
        }
    """
    user_id: UUID
    city_id: UUID
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    location: str | None = None
    meetup_date: datetime
    max_participants: int | None = Field(default=None, ge=1)
    tags: list[str] | None = None


class MeetupUpdate(BaseModel):
    """Partial update payload for a meetup."""
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    location: str | None = None
    meetup_date: datetime | None = None
    max_participants: int | None = Field(default=None, ge=1)
    status: MeetupStatus | None = None
    image_url: str | None = None
    tags: list[str] | None = None
