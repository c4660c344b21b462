# =============================================================================
# app/routers/meetups.py - Meetup Endpoints
# =============================================================================
# Pages:
# - GET /meetups, /meetups/new, /meetups/{id}
#
# Actions:
# - POST /meetups               create; the creator joins automatically
# - POST /meetups/{id}/delete   delete own meetup (redirects)
# - POST /meetups/{id}/join     join as "going" (JSON)
# - POST /meetups/{id}/leave    leave (JSON)
# =============================================================================

import logging
from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Form, Path, Query

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
from app.exceptions import KonomadsException, MeetupNotFoundError
from core.models.meetup import MeetupCreate, MeetupStatus, ParticipantStatus
from core.services.meetup_service import MeetupService
from lib.formatting import format_datetime
from lib.supabase_client import SupabaseClientError
from lib.utils import blank_to_none, split_tags

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS_MESSAGE = "필수 항목을 모두 입력해주세요."
CREATE_FAILED_MESSAGE = "밋업 생성에 실패했습니다."


# =============================================================================
# Pages
# =============================================================================

@router.get("/meetups")
async def list_meetups(
    user: OptionalUserDep,
    city_id: Optional[UUID] = None,
    status: Optional[MeetupStatus] = None,
    upcoming: bool = True,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """Meetups, soonest first; flags the ones the signed-in user joined."""
    meetups = MeetupService.get_meetups(
        city_id=city_id,
        status=status,
        upcoming=upcoming,
        limit=limit,
        user_id=user.id if user else None,
    )

    meetups = [{**m, "meetup_date_label": format_datetime(m.get("meetup_date"))} for m in meetups]

    return {"meetups": meetups, "count": len(meetups)}


@router.get("/meetups/new")
async def new_meetup_page(error: Optional[str] = None):
    return {
        "error": error,
        "cities": city_options(),
    }


@router.get("/meetups/{meetup_id}")
async def get_meetup(
    meetup_id: Annotated[UUID, Path(description="Meetup UUID")],
    user: OptionalUserDep,
    error: Optional[str] = None,
):
    """
    Meetup detail with participants.

    Raises:
        404: If the meetup doesn't exist
    """
    meetup = MeetupService.get_meetup_by_id(meetup_id, user_id=user.id if user else None)

    if not meetup:
        raise MeetupNotFoundError(str(meetup_id))

    max_participants = meetup.get("max_participants")

    return {
        "meetup": {**meetup, "meetup_date_label": format_datetime(meetup.get("meetup_date"))},
        "participants": MeetupService.get_meetup_participants(meetup_id),
        "is_owner": bool(user and str(meetup.get("user_id")) == str(user.id)),
        "is_full": bool(max_participants and meetup["participant_count"] >= max_participants),
        "error": error,
    }


# =============================================================================
# Actions
# =============================================================================

@router.post("/meetups")
async def create_meetup(
    user: OptionalUserDep,
    title: str = Form(""),
    description: str = Form(""),
    city_id: str = Form(""),
    meetup_date: str = Form(""),
    location: str = Form(""),
    max_participants: str = Form(""),
    tags: str = Form(""),
):
    if user is None:
        return login_redirect()

    if not (title.strip() and description.strip() and city_id.strip() and meetup_date.strip()):
        return redirect_to("/meetups/new", "error", REQUIRED_FIELDS_MESSAGE)

    try:
        data = MeetupCreate(
            user_id=user.id,
            city_id=city_id,
            title=title,
            description=description,
            location=blank_to_none(location),
            meetup_date=datetime.fromisoformat(meetup_date),
            max_participants=int(max_participants) if max_participants.strip() else None,
            tags=split_tags(tags),
        )
        MeetupService.create_meetup(data)

    except ValueError as e:
        # Bad date, bad number or a pydantic ValidationError
        logger.info(f"Rejected meetup form: {e}")
        return redirect_to("/meetups/new", "error", CREATE_FAILED_MESSAGE)

    except SupabaseClientError as e:
        return redirect_to("/meetups/new", "error", error_message(e, CREATE_FAILED_MESSAGE))

    return redirect_to("/meetups")


@router.post("/meetups/{meetup_id}/delete")
async def delete_meetup(meetup_id: UUID, user: OptionalUserDep):
    if user is None:
        return login_redirect()

    try:
        MeetupService.delete_meetup(meetup_id, user_id=user.id)
    except (KonomadsException, SupabaseClientError) as e:
        return redirect_to(f"/meetups/{meetup_id}", "error", error_message(e, "밋업 삭제에 실패했습니다."))

    return redirect_to("/meetups")


@router.post("/meetups/{meetup_id}/join")
async def join_meetup(meetup_id: UUID, user: OptionalUserDep):
    if user is None:
        return auth_required_error()

    try:
        MeetupService.join_meetup(meetup_id, user.id, ParticipantStatus.GOING)
    except SupabaseClientError as e:
        return action_error(error_message(e, "밋업 참가에 실패했습니다."))

    return action_success()


@router.post("/meetups/{meetup_id}/leave")
async def leave_meetup(meetup_id: UUID, user: OptionalUserDep):
    if user is None:
        return auth_required_error()

    try:
        MeetupService.leave_meetup(meetup_id, user.id)
    except SupabaseClientError as e:
        return action_error(error_message(e, "밋업 참가 취소에 실패했습니다."))

    return action_success()
