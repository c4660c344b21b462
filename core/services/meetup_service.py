# =============================================================================
# core/services/meetup_service.py - Meetup Operations
# =============================================================================
# Meetups and their participants (`meetup_participants`).
#
# Flow:
# 1. create_meetup() inserts the meetup and joins the creator as "going"
# 2. join_meetup() upserts on (meetup_id, user_id), so re-joining just
#    updates the status
# 3. leave_meetup() deletes the participant row
#
# participant_count only counts "going" participants.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.exceptions import MeetupNotFoundError
from core.models.meetup import MeetupCreate, MeetupStatus, MeetupUpdate, ParticipantStatus
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

MEETUP_SELECT = "*, profiles(id, username, full_name, avatar_url), cities(id, name, slug)"


class MeetupService:
    """Service for meetups and participation."""

    @staticmethod
    def get_meetups(
        city_id: str | UUID | None = None,
        status: MeetupStatus | str | None = None,
        upcoming: bool = False,
        limit: int = 20,
        user_id: str | UUID | None = None,
    ) -> list[dict[str, Any]]:
        """
        List meetups, soonest first.

        Args:
            city_id: Only meetups in this city
            status: Only meetups with this status
            upcoming: Only meetups that haven't started yet
            limit: Maximum rows
            user_id: If given, each meetup gets an `is_participant` flag

        Returns:
            List of meetup dicts with embedded `profiles` and `cities`
        """
        client = SupabaseClient.get_client()

        try:
            query = client.table("meetups").select(MEETUP_SELECT)

            if city_id:
                query = query.eq("city_id", normalize_uuid(city_id))
            if status:
                query = query.eq("status", MeetupStatus(status).value)
            if upcoming:
                query = query.gte("meetup_date", datetime.now(timezone.utc).isoformat())

            response = query.order("meetup_date").limit(limit).execute()
            meetups = response.data or []

        except Exception as e:
            logger.error(f"Failed to list meetups: {e}")
            raise SupabaseClientError(
                message=f"Failed to list meetups: {e}",
                code="FETCH_MEETUPS_FAILED",
            )

        if user_id and meetups:
            joined = MeetupService._joined_meetup_ids(user_id)
            meetups = [{**m, "is_participant": m["id"] in joined} for m in meetups]

        return meetups

    @staticmethod
    def _joined_meetup_ids(user_id: str | UUID) -> set[str]:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("meetup_participants")
                .select("meetup_id")
                .eq("user_id", normalize_uuid(user_id))
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch participation: {e}",
                code="FETCH_PARTICIPANTS_FAILED",
            )

        return {row["meetup_id"] for row in response.data or []}

    @staticmethod
    def get_meetup_by_id(
        meetup_id: str | UUID,
        user_id: str | UUID | None = None,
    ) -> dict[str, Any] | None:
        """
        Fetch one meetup with `participant_count` and, for a signed-in user,
        `is_participant`.

        Returns:
            Meetup dict, or None if not found
        """
        client = SupabaseClient.get_client()
        meetup_id_str = normalize_uuid(meetup_id)

        try:
            response = (
                client.table("meetups")
                .select(MEETUP_SELECT)
                .eq("id", meetup_id_str)
                .single()
                .execute()
            )
        except Exception as e:
            if SupabaseClient.is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch meetup: {e}",
                code="FETCH_MEETUP_FAILED",
                details={"meetup_id": meetup_id_str}
            )

        meetup = response.data
        if not meetup:
            return None

        try:
            count_response = (
                client.table("meetup_participants")
                .select("id", count="exact")
                .eq("meetup_id", meetup_id_str)
                .eq("status", ParticipantStatus.GOING.value)
                .execute()
            )
            meetup["participant_count"] = count_response.count or 0

            if user_id:
                participant = (
                    client.table("meetup_participants")
                    .select("id")
                    .eq("meetup_id", meetup_id_str)
                    .eq("user_id", normalize_uuid(user_id))
                    .limit(1)
                    .execute()
                )
                meetup["is_participant"] = bool(participant.data)
            else:
                meetup["is_participant"] = False

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch meetup participants: {e}",
                code="FETCH_PARTICIPANTS_FAILED",
                details={"meetup_id": meetup_id_str}
            )

        return meetup

    @staticmethod
    def get_meetups_by_user_id(user_id: str | UUID) -> list[dict[str, Any]]:
        """Meetups created by a user, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("meetups")
                .select("*, cities(id, name, slug)")
                .eq("user_id", normalize_uuid(user_id))
                .order("created_at", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user meetups: {e}",
                code="FETCH_MEETUPS_FAILED",
            )

    @staticmethod
    def get_participating_meetups(user_id: str | UUID) -> list[dict[str, Any]]:
        """Upcoming meetups the user is going to, soonest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("meetup_participants")
                .select("meetups(*, cities(id, name, slug))")
                .eq("user_id", normalize_uuid(user_id))
                .eq("status", ParticipantStatus.GOING.value)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch participating meetups: {e}",
                code="FETCH_MEETUPS_FAILED",
            )

        now = datetime.now(timezone.utc).isoformat()
        meetups = [
            row["meetups"] for row in response.data or []
            if row.get("meetups") and row["meetups"].get("meetup_date", "") >= now
        ]
        return sorted(meetups, key=lambda m: m["meetup_date"])

    @staticmethod
    def create_meetup(data: MeetupCreate) -> dict[str, Any]:
        """
        Create a meetup and join its creator as "going".

        Raises:
            SupabaseClientError: If insert fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("meetups")
                .insert(data.model_dump(mode="json", exclude_none=True))
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to create meetup: {e}")
            raise SupabaseClientError(
                message=f"Failed to create meetup: {e}",
                code="INSERT_MEETUP_FAILED",
            )

        if not response.data:
            raise SupabaseClientError(message="Insert returned no data", code="INSERT_NO_DATA")

        meetup = response.data[0]
        logger.info(f"Created meetup: {meetup['id']} by user: {data.user_id}")

        MeetupService.join_meetup(meetup["id"], data.user_id)
        return meetup

    @staticmethod
    def _get_owned_meetup(meetup_id: str, user_id: str | UUID | None) -> dict[str, Any]:
        meetup = MeetupService.get_meetup_by_id(meetup_id)

        if not meetup:
            raise MeetupNotFoundError(meetup_id)

        if user_id and str(meetup.get("user_id")) != str(user_id):
            # Don't reveal that the meetup exists
            raise MeetupNotFoundError(meetup_id)

        return meetup

    @staticmethod
    def update_meetup(
        meetup_id: str | UUID,
        updates: MeetupUpdate,
        user_id: str | UUID | None = None,
    ) -> dict[str, Any]:
        """
        Update a meetup.

        Raises:
            MeetupNotFoundError: If meetup doesn't exist or user doesn't own it
        """
        meetup_id_str = normalize_uuid(meetup_id)
        MeetupService._get_owned_meetup(meetup_id_str, user_id)

        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("meetups")
                .update(updates.model_dump(mode="json", exclude_unset=True))
                .eq("id", meetup_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update meetup: {e}",
                code="UPDATE_MEETUP_FAILED",
                details={"meetup_id": meetup_id_str}
            )

        if not response.data:
            raise MeetupNotFoundError(meetup_id_str)

        return response.data[0]

    @staticmethod
    def delete_meetup(meetup_id: str | UUID, user_id: str | UUID | None = None) -> None:
        meetup_id_str = normalize_uuid(meetup_id)
        MeetupService._get_owned_meetup(meetup_id_str, user_id)

        client = SupabaseClient.get_client()

        try:
            client.table("meetups").delete().eq("id", meetup_id_str).execute()
            logger.info(f"Deleted meetup: {meetup_id_str}")
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete meetup: {e}",
                code="DELETE_MEETUP_FAILED",
                details={"meetup_id": meetup_id_str}
            )

    @staticmethod
    def join_meetup(
        meetup_id: str | UUID,
        user_id: str | UUID,
        status: ParticipantStatus | str = ParticipantStatus.GOING,
    ) -> dict[str, Any]:
        """
        Join a meetup or change the participation status.

        Returns:
            The participant row
        """
        client = SupabaseClient.get_client()
        row = {
            "meetup_id": normalize_uuid(meetup_id),
            "user_id": normalize_uuid(user_id),
            "status": ParticipantStatus(status).value,
        }

        try:
            response = (
                client.table("meetup_participants")
                .upsert(row, on_conflict="meetup_id,user_id")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to join meetup {row['meetup_id']}: {e}")
            raise SupabaseClientError(
                message=f"Failed to join meetup: {e}",
                code="JOIN_MEETUP_FAILED",
                details={"meetup_id": row["meetup_id"]}
            )

        return response.data[0] if response.data else row

    @staticmethod
    def leave_meetup(meetup_id: str | UUID, user_id: str | UUID) -> None:
        client = SupabaseClient.get_client()
        meetup_id_str = normalize_uuid(meetup_id)

        try:
            (
                client.table("meetup_participants")
                .delete()
                .eq("meetup_id", meetup_id_str)
                .eq("user_id", normalize_uuid(user_id))
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to leave meetup: {e}",
                code="LEAVE_MEETUP_FAILED",
                details={"meetup_id": meetup_id_str}
            )

    @staticmethod
    def get_meetup_participants(meetup_id: str | UUID) -> list[dict[str, Any]]:
        """Participant rows with embedded profiles, in join order."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table("meetup_participants")
                .select("*, profiles(id, username, full_name, avatar_url)")
                .eq("meetup_id", normalize_uuid(meetup_id))
                .order("created_at")
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch meetup participants: {e}",
                code="FETCH_PARTICIPANTS_FAILED",
            )
