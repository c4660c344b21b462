# =============================================================================
# core/services/city_service.py - City Queries
# =============================================================================
# Thin wrappers around the `cities` table. Each method issues one query and
# either returns rows, returns None for "no rows", or raises
# SupabaseClientError with the underlying message.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from core.models.city import CityCreate, CityUpdate
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

TABLE = "cities"


class CityService:
    """
    Service for the `cities` table.

    The listing page itself runs on the static catalog (core/catalog.py);
    these queries back the admin/content side and meetup city pickers.
    """

    @staticmethod
    def get_cities() -> list[dict[str, Any]]:
        """All cities, best overall rating first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .order("overall_rating", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch cities: {e}",
                code="FETCH_CITIES_FAILED",
            )

    @staticmethod
    def get_featured_cities() -> list[dict[str, Any]]:
        """Cities flagged is_featured, best overall rating first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("is_featured", True)
                .order("overall_rating", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch featured cities: {e}",
                code="FETCH_FEATURED_CITIES_FAILED",
            )

    @staticmethod
    def get_city_by_slug(slug: str) -> dict[str, Any] | None:
        """
        Fetch one city by slug.

        Returns:
            City dict, or None if no city has this slug
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("slug", slug)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if SupabaseClient.is_not_found(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch city: {e}",
                code="FETCH_CITY_FAILED",
                suggestion="Check that the slug exists",
                details={"slug": slug}
            )

    @staticmethod
    def get_cities_by_region(region: str) -> list[dict[str, Any]]:
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .select("*")
                .eq("region", region)
                .order("overall_rating", desc=True)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch cities by region: {e}",
                code="FETCH_CITIES_FAILED",
                details={"region": region}
            )

    @staticmethod
    def create_city(city: CityCreate) -> dict[str, Any]:
        """
        Insert a city.

        Returns:
            Inserted city dict with generated id and timestamps

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(TABLE)
                .insert(city.model_dump(mode="json", exclude_none=True))
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create city: {e}",
                code="INSERT_CITY_FAILED",
                details={"slug": city.slug}
            )

        if not response.data:
            raise SupabaseClientError(message="Insert returned no data", code="INSERT_NO_DATA")

        logger.info(f"Created city: {city.slug}")
        return response.data[0]

    @staticmethod
    def update_city(city_id: str | UUID, updates: CityUpdate) -> dict[str, Any] | None:
        """Apply a partial update; returns the updated row or None if it doesn't exist."""
        client = SupabaseClient.get_client()
        city_id_str = normalize_uuid(city_id)

        try:
            response = (
                client.table(TABLE)
                .update(updates.model_dump(mode="json", exclude_unset=True))
                .eq("id", city_id_str)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update city: {e}",
                code="UPDATE_CITY_FAILED",
                details={"city_id": city_id_str}
            )

        return response.data[0] if response.data else None

    @staticmethod
    def delete_city(city_id: str | UUID) -> None:
        client = SupabaseClient.get_client()
        city_id_str = normalize_uuid(city_id)

        try:
            client.table(TABLE).delete().eq("id", city_id_str).execute()
            logger.info(f"Deleted city: {city_id_str}")
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete city: {e}",
                code="DELETE_CITY_FAILED",
                details={"city_id": city_id_str}
            )
