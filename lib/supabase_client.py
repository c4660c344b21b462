# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the connection to the hosted Supabase backend:
# - A lazily created service-role client shared by the query layer
# - Fresh anon-key clients for auth flows (sign-in, sign-up, password reset),
#   so one user's auth state never lives in a shared client
# - Helpers for recognising PostgREST "no rows" errors
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
#   rows = client.table("cities").select("*").execute().data
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

# PostgREST error code returned by .single() when no row matched
NOT_FOUND_CODE = "PGRST116"


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    Carries a machine-readable code and an actionable suggestion.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class SupabaseClient:
    """
    Access point for the Supabase backend.

    The service-role client is created once per process and reused by every
    service. All methods are class methods for easy access without
    instantiation.

    Example:
        client = SupabaseClient.get_client()
        response = client.table("posts").select("*").limit(20).execute()
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the shared service-role Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS);
        ownership checks therefore live in the service layer.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def create_auth_client(cls) -> Client:
        """
        Create a new anon-key client for a single auth flow.

        Auth calls (sign_in_with_password, sign_up, set_session, ...) store
        session state on the client, so each flow gets its own instance.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase auth client: {e}",
                code="AUTH_CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests and after credential rotation)."""
        cls._instance = None

    @staticmethod
    def is_not_found(error: Exception) -> bool:
        """Check whether an exception is PostgREST's 'no rows returned' error."""
        code = getattr(error, "code", None)
        return code == NOT_FOUND_CODE or NOT_FOUND_CODE in str(error)
