# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Image uploads to Supabase Storage. Files are stored under
# `<folder>/<random hex>.<ext>` and served through public bucket URLs.
#
# Buckets:
# - avatars:      <user_id>/...
# - post-images:  <post_id>/...
# - city-images:  <city_id>/...
# =============================================================================

import logging
import os
from dataclasses import dataclass
from uuid import UUID, uuid4

from app.config import settings
from app.exceptions import ImageTooLargeError, InvalidImageTypeError
from core.services.profile_service import ProfileService
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)

AVATARS_BUCKET = "avatars"
POST_IMAGES_BUCKET = "post-images"
CITY_IMAGES_BUCKET = "city-images"


@dataclass(frozen=True)
class StoredFile:
    """Where an uploaded file lives and how to reach it."""
    path: str
    url: str


class StorageService:
    """
    Service for Supabase Storage operations.

    Upload failures are logged and reported as None so callers can show a
    friendly message instead of a stack trace.
    """

    @staticmethod
    def validate_image(content: bytes, content_type: str | None) -> None:
        """
        Check an uploaded image against the allowed types and size limit.

        Raises:
            InvalidImageTypeError: If content_type isn't an allowed image type
            ImageTooLargeError: If content exceeds MAX_AVATAR_SIZE_MB
        """
        allowed = settings.allowed_image_types_list
        if content_type not in allowed:
            raise InvalidImageTypeError(content_type, allowed)

        if len(content) > settings.max_avatar_size_bytes:
            raise ImageTooLargeError(len(content), settings.MAX_AVATAR_SIZE_MB)

    @staticmethod
    def build_path(folder: str, filename: str) -> str:
        """
        Random object name inside a folder, keeping the original extension.

        Example:
            build_path("abc", "me.PNG") -> "abc/3f2c...e1.png"
        """
        ext = os.path.splitext(filename)[1].lstrip(".").lower() or "bin"
        return f"{folder}/{uuid4().hex}.{ext}"

    @staticmethod
    def upload_file(
        bucket: str,
        folder: str,
        content: bytes,
        filename: str,
        content_type: str | None = None,
    ) -> StoredFile | None:
        """
        Upload raw file content to storage.

        Args:
            bucket: Storage bucket name
            folder: Folder inside the bucket (usually an owner id)
            content: File bytes
            filename: Original filename (only the extension is kept)
            content_type: MIME type stored with the object

        Returns:
            StoredFile with the object path and public URL, or None on failure
        """
        client = SupabaseClient.get_client()
        path = StorageService.build_path(folder, filename)

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={
                    "content-type": content_type or "application/octet-stream",
                    "cache-control": "3600",
                    "upsert": "false",
                }
            )
        except Exception as e:
            logger.error(f"Storage upload failed ({bucket}/{path}): {e}")
            return None

        logger.info(f"Uploaded file to storage: {bucket}/{path}")
        return StoredFile(path=path, url=StorageService.get_public_url(bucket, path))

    @staticmethod
    def get_public_url(bucket: str, path: str) -> str:
        client = SupabaseClient.get_client()
        return client.storage.from_(bucket).get_public_url(path)

    @staticmethod
    def delete_file(bucket: str, path: str) -> bool:
        """
        Delete a file from storage.

        Returns:
            True if deleted successfully
        """
        client = SupabaseClient.get_client()

        try:
            client.storage.from_(bucket).remove([path])
            logger.info(f"Deleted file from storage: {bucket}/{path}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete file: {e}")
            return False

    @staticmethod
    def upload_avatar(
        user_id: str | UUID,
        content: bytes,
        filename: str,
        content_type: str | None,
    ) -> StoredFile | None:
        """
        Validate and upload an avatar, then point the profile at it.

        Raises:
            InvalidImageTypeError, ImageTooLargeError: On invalid images
        """
        StorageService.validate_image(content, content_type)

        user_id_str = normalize_uuid(user_id)
        stored = StorageService.upload_file(
            AVATARS_BUCKET, user_id_str, content, filename, content_type
        )
        if stored is None:
            return None

        ProfileService.update_avatar(user_id_str, stored.url)
        return stored

    @staticmethod
    def upload_post_image(
        post_id: str | UUID,
        content: bytes,
        filename: str,
        content_type: str | None,
    ) -> StoredFile | None:
        StorageService.validate_image(content, content_type)
        return StorageService.upload_file(
            POST_IMAGES_BUCKET, normalize_uuid(post_id), content, filename, content_type
        )

    @staticmethod
    def upload_city_image(
        city_id: str | UUID,
        content: bytes,
        filename: str,
        content_type: str | None,
    ) -> StoredFile | None:
        StorageService.validate_image(content, content_type)
        return StorageService.upload_file(
            CITY_IMAGES_BUCKET, normalize_uuid(city_id), content, filename, content_type
        )
