# =============================================================================
# tests/test_storage_service.py - Storage Service Tests
# =============================================================================
# Tests for image validation, object naming and uploads to Supabase Storage.
# =============================================================================

from unittest.mock import patch
from uuid import uuid4

import pytest

from app.config import settings
from app.exceptions import ImageTooLargeError, InvalidImageTypeError
from core.services.storage_service import (
    AVATARS_BUCKET,
    CITY_IMAGES_BUCKET,
    POST_IMAGES_BUCKET,
    StorageService,
    StoredFile,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def mock_supabase():
    with patch("core.services.storage_service.SupabaseClient") as mock:
        bucket = mock.get_client.return_value.storage.from_.return_value
        bucket.get_public_url.side_effect = lambda path: f"https://cdn.test/{path}"
        yield mock


@pytest.fixture
def bucket(mock_supabase):
    return mock_supabase.get_client.return_value.storage.from_.return_value


class TestValidateImage:
    """Content type and size checks."""

    @pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "image/gif", "image/webp"])
    def test_allowed_types(self, content_type):
        StorageService.validate_image(PNG_BYTES, content_type)

    @pytest.mark.parametrize("content_type", ["application/pdf", "text/plain", None])
    def test_rejected_types(self, content_type):
        with pytest.raises(InvalidImageTypeError) as exc_info:
            StorageService.validate_image(PNG_BYTES, content_type)

        assert exc_info.value.status_code == 400

    def test_too_large(self):
        content = b"\x00" * (settings.max_avatar_size_bytes + 1)

        with pytest.raises(ImageTooLargeError) as exc_info:
            StorageService.validate_image(content, "image/png")

        assert exc_info.value.status_code == 413
        assert exc_info.value.details["max_mb"] == settings.MAX_AVATAR_SIZE_MB

    def test_exactly_at_limit(self):
        StorageService.validate_image(b"\x00" * settings.max_avatar_size_bytes, "image/png")


class TestBuildPath:
    """Random object names keep the lower-cased extension."""

    def test_keeps_extension(self):
        path = StorageService.build_path("user-1", "Me.PNG")

        folder, name = path.split("/")
        assert folder == "user-1"
        assert name.endswith(".png")
        assert len(name) == len(".png") + 32

    def test_missing_extension(self):
        assert StorageService.build_path("f", "avatar").endswith(".bin")

    def test_unique(self):
        assert StorageService.build_path("f", "a.jpg") != StorageService.build_path("f", "a.jpg")


class TestUpload:
    """Uploads and deletes against a mocked bucket."""

    def test_upload_file(self, mock_supabase, bucket):
        stored = StorageService.upload_file(POST_IMAGES_BUCKET, "post-1", PNG_BYTES, "x.png", "image/png")

        assert isinstance(stored, StoredFile)
        assert stored.path.startswith("post-1/")
        assert stored.url == f"https://cdn.test/{stored.path}"

        mock_supabase.get_client.return_value.storage.from_.assert_any_call(POST_IMAGES_BUCKET)
        kwargs = bucket.upload.call_args.kwargs
        assert kwargs["file"] == PNG_BYTES
        assert kwargs["file_options"]["content-type"] == "image/png"
        assert kwargs["file_options"]["upsert"] == "false"

    def test_upload_failure_returns_none(self, bucket):
        bucket.upload.side_effect = RuntimeError("bucket not found")

        assert StorageService.upload_file(AVATARS_BUCKET, "u", PNG_BYTES, "x.png") is None

    def test_delete_file(self, bucket):
        assert StorageService.delete_file(AVATARS_BUCKET, "u/a.png") is True
        bucket.remove.assert_called_once_with(["u/a.png"])

    def test_delete_failure(self, bucket):
        bucket.remove.side_effect = RuntimeError("nope")

        assert StorageService.delete_file(AVATARS_BUCKET, "u/a.png") is False


class TestUploadAvatar:
    """Avatar upload updates the profile on success only."""

    def test_success_updates_profile(self, bucket, user_id):
        with patch("core.services.storage_service.ProfileService") as mock_profiles:
            stored = StorageService.upload_avatar(user_id, PNG_BYTES, "me.png", "image/png")

        assert stored.path.startswith(f"{user_id}/")
        mock_profiles.update_avatar.assert_called_once_with(str(user_id), stored.url)

    def test_invalid_type_never_uploads(self, bucket, user_id):
        with patch("core.services.storage_service.ProfileService") as mock_profiles:
            with pytest.raises(InvalidImageTypeError):
                StorageService.upload_avatar(user_id, PNG_BYTES, "me.pdf", "application/pdf")

        bucket.upload.assert_not_called()
        mock_profiles.update_avatar.assert_not_called()

    def test_failed_upload_leaves_profile(self, bucket, user_id):
        bucket.upload.side_effect = RuntimeError("down")

        with patch("core.services.storage_service.ProfileService") as mock_profiles:
            assert StorageService.upload_avatar(user_id, PNG_BYTES, "me.png", "image/png") is None

        mock_profiles.update_avatar.assert_not_called()


class TestContentImages:
    """Post and city images land in their own buckets, foldered by owner id."""

    def test_post_image(self, mock_supabase, bucket):
        post_id = uuid4()

        stored = StorageService.upload_post_image(post_id, PNG_BYTES, "cafe.jpg", "image/jpeg")

        assert stored.path.startswith(f"{post_id}/")
        assert stored.path.endswith(".jpg")
        mock_supabase.get_client.return_value.storage.from_.assert_any_call(POST_IMAGES_BUCKET)
        assert bucket.upload.call_args.kwargs["file_options"]["content-type"] == "image/jpeg"

    def test_city_image(self, mock_supabase, bucket):
        city_id = uuid4()

        stored = StorageService.upload_city_image(city_id, PNG_BYTES, "beach.webp", "image/webp")

        assert stored.path.startswith(f"{city_id}/")
        mock_supabase.get_client.return_value.storage.from_.assert_any_call(CITY_IMAGES_BUCKET)

    @pytest.mark.parametrize("upload", [StorageService.upload_post_image, StorageService.upload_city_image])
    def test_invalid_type_never_uploads(self, bucket, upload):
        with pytest.raises(InvalidImageTypeError):
            upload(uuid4(), PNG_BYTES, "notes.txt", "text/plain")

        bucket.upload.assert_not_called()

    @pytest.mark.parametrize("upload", [StorageService.upload_post_image, StorageService.upload_city_image])
    def test_failed_upload_returns_none(self, bucket, upload):
        bucket.upload.side_effect = RuntimeError("down")

        assert upload(uuid4(), PNG_BYTES, "x.png", "image/png") is None
