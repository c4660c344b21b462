# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the Pydantic models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

from uuid import uuid4

import pytest
from pydantic import ValidationError

from app.auth.models import AuthUser, UserResponse
from core.models import (
    City,
    CityCreate,
    CommentCreate,
    FilterState,
    MeetupCreate,
    ParticipantStatus,
    PostCategory,
    PostCreate,
    ProfileUpdate,
    SortKey,
    VisibleCities,
)
from tests.conftest import make_city


# =============================================================================
# City Models
# =============================================================================

class TestCity:
    """Tests for the catalog City model."""

    def test_valid_city(self):
        city = make_city(slug="gangneung", name="강릉", region="강원도", badge="rising")

        assert city.slug == "gangneung"
        assert city.badge == "rising"
        assert city.internet_speed == 0

    def test_city_is_frozen(self):
        city = make_city()

        with pytest.raises(ValidationError):
            city.nomads_now = 10

    @pytest.mark.parametrize("overrides", [
        {"slug": "Has Spaces"},
        {"rating": 5.1},
        {"rating": -1},
        {"monthly_cost": -1},
        {"nomads_now": -3},
        {"badge": "hot"},
    ])
    def test_invalid_city(self, overrides):
        with pytest.raises(ValidationError):
            make_city(**overrides)


class TestFilterState:
    """Tests for the listing filter controls."""

    def test_defaults(self):
        state = FilterState()

        assert state.search_text == ""
        assert state.region == "all"
        assert state.sort_key is SortKey.POPULAR

    def test_sort_key_from_string(self):
        assert FilterState(sort_key="cost-high").sort_key is SortKey.COST_HIGH

    def test_unknown_sort_key(self):
        with pytest.raises(ValidationError):
            FilterState(sort_key="cheapest")


class TestVisibleCities:
    def test_empty(self):
        assert VisibleCities().is_empty

    def test_not_empty(self):
        assert not VisibleCities(cities=[make_city()], count=1).is_empty


class TestCityCreate:
    def test_defaults(self):
        city = CityCreate(slug="jinju", name="진주")

        assert city.is_featured is False
        assert city.overall_rating is None

    def test_rating_range(self):
        with pytest.raises(ValidationError):
            CityCreate(slug="jinju", name="진주", overall_rating=6)


# =============================================================================
# Post & Comment Models
# =============================================================================

class TestPostCreate:
    """Tests for PostCreate model."""

    def test_defaults(self):
        post = PostCreate(user_id=uuid4(), title="질문", content="카페 추천해주세요")

        assert post.category is PostCategory.GENERAL
        assert post.city_id is None
        assert post.tags is None

    @pytest.mark.parametrize("field", ["title", "content"])
    def test_blank_fields_rejected(self, field):
        data = {"user_id": uuid4(), "title": "t", "content": "c", field: "   "}

        with pytest.raises(ValidationError):
            PostCreate(**data)

    def test_title_too_long(self):
        with pytest.raises(ValidationError):
            PostCreate(user_id=uuid4(), title="x" * 201, content="c")

    def test_unknown_category(self):
        with pytest.raises(ValidationError):
            PostCreate(user_id=uuid4(), title="t", content="c", category="spam")


class TestCommentCreate:
    def test_content_is_stripped(self):
        comment = CommentCreate(user_id=uuid4(), post_id=uuid4(), content="  좋아요  ")
        assert comment.content == "좋아요"

    def test_blank_content(self):
        with pytest.raises(ValidationError):
            CommentCreate(user_id=uuid4(), post_id=uuid4(), content="  ")


# =============================================================================
# Meetup & Profile Models
# =============================================================================

class TestMeetupCreate:
    """Tests for MeetupCreate model."""

    def test_valid(self):
        meetup = MeetupCreate(
            user_id=uuid4(),
            city_id=uuid4(),
            title="양양 서핑 & 코워킹",
            description="오전 서핑, 오후 작업",
            meetup_date="2030-07-01T09:00:00+09:00",
            max_participants=8,
        )

        assert meetup.meetup_date.year == 2030
        assert meetup.location is None

    def test_max_participants_positive(self):
        with pytest.raises(ValidationError):
            MeetupCreate(
                user_id=uuid4(),
                city_id=uuid4(),
                title="t",
                description="d",
                meetup_date="2030-07-01T09:00:00",
                max_participants=0,
            )

    def test_participant_status_values(self):
        assert [s.value for s in ParticipantStatus] == ["going", "maybe", "not_going"]


class TestProfileUpdate:
    @pytest.mark.parametrize("username", ["nomad_kim", "kim.nomad", "k-2"])
    def test_valid_usernames(self, username):
        assert ProfileUpdate(username=username).username == username

    @pytest.mark.parametrize("username", ["a", "has space", "한글이름", "x" * 31])
    def test_invalid_usernames(self, username):
        with pytest.raises(ValidationError):
            ProfileUpdate(username=username)

    def test_dump_includes_cleared_fields(self):
        assert ProfileUpdate().model_dump() == {
            "username": None,
            "full_name": None,
            "bio": None,
            "location": None,
            "website": None,
        }


# =============================================================================
# Auth Models
# =============================================================================

class TestAuthModels:
    def test_auth_user_frozen(self):
        user = AuthUser(id=uuid4(), email="a@b.kr")

        with pytest.raises(ValidationError):
            user.email = "c@d.kr"

    def test_user_response_optional_fields(self):
        response = UserResponse(id=uuid4())

        assert response.email is None
        assert response.username is None
