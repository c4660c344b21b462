# =============================================================================
# tests/test_city_filter.py - City Listing Filter Tests
# =============================================================================
# This module contains tests for:
# - Default state, region filter, search filter and their combination
# - All four sort orders on a fixture with known values
# - Reset, purity and stability
# - The bundled catalog and related-city lookup
# =============================================================================

from __future__ import annotations

import pytest

from core.catalog import CITIES
from core.city_filter import (
    apply_filter,
    find_city,
    list_regions,
    related_cities,
    reset_filter,
    visible_cities,
)
from core.models.city import FilterState, SortKey
from tests.conftest import make_city


def slugs(result) -> list[str]:
    return [c.slug for c in result.cities]


# =============================================================================
# Default State
# =============================================================================

class TestDefaultState:
    """No search, all regions, most popular first."""

    def test_returns_every_city_by_nomads_now(self, three_cities):
        result = visible_cities(three_cities, "", "all", "popular")

        assert slugs(result) == ["seoul", "gangneung", "jinju"]
        assert result.count == len(three_cities)
        assert not result.is_empty

    def test_defaults_match_explicit_arguments(self, three_cities):
        assert visible_cities(three_cities) == visible_cities(three_cities, "", "all", SortKey.POPULAR)

    def test_whitespace_search_is_ignored(self, three_cities):
        result = visible_cities(three_cities, search_text="   \t ")
        assert result.count == 3

    def test_empty_catalog(self):
        result = visible_cities([])

        assert result.cities == []
        assert result.count == 0
        assert result.is_empty


# =============================================================================
# Region Filter
# =============================================================================

class TestRegionFilter:
    """Exact, case-sensitive region match."""

    def test_region_narrows_set(self, regional_cities):
        result = visible_cities(regional_cities, region="Gyeongsang")

        assert slugs(result) == ["busan", "jinju"]
        assert result.count == 2

    def test_region_results_follow_sort_order(self, regional_cities):
        result = visible_cities(regional_cities, region="Gyeongsang", sort_key="cost-low")
        assert slugs(result) == ["jinju", "busan"]

    def test_region_is_case_sensitive(self, regional_cities):
        result = visible_cities(regional_cities, region="gyeongsang")
        assert result.is_empty

    def test_unknown_region_yields_empty(self, regional_cities):
        result = visible_cities(regional_cities, region="Atlantis")

        assert result.cities == []
        assert result.count == 0


# =============================================================================
# Search Filter
# =============================================================================

class TestSearchFilter:
    """Case-insensitive substring over name, region and description."""

    @pytest.mark.parametrize("needle", ["BUS", "busan", "Busan", "usa"])
    def test_matches_name_any_case(self, regional_cities, needle):
        assert "busan" in slugs(visible_cities(regional_cities, search_text=needle))

    def test_matches_region(self, regional_cities):
        result = visible_cities(regional_cities, search_text="capital")
        assert slugs(result) == ["seoul"]

    def test_matches_description(self, regional_cities):
        result = visible_cities(regional_cities, search_text="HARBOUR")
        assert slugs(result) == ["busan"]

    def test_search_is_trimmed(self, regional_cities):
        result = visible_cities(regional_cities, search_text="  jinju  ")
        assert slugs(result) == ["jinju"]

    def test_no_match(self, regional_cities):
        result = visible_cities(regional_cities, search_text="zzz")
        assert result.is_empty

    def test_korean_search_on_catalog(self):
        result = visible_cities(CITIES, search_text="커피")
        assert slugs(result) == ["gangneung"]


# =============================================================================
# Combined Filters
# =============================================================================

class TestCombinedFilters:
    """Region and search must both pass."""

    def test_region_and_search_select_one(self, regional_cities):
        result = visible_cities(regional_cities, search_text="river", region="Gyeongsang")

        assert slugs(result) == ["jinju"]
        assert result.count == 1

    def test_no_city_satisfies_both(self, regional_cities):
        result = visible_cities(regional_cities, search_text="coworking", region="Gyeongsang")

        assert result.cities == []
        assert result.count == 0
        assert result.is_empty


# =============================================================================
# Sorting
# =============================================================================

class TestSorting:
    """Each sort key on a fixture with known values."""

    @pytest.mark.parametrize("sort_key,expected", [
        ("popular", ["seoul", "gangneung", "jinju"]),
        ("rating", ["seoul", "gangneung", "jinju"]),
        ("cost-low", ["jinju", "gangneung", "seoul"]),
        ("cost-high", ["seoul", "gangneung", "jinju"]),
    ])
    def test_sort_order(self, three_cities, sort_key, expected):
        assert slugs(visible_cities(three_cities, sort_key=sort_key)) == expected

    def test_cost_low_starts_with_cheapest(self, three_cities):
        result = visible_cities(three_cities, sort_key=SortKey.COST_LOW)
        assert [c.monthly_cost for c in result.cities] == [1_450_000, 1_800_000, 2_800_000]

    def test_rating_differs_from_popular(self):
        cities = [
            make_city(id="1", slug="a", rating=3.0, nomads_now=100),
            make_city(id="2", slug="b", rating=5.0, nomads_now=1),
        ]

        assert slugs(visible_cities(cities, sort_key="popular")) == ["a", "b"]
        assert slugs(visible_cities(cities, sort_key="rating")) == ["b", "a"]

    @pytest.mark.parametrize("sort_key", list(SortKey))
    def test_ties_keep_original_order(self, sort_key):
        cities = [
            make_city(id=str(i), slug=f"c{i}", monthly_cost=1_000_000, rating=4.0, nomads_now=10)
            for i in range(5)
        ]

        assert slugs(visible_cities(cities, sort_key=sort_key)) == ["c0", "c1", "c2", "c3", "c4"]

    def test_unknown_sort_key_rejected(self, three_cities):
        with pytest.raises(ValueError):
            visible_cities(three_cities, sort_key="newest")


# =============================================================================
# Reset & Purity
# =============================================================================

class TestResetAndPurity:
    """The engine is a pure function of its inputs."""

    def test_reset_returns_default_state(self):
        assert reset_filter() == FilterState()
        assert reset_filter().sort_key == SortKey.POPULAR

    @pytest.mark.parametrize("state", [
        FilterState(search_text="sea", region="Gangwon", sort_key=SortKey.COST_HIGH),
        FilterState(search_text="nothing matches this"),
        FilterState(region="Capital", sort_key=SortKey.RATING),
    ])
    def test_reset_reproduces_default_output(self, three_cities, state):
        apply_filter(three_cities, state)

        assert apply_filter(three_cities, reset_filter()) == visible_cities(three_cities)

    def test_input_not_mutated(self, three_cities):
        before = list(three_cities)

        visible_cities(three_cities, search_text="a", sort_key="cost-low")

        assert three_cities == before

    def test_returns_new_list(self, three_cities):
        result = visible_cities(three_cities)
        assert result.cities is not three_cities

    def test_repeatable(self, three_cities):
        first = visible_cities(three_cities, "s", "all", "rating")
        second = visible_cities(three_cities, "s", "all", "rating")
        assert first == second


# =============================================================================
# Catalog & Lookups
# =============================================================================

class TestCatalog:
    """The bundled city list and helpers built on it."""

    def test_catalog_slugs_unique(self):
        assert len({c.slug for c in CITIES}) == len(CITIES) == 15

    def test_catalog_default_order(self):
        assert slugs(visible_cities(CITIES))[:3] == ["seoul", "jeju", "busan"]

    def test_catalog_cheapest_and_most_expensive(self):
        cheapest = visible_cities(CITIES, sort_key="cost-low").cities[0]
        priciest = visible_cities(CITIES, sort_key="cost-high").cities[0]

        assert cheapest.slug == "jinju"
        assert priciest.slug == "seoul"

    def test_gangwon_has_four_cities(self):
        assert visible_cities(CITIES, region="강원도").count == 4

    def test_list_regions_sorted_unique(self, regional_cities):
        assert list_regions(regional_cities) == ["Capital", "Gyeongsang"]

    def test_find_city(self, three_cities):
        assert find_city(three_cities, "jinju").name == "Jinju"
        assert find_city(three_cities, "atlantis") is None

    def test_related_cities_same_region_excluding_self(self):
        gangneung = find_city(CITIES, "gangneung")

        related = related_cities(CITIES, gangneung)

        assert [c.slug for c in related] == ["sokcho", "chuncheon", "yangyang"]

    def test_related_cities_limit(self):
        cities = [make_city(id=str(i), slug=f"c{i}", region="Same") for i in range(7)]

        assert len(related_cities(cities, cities[0])) == 4
