# =============================================================================
# core/city_filter.py - City Listing Filter & Sort
# =============================================================================
# Derives the visible city list from the catalog and the listing page's
# three controls (search text, region, sort key).
#
# Rules:
# - Region filter is an exact, case-sensitive match unless region == "all"
# - Search is a case-insensitive substring match over name, region and
#   description, applied only when the trimmed text is non-empty
# - Both filters must pass; sorting runs after filtering and is stable
# - Input sequences are never mutated; a new list is always returned
#
# Usage:
#   from core.city_filter import visible_cities
#   result = visible_cities(CITIES, search_text="강", region="강원도", sort_key="rating")
#   result.cities, result.count
# =============================================================================

from __future__ import annotations

from typing import Callable, Sequence

from core.models.city import ALL_REGIONS, City, FilterState, SortKey, VisibleCities

# (key function, descending) per sort order
_SORT_ORDERS: dict[SortKey, tuple[Callable[[City], float], bool]] = {
    SortKey.POPULAR: (lambda c: c.nomads_now, True),
    SortKey.RATING: (lambda c: c.rating, True),
    SortKey.COST_LOW: (lambda c: c.monthly_cost, False),
    SortKey.COST_HIGH: (lambda c: c.monthly_cost, True),
}

RELATED_CITY_LIMIT = 4


def _matches_search(city: City, needle: str) -> bool:
    return (
        needle in city.name.lower()
        or needle in city.region.lower()
        or needle in city.description.lower()
    )


def visible_cities(
    cities: Sequence[City],
    search_text: str = "",
    region: str = ALL_REGIONS,
    sort_key: SortKey | str = SortKey.POPULAR,
) -> VisibleCities:
    """
    Filter and sort cities for the listing page.

    Args:
        cities: The catalog (not modified)
        search_text: Free text; blank means no search filter
        region: Exact region name, or "all"
        sort_key: One of popular, rating, cost-low, cost-high

    Returns:
        VisibleCities with the ordered list and its count (possibly empty)

    Raises:
        ValueError: If sort_key is not a known sort order
    """
    key, descending = _SORT_ORDERS[SortKey(sort_key)]
    needle = search_text.strip().lower()

    result = [
        city for city in cities
        if (region == ALL_REGIONS or city.region == region)
        and (not needle or _matches_search(city, needle))
    ]

    # sorted() is stable for both directions, so ties keep catalog order
    result = sorted(result, key=key, reverse=descending)

    return VisibleCities(cities=result, count=len(result))


def apply_filter(cities: Sequence[City], state: FilterState) -> VisibleCities:
    """Run visible_cities with a FilterState."""
    return visible_cities(
        cities,
        search_text=state.search_text,
        region=state.region,
        sort_key=state.sort_key,
    )


def reset_filter() -> FilterState:
    """The default filter: no search, all regions, most popular first."""
    return FilterState()


def list_regions(cities: Sequence[City]) -> list[str]:
    """Sorted unique regions, for the region selector."""
    return sorted({city.region for city in cities})


def find_city(cities: Sequence[City], slug: str) -> City | None:
    """Look up a city by slug."""
    return next((city for city in cities if city.slug == slug), None)


def related_cities(
    cities: Sequence[City],
    city: City,
    limit: int = RELATED_CITY_LIMIT,
) -> list[City]:
    """Other cities in the same region, in catalog order."""
    return [c for c in cities if c.region == city.region and c.id != city.id][:limit]
