# =============================================================================
# app/routers/cities.py - City Listing & Detail
# =============================================================================
# Public pages (exempt from the access gate):
# - GET /              homepage: featured cities and the region list
# - GET /cities        listing with search, region filter and sort
# - GET /cities/{slug} one city plus related cities in the same region
#
# All three read the static catalog through CatalogDep.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.dependencies import CatalogDep
from app.exceptions import CityNotFoundError
from core.city_filter import find_city, list_regions, related_cities, visible_cities
from core.models.city import ALL_REGIONS, City, FilterState, SortKey
from lib.formatting import format_currency, format_number

router = APIRouter()

FEATURED_CITY_COUNT = 8


def city_card(city: City) -> dict:
    """City fields plus the display labels the cards show."""
    return {
        **city.model_dump(),
        "monthly_cost_label": format_currency(city.monthly_cost, style="monthly"),
        "deposit_label": format_currency(city.deposit),
        "nomads_now_label": format_number(city.nomads_now),
    }


@router.get("/")
async def home(cities: CatalogDep):
    """
    Homepage payload.

    Featured cities are the most popular ones (most nomads right now).
    """
    featured = visible_cities(cities, sort_key=SortKey.POPULAR).cities[:FEATURED_CITY_COUNT]

    return {
        "featured_cities": [city_card(c) for c in featured],
        "regions": list_regions(cities),
        "total_cities": len(cities),
        "total_nomads": sum(c.nomads_now for c in cities),
    }


@router.get("/cities")
async def list_cities(
    cities: CatalogDep,
    search: Annotated[str, Query(max_length=100, description="Search in name, region and description")] = "",
    region: Annotated[str, Query(description="Exact region name, or 'all'")] = ALL_REGIONS,
    sort: Annotated[SortKey, Query(description="popular, rating, cost-low or cost-high")] = SortKey.POPULAR,
):
    """
    City listing.

    An unknown sort value is rejected with 422; an unknown region simply
    matches nothing.
    """
    state = FilterState(search_text=search, region=region, sort_key=sort)
    result = visible_cities(cities, state.search_text, state.region, state.sort_key)

    return {
        "cities": [city_card(c) for c in result.cities],
        "count": result.count,
        "is_empty": result.is_empty,
        "regions": list_regions(cities),
        "filter": state,
    }


@router.get("/cities/{slug}")
async def get_city(
    slug: Annotated[str, Path(description="City slug, e.g. seoul")],
    cities: CatalogDep,
):
    """
    City detail.

    Raises:
        404: If no city has this slug
    """
    city = find_city(cities, slug)

    if city is None:
        raise CityNotFoundError(slug)

    return {
        "city": city_card(city),
        "related_cities": [city_card(c) for c in related_cities(cities, city)],
    }
