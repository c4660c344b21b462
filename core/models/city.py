# =============================================================================
# core/models/city.py - City Schemas
# =============================================================================
# These models cover both sides of city data:
# - City: read-only catalog record rendered on the listing and detail pages
# - SortKey / FilterState / VisibleCities: inputs and output of the listing
#   filter (see core/city_filter.py)
# - CityCreate / CityUpdate: payloads for the `cities` table
#
# Catalog records are frozen: filtering and sorting never mutate them.
# =============================================================================

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Sentinel region value meaning "no region filter"
ALL_REGIONS = "all"


class SortKey(str, Enum):
    """
    Listing sort orders.

    - popular: most nomads right now first
    - rating: highest rating first
    - cost-low: cheapest monthly cost first
    - cost-high: most expensive monthly cost first
    """
    POPULAR = "popular"
    RATING = "rating"
    COST_LOW = "cost-low"
    COST_HIGH = "cost-high"


class City(BaseModel):
    """
    A city as shown on the listing page and city cards.

    Example:
        {
            "id": "1",
            "slug": "seoul",
            "name": "서울",
            "region": "서울특별시",
            "monthly_cost": 2800000,
            "rating": 4.6,
            "nomads_now": 156
        }
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    id: str = Field(..., description="Unique city identifier")
    slug: str = Field(..., pattern=r"^[a-z0-9-]+$", description="URL-safe unique name")

    # Descriptive
    name: str
    region: str
    description: str = ""
    thumbnail: str = ""
    badge: Literal["popular", "rising", "new"] | None = None

    # Facts used for filtering and sorting
    monthly_cost: int = Field(..., ge=0, description="Monthly living cost in KRW")
    rating: float = Field(..., ge=0.0, le=5.0)
    nomads_now: int = Field(default=0, ge=0, description="Nomads currently in the city")

    # Display facts
    rent_studio: int = Field(default=0, ge=0)
    deposit: int = Field(default=0, ge=0)
    internet_speed: int = Field(default=0, ge=0, description="Mbps")
    cafe_count: int = Field(default=0, ge=0)
    coworking_count: int = Field(default=0, ge=0)
    avg_temperature: float = 0.0
    current_temperature: float = 0.0
    air_quality: int = Field(default=0, ge=0)
    nomad_score: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)


class FilterState(BaseModel):
    """
    The listing page's filter controls.

    Defaults reproduce the unfiltered, most-popular-first view.
    """

    model_config = ConfigDict(frozen=True)

    search_text: str = Field(default="", description="Free-text search")
    region: str = Field(default=ALL_REGIONS, description="Region or 'all'")
    sort_key: SortKey = Field(default=SortKey.POPULAR)


class VisibleCities(BaseModel):
    """Filtered, ordered cities plus their count."""
    cities: list[City] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        """True when nothing matched; callers render a 'no results' state."""
        return self.count == 0


# =============================================================================
# Database payloads (`cities` table)
# =============================================================================

class CityCreate(BaseModel):
    """Insert payload for the cities table."""
    slug: str = Field(..., min_length=1, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    name_en: str | None = None
    description: str | None = None
    image_url: str | None = None
    region: str | None = None
    population: int | None = Field(default=None, ge=0)
    wifi_rating: float | None = Field(default=None, ge=0, le=5)
    cafe_rating: float | None = Field(default=None, ge=0, le=5)
    cost_rating: float | None = Field(default=None, ge=0, le=5)
    safety_rating: float | None = Field(default=None, ge=0, le=5)
    community_rating: float | None = Field(default=None, ge=0, le=5)
    overall_rating: float | None = Field(default=None, ge=0, le=5)
    tags: list[str] | None = None
    is_featured: bool = False


class CityUpdate(BaseModel):
    """Partial update payload; unset fields are left untouched."""
    name: str | None = None
    name_en: str | None = None
    description: str | None = None
    image_url: str | None = None
    region: str | None = None
    population: int | None = Field(default=None, ge=0)
    overall_rating: float | None = Field(default=None, ge=0, le=5)
    tags: list[str] | None = None
    is_featured: bool | None = None
