#!/usr/bin/env python3
"""
Seed the `cities` table from the static catalog.

Existing rows (matched by slug) are updated, missing ones inserted.

Usage:
    poetry run python scripts/seed_cities.py            # write to Supabase
    poetry run python scripts/seed_cities.py --dry-run  # only print
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.catalog import CITIES
from core.models.city import City, CityCreate, CityUpdate
from core.services.city_service import CityService


def to_row(city: City) -> CityCreate:
    """Catalog record -> `cities` insert payload."""
    return CityCreate(
        slug=city.slug,
        name=city.name,
        description=city.description,
        image_url=city.thumbnail,
        region=city.region,
        overall_rating=city.rating,
        is_featured=city.badge == "popular",
    )


def seed(dry_run: bool = False) -> None:
    created = updated = 0

    for city in CITIES:
        row = to_row(city)

        if dry_run:
            print(f"  {row.slug:<12} {row.name} ({row.region}) rating={row.overall_rating}")
            continue

        existing = CityService.get_city_by_slug(city.slug)
        if existing:
            CityService.update_city(existing["id"], CityUpdate(**row.model_dump(exclude={"slug"}, exclude_none=True)))
            updated += 1
        else:
            CityService.create_city(row)
            created += 1

    if dry_run:
        print(f"\n{len(CITIES)} cities (dry run, nothing written)")
    else:
        print(f"\nDone: {created} created, {updated} updated")


if __name__ == "__main__":
    seed(dry_run="--dry-run" in sys.argv)
