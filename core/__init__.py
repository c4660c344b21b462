# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas for data validation
# - catalog.py: The static city catalog
# - city_filter.py: Search, region filter and sort for the city listing
# - services/: Supabase-backed query layer (posts, comments, meetups, ...)
#
# Code in this package should NOT import from FastAPI routers.
# This keeps the logic testable and reusable.
# =============================================================================
