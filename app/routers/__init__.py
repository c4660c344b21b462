# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - cities.py: Homepage, city listing and city detail (public)
# - posts.py: Community board, comments and likes
# - meetups.py: Meetups and participation
# - profile.py: Profiles and avatar uploads
#
# Each router is mounted in main.py.
# =============================================================================

from . import health
from . import cities
from . import posts
from . import meetups
from . import profile

__all__ = [
    "health",
    "cities",
    "posts",
    "meetups",
    "profile",
]
