# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Konomads API:
# - test_city_filter.py: Listing search, region filter and sort
# - test_access_gate.py: Session gate and its middleware
# - test_auth.py / test_auth_routes.py: Tokens and auth form actions
# - test_services.py / test_storage_service.py: Supabase-backed services
# - test_routes.py: Pages and actions through the full app
# - test_models.py, test_formatting.py, test_validation.py: Unit tests
#
# Run tests with: poetry run pytest
# =============================================================================
