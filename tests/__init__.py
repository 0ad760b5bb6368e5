# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Wellness Storefront API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_catalog.py / test_content.py / test_forms.py: Service tests
# - test_analytics.py / test_session_tracker.py: Tracking heuristics
# - test_supabase_client.py / test_ga_client.py: External client wrappers
# - test_workers.py: Celery tasks
# - test_api.py: Endpoint tests through TestClient
#
# Run tests with: pytest
# =============================================================================
