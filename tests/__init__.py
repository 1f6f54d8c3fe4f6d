# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Applications API:
# - test_pagination.py: Query processor (filter, sort, paginate)
# - test_application_store.py: In-memory record store
# - test_seed.py: Seed data loading and deduplication
# - test_application_service.py: Outcome classification in the service layer
# - test_models.py: Pydantic model validation and wire format
# - test_utils.py: ID normalization
# - test_api.py: HTTP endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================
