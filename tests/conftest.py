# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides sample records, an isolated store/service, and API clients
# =============================================================================

import json
import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("METRICS_ENABLED", "true")

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from core.models.application import Application, ApplicationStatus
from core.services.application_service import ApplicationService
from lib.application_store import ApplicationStore


def make_application(
    id: str,
    name: str,
    status: ApplicationStatus = ApplicationStatus.IN_REVIEW,
    description: str = "Test application",
) -> Application:
    """Build an Application with a default description."""
    return Application(id=id, name=name, description=description, status=status)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_records():
    """
    Five records in insertion order.

    Sorted by name (asc): 3, 5, 4, 1, 2
    Sorted by status (asc): 1, 4, 2, 5, 3
    """
    return [
        make_application("1", "Solar Panel Maintenance", ApplicationStatus.APPROVED),
        make_application("2", "Wind Turbine Inspection", ApplicationStatus.IN_REVIEW),
        make_application("3", "Battery Storage Upgrade", ApplicationStatus.REJECTED),
        make_application("4", "solar carport", ApplicationStatus.APPROVED),
        make_application("5", "EV Charger Installation", ApplicationStatus.IN_REVIEW),
    ]


@pytest.fixture
def store(sample_records):
    """A fresh store holding the sample records."""
    return ApplicationStore(sample_records)


@pytest.fixture
def service(store):
    """Service bound to the sample store."""
    return ApplicationService(store)


@pytest.fixture
def seed_file(tmp_path):
    """Write a seed file with a duplicate id and return its path."""
    path = tmp_path / "seed.json"
    path.write_text(json.dumps([
        {"id": "1", "name": "First", "description": "Original", "status": "approved"},
        {"id": "2", "name": "Second", "description": "Only copy", "status": "rejected"},
        {"id": "1", "name": "First", "description": "Replacement", "status": "in_review"},
    ]))
    return path


@pytest.fixture
def client(store):
    """API client over the sample store."""
    with TestClient(create_app(store=store)) as test_client:
        yield test_client


@pytest.fixture
def seeded_client():
    """API client that loads data/seed.json at startup."""
    with TestClient(create_app()) as test_client:
        yield test_client
