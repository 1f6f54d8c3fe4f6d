# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - application.py: Application record, create/update inputs, list query, page
# - service_response.py: Outcome envelope returned by every service call
#
# These models define the "contract" between API and clients.
# =============================================================================

from .application import (
    Application,
    ApplicationCreate,
    ApplicationStatus,
    ApplicationUpdate,
    ApplicationsPage,
    ApplicationsQuery,
    SortBy,
    SortOrder,
)
from .service_response import Outcome, ServiceResponse

__all__ = [
    # Application models
    "Application",
    "ApplicationCreate",
    "ApplicationStatus",
    "ApplicationUpdate",
    "ApplicationsPage",
    "ApplicationsQuery",
    "SortBy",
    "SortOrder",
    # Envelope
    "Outcome",
    "ServiceResponse",
]
