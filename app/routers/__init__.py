# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - applications.py: Application CRUD and listing endpoints
# - health.py: Health check endpoints
# - metrics.py: Prometheus metrics endpoint
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import applications
from . import health
from . import metrics

__all__ = [
    "applications",
    "health",
    "metrics",
]
