# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .application_service import ApplicationService

__all__ = [
    "ApplicationService",
]
