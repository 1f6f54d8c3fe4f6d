# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Path, Request

from app.config import Settings
from app.exceptions import InvalidInputError
from core.services.application_service import ApplicationService
from lib.application_store import ApplicationStore
from lib.utils import InvalidIdError, normalize_id


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running app was built with."""
    return request.app.state.settings


def get_store(request: Request) -> ApplicationStore:
    """
    Get the application store.

    Returns the store owned by the running app (set up in the lifespan).
    """
    return request.app.state.store


def get_application_service(
    store: Annotated[ApplicationStore, Depends(get_store)],
) -> ApplicationService:
    """Build the service around the app's store."""
    return ApplicationService(store)


def valid_application_id(
    id: Annotated[str, Path(description="Numeric application ID", examples=["1"])],
) -> str:
    """
    Validate and normalize the {id} path parameter.

    Raises:
        InvalidInputError: If the id is empty or not numeric
    """
    try:
        return normalize_id(id)
    except InvalidIdError as e:
        raise InvalidInputError(e.message, suggestion=e.suggestion, details=e.details)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
ServiceDep = Annotated[ApplicationService, Depends(get_application_service)]
ApplicationIdDep = Annotated[str, Depends(valid_application_id)]
