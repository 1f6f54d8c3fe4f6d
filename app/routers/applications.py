# =============================================================================
# app/routers/applications.py - Application CRUD Endpoints
# =============================================================================
# Handles listing, reading, creating, updating and deleting applications.
# Request validation happens here (FastAPI + pydantic); the service layer
# receives already-validated values and returns a ServiceResponse.
#
# Handlers are plain functions: the store is synchronous, so FastAPI runs
# them in its threadpool and the store lock serializes writes.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query, status

from app.dependencies import ApplicationIdDep, ServiceDep, SettingsDep
from app.exceptions import InvalidInputError
from app.responses import envelope_model, handle_service_response
from core.models.application import (
    Application,
    ApplicationCreate,
    ApplicationUpdate,
    ApplicationsPage,
    ApplicationsQuery,
    SortBy,
    SortOrder,
)

router = APIRouter()


# =============================================================================
# Response Models (OpenAPI only)
# =============================================================================

ApplicationResponse = envelope_model("ApplicationResponse", Application)
ApplicationsPageResponse = envelope_model("ApplicationsPageResponse", ApplicationsPage)
ErrorResponse = envelope_model("ErrorResponse", None)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}
NOT_FOUND_RESPONSE = {404: {"model": ErrorResponse, "description": "Application not found"}}


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "",
    response_model=ApplicationsPageResponse,
    responses=ERROR_RESPONSES,
)
def list_applications(
    service: ServiceDep,
    app_settings: SettingsDep,
    page: Annotated[int, Query(ge=1, description="Page number", examples=[1])] = 1,
    page_size: Annotated[
        int | None,
        Query(alias="pageSize", ge=1, description="Items per page", examples=[10]),
    ] = None,
    filter_by_name: Annotated[
        str | None,
        Query(alias="filterByName", description="Case-insensitive name substring", examples=["Solar"]),
    ] = None,
    filter_by_status: Annotated[
        str | None,
        Query(alias="filterByStatus", description="Case-insensitive status", examples=["approved"]),
    ] = None,
    sort_by: Annotated[SortBy, Query(alias="sortBy", description="Sort field")] = SortBy.NAME,
    sort_order: Annotated[SortOrder, Query(alias="sortOrder", description="Sort direction")] = SortOrder.ASC,
):
    """
    List applications with filtering, sorting and pagination.

    Returns the requested page plus count (total after filtering),
    totalPages, currentPage, nextPage and prevPage.
    Pages past the end return an empty records list.
    """
    page_size = page_size or app_settings.DEFAULT_PAGE_SIZE
    if page_size > app_settings.MAX_PAGE_SIZE:
        raise InvalidInputError(
            f"pageSize must be at most {app_settings.MAX_PAGE_SIZE}",
            suggestion="Request a smaller pageSize and follow nextPage",
        )

    query = ApplicationsQuery(
        page=page,
        page_size=page_size,
        filter_by_name=filter_by_name,
        filter_by_status=filter_by_status,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return handle_service_response(service.find_all_applications(query))


@router.get(
    "/{id}",
    response_model=ApplicationResponse,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
)
def get_application(application_id: ApplicationIdDep, service: ServiceDep):
    """Get a single application by its numeric ID."""
    return handle_service_response(service.find_application_by_id(application_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApplicationResponse,
    responses=ERROR_RESPONSES,
)
def create_application(request: ApplicationCreate, service: ServiceDep):
    """
    Create a new application.

    The ID is assigned by the server and the status starts as in_review.
    """
    return handle_service_response(service.create_application(request))


@router.patch(
    "/{id}",
    response_model=ApplicationResponse,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
)
def update_application(
    application_id: ApplicationIdDep,
    request: ApplicationUpdate,
    service: ServiceDep,
):
    """
    Update an application.

    Any of name, description and status; at least one is required.
    Fields that aren't sent keep their current value.
    """
    return handle_service_response(service.update_application(application_id, request))


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
)
def delete_application(application_id: ApplicationIdDep, service: ServiceDep):
    """Delete an application. Returns 204 with no body."""
    return handle_service_response(service.delete_application(application_id))
