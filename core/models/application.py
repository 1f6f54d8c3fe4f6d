# =============================================================================
# core/models/application.py - Application Schemas
# =============================================================================
# These models define the API contract for application records:
# - Application: A stored record (id, name, description, status)
# - ApplicationCreate: Input for creating a new application
# - ApplicationUpdate: Partial input for updating an application
# - ApplicationsQuery: Filter/sort/pagination parameters for listing
# - ApplicationsPage: One page of results plus pagination metadata
#
# Field names are snake_case in Python and camelCase on the wire
# (pageSize, totalPages, ...). Always dump with by_alias=True.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


NAME_MIN_LENGTH = 1
DESCRIPTION_MAX_LENGTH = 500


class ApplicationStatus(str, Enum):
    """
    Review state of an application.

    - in_review: Newly created, waiting for a decision (default)
    - approved: Accepted
    - rejected: Declined
    """
    IN_REVIEW = "in_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class SortBy(str, Enum):
    """Record fields that listings can be sorted by."""
    NAME = "name"
    STATUS = "status"


class SortOrder(str, Enum):
    """Sort direction for listings."""
    ASC = "asc"
    DESC = "desc"


class Application(BaseModel):
    """
    A stored application record.

    Records are immutable. Updates validate and store a new record
    so previously returned snapshots never change underneath a caller.

    Example:
        {
            "id": "3",
            "name": "Solar Panel Maintenance",
            "description": "Routine maintenance service for solar panel systems.",
            "status": "approved"
        }
    """

    model_config = ConfigDict(frozen=True)

    # Numeric-looking string, assigned by the store
    id: str = Field(
        ...,
        examples=["3"],
        description="Unique application identifier"
    )

    name: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        examples=["Solar Panel Maintenance"],
        description="Human-readable application name"
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=DESCRIPTION_MAX_LENGTH,
        examples=["Routine maintenance service for solar panel systems to ensure optimal performance."],
        description="What the application is for"
    )

    status: ApplicationStatus = Field(
        default=ApplicationStatus.IN_REVIEW,
        description="Review state"
    )


class ApplicationCreate(BaseModel):
    """
    Schema for creating a new application.

    The store assigns the id and new applications always start in_review,
    so only name and description are accepted.
    """

    name: str = Field(
        ...,
        min_length=NAME_MIN_LENGTH,
        examples=["Solar Panel Installation - Commercial"],
        description="Name cannot be empty"
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=DESCRIPTION_MAX_LENGTH,
        examples=["A comprehensive installation of solar panels for residential properties."],
        description="Between 1 and 500 characters"
    )


class ApplicationUpdate(BaseModel):
    """
    Schema for updating an application.

    All fields are optional, but at least one must be provided.
    Only the fields that are set overwrite the stored record.

    Example:
        {"status": "approved"}
    """

    name: str | None = Field(
        default=None,
        min_length=NAME_MIN_LENGTH,
        examples=["Solar Panel Installation - Commercial"],
    )

    description: str | None = Field(
        default=None,
        min_length=1,
        max_length=DESCRIPTION_MAX_LENGTH,
    )

    status: ApplicationStatus | None = Field(
        default=None,
        examples=["approved"],
    )

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        """Omitting a field leaves it unchanged; sending null is an error."""
        if isinstance(data, dict):
            nulls = [f for f in cls.model_fields if f in data and data[f] is None]
            if nulls:
                raise ValueError(f"{', '.join(nulls)} cannot be null")
        return data

    @model_validator(mode="after")
    def check_not_empty(self) -> "ApplicationUpdate":
        if not self.changes():
            raise ValueError(
                "At least one field (name, description or status) must be provided."
            )
        return self

    def changes(self) -> dict:
        """Return only the fields the caller actually provided."""
        return self.model_dump(exclude_unset=True)


class ApplicationsQuery(BaseModel):
    """
    Parameters for listing applications.

    Assumed already validated at the boundary: page and page_size are
    positive integers and sort_by/sort_order are enumerated values.
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(default=1, ge=1, description="Page number (1-indexed)")

    page_size: int = Field(
        default=10,
        ge=1,
        alias="pageSize",
        description="Items per page"
    )

    filter_by_name: str | None = Field(
        default=None,
        alias="filterByName",
        description="Case-insensitive substring match on name"
    )

    filter_by_status: str | None = Field(
        default=None,
        alias="filterByStatus",
        description="Case-insensitive exact match on status"
    )

    sort_by: SortBy = Field(default=SortBy.NAME, alias="sortBy")

    sort_order: SortOrder = Field(default=SortOrder.ASC, alias="sortOrder")


class ApplicationsPage(BaseModel):
    """
    One page of applications plus pagination metadata.

    next_page/prev_page are None when there is no such page.

    Example:
        {
            "count": 5,
            "records": [...],
            "totalPages": 3,
            "currentPage": 3,
            "nextPage": null,
            "prevPage": 2
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    # Total number of records after filtering (not just this page)
    count: int = Field(..., ge=0)

    records: list[Application] = Field(default_factory=list)

    total_pages: int = Field(..., ge=0, alias="totalPages")

    current_page: int = Field(..., ge=1, alias="currentPage")

    next_page: int | None = Field(default=None, alias="nextPage")

    prev_page: int | None = Field(default=None, alias="prevPage")
