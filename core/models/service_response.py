# =============================================================================
# core/models/service_response.py - Outcome Envelope
# =============================================================================
# Every service operation returns a ServiceResponse. It classifies the
# result into exactly one Outcome and carries a human-readable message,
# the payload (or None) and an HTTP-style status code.
#
# Wire format (camelCase, the 204 outcome has no body):
#   {"success": true, "message": "...", "responseObject": {...}, "statusCode": 200}
# =============================================================================

from enum import Enum
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Outcome(str, Enum):
    """
    Classification of a service result.

    The boundary layer maps these to transport status codes; the
    defaults below are the HTTP mapping.
    """
    SUCCESS = "success"
    SUCCESS_EMPTY = "success_empty"
    NOT_FOUND = "not_found"
    VALIDATION_FAILURE = "validation_failure"
    INTERNAL_ERROR = "internal_error"


DEFAULT_STATUS_CODES: dict[Outcome, int] = {
    Outcome.SUCCESS: HTTPStatus.OK,
    Outcome.SUCCESS_EMPTY: HTTPStatus.NO_CONTENT,
    Outcome.NOT_FOUND: HTTPStatus.NOT_FOUND,
    Outcome.VALIDATION_FAILURE: HTTPStatus.BAD_REQUEST,
    Outcome.INTERNAL_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
}


class ServiceResponse(BaseModel):
    """
    Uniform result of a service operation.

    Use the classmethod constructors rather than building one directly,
    so outcome, success flag and status code always agree.

    Example:
        response = ServiceResponse.succeed("Application found", application)
        response = ServiceResponse.not_found("Application not found")
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    success: bool
    message: str
    response_object: Any = Field(default=None, alias="responseObject")
    status_code: int = Field(default=HTTPStatus.OK, alias="statusCode")

    # Not serialized - the wire contract only carries the status code
    outcome: Outcome = Field(default=Outcome.SUCCESS, exclude=True)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def _build(
        cls,
        outcome: Outcome,
        message: str,
        response_object: Any = None,
        status_code: int | None = None,
    ) -> "ServiceResponse":
        return cls(
            success=outcome in (Outcome.SUCCESS, Outcome.SUCCESS_EMPTY),
            message=message,
            response_object=response_object,
            status_code=int(status_code or DEFAULT_STATUS_CODES[outcome]),
            outcome=outcome,
        )

    @classmethod
    def succeed(
        cls,
        message: str,
        response_object: Any,
        status_code: int = HTTPStatus.OK,
    ) -> "ServiceResponse":
        """Successful result carrying data (200 by default, 201 for creates)."""
        return cls._build(Outcome.SUCCESS, message, response_object, status_code)

    @classmethod
    def empty(cls, message: str) -> "ServiceResponse":
        """Successful result with nothing to return (e.g. delete)."""
        return cls._build(Outcome.SUCCESS_EMPTY, message)

    @classmethod
    def not_found(cls, message: str) -> "ServiceResponse":
        return cls._build(Outcome.NOT_FOUND, message)

    @classmethod
    def invalid(cls, message: str) -> "ServiceResponse":
        return cls._build(Outcome.VALIDATION_FAILURE, message)

    @classmethod
    def internal_error(cls, message: str) -> "ServiceResponse":
        """Generic failure. The message must not leak internal details."""
        return cls._build(Outcome.INTERNAL_ERROR, message)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON wire format."""
        return self.model_dump(mode="json", by_alias=True)
