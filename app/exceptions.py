# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# All error bodies use the same envelope as successful responses:
#   {"success": false, "message": "...", "responseObject": null, "statusCode": 400}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.models.service_response import ServiceResponse

logger = logging.getLogger(__name__)

INVALID_INPUT_PREFIX = "Invalid input: "


class ApplicationsApiException(Exception):
    """
    Base exception for the Applications API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATIONS_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "message": self.message,
            "responseObject": None,
            "statusCode": self.status_code,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidInputError(ApplicationsApiException):
    """Raised when a path, query or body value fails validation."""

    def __init__(
        self,
        reason: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=f"{INVALID_INPUT_PREFIX}{reason}",
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion=suggestion,
            details=details,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """
    Join pydantic error entries into one readable line.

    The request location prefix (body/query/path) is dropped.
    Example: "name: String should have at least 1 character, pageSize: Input should be a valid integer"
    """
    parts = []
    for error in errors:
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
        msg = error.get("msg", "Invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return ", ".join(parts)


async def applications_api_exception_handler(
    request: Request,
    exc: ApplicationsApiException
) -> JSONResponse:
    """Convert ApplicationsApiException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    FastAPI answers these with 422 by default; this API reports them as
    a 400 validation-failure envelope.
    """
    message = INVALID_INPUT_PREFIX + format_validation_errors(exc.errors())
    logger.debug(f"Rejected {request.method} {request.url.path}: {message}")

    response = ServiceResponse.invalid(message)
    return JSONResponse(
        status_code=response.status_code,
        content={**response.to_payload(), "code": "VALIDATION_ERROR"}
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking details."""
    logger.exception(f"Unexpected error: {exc}")
    response = ServiceResponse.internal_error("An unexpected error occurred")
    return JSONResponse(
        status_code=response.status_code,
        content={**response.to_payload(), "code": "INTERNAL_ERROR"}
    )
