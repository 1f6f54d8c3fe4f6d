# =============================================================================
# app/responses.py - ServiceResponse -> HTTP
# =============================================================================
# Turns a ServiceResponse into the HTTP response the client receives.
# The envelope's status code becomes the HTTP status; the empty outcome
# (delete) is sent as a bare 204.
# =============================================================================

from typing import Any

from fastapi import Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, create_model

from core.models.service_response import Outcome, ServiceResponse


def handle_service_response(response: ServiceResponse) -> Response:
    """Serialize a ServiceResponse with its own status code."""
    if response.outcome == Outcome.SUCCESS_EMPTY:
        return Response(status_code=response.status_code)

    return JSONResponse(
        status_code=response.status_code,
        content=response.to_payload(),
    )


def envelope_model(name: str, payload: Any) -> type[BaseModel]:
    """
    Build an OpenAPI schema for the envelope around a payload type.

    Example:
        response_model=envelope_model("ApplicationResponse", Application)
    """
    annotation = payload | None if payload is not None else None

    return create_model(
        name,
        success=(bool, ...),
        message=(str, ...),
        responseObject=(annotation, Field(default=None)),
        statusCode=(int, ...),
    )
