"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats.
Moderation itself never raises per request; these cover invalid input and
resource failures while building the moderator.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from toxicity_filter.exceptions import ResourceLoadError, ToxicityFilterError

logger = structlog.get_logger(__name__)


def _error_content(error: str, message: str, details: dict | list | None = None) -> dict:
    content = {
        "error": error,
        "message": message,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        content["details"] = details
    return content


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies.

    Maps to 400 Bad Request (client error).
    """
    errors = exc.errors()
    logger.warning("Invalid request format", error_count=len(errors))

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_content(
            "invalid_request",
            "Request validation failed",
            [{"loc": list(e.get("loc", [])), "msg": e.get("msg"), "type": e.get("type")} for e in errors],
        ),
    )


async def pydantic_validation_error_handler(
    request: Request, exc: PydanticValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors raised while building responses.

    Maps to 500: the service produced an invalid model.
    """
    logger.error("Response model validation failed", error_count=exc.error_count())

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content("internal_error", "Failed to build response"),
    )


async def resource_load_error_handler(request: Request, exc: ResourceLoadError) -> JSONResponse:
    """
    Handle missing vocabulary / keyword resources.

    Maps to 503 Service Unavailable: the moderator cannot be built until the
    resources are fixed.
    """
    logger.error("Moderation resources unavailable", error=exc.message, details=exc.details)

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_content("resource_unavailable", exc.message, exc.details),
    )


async def toxicity_filter_error_handler(
    request: Request, exc: ToxicityFilterError
) -> JSONResponse:
    """
    Handle other domain errors (e.g. malformed vocabulary).

    Maps to 500 Internal Server Error.
    """
    logger.error(
        "Toxicity filter error",
        error_type=type(exc).__name__,
        error=exc.message,
        details=exc.details,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content("moderation_error", exc.message, exc.details),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    PydanticValidationError: pydantic_validation_error_handler,
    ResourceLoadError: resource_load_error_handler,
    ToxicityFilterError: toxicity_filter_error_handler,
    Exception: generic_error_handler,
}
