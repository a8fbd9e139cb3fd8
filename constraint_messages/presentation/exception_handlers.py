"""Exception handlers for converting exceptions to HTTP responses.

This module provides a scalable approach to exception handling.
Instead of creating individual handlers for each exception, we use
base exception handlers that automatically determine the HTTP status
code based on the error_code attribute.

Constraint violations are the exception: their payload lists one
human-readable message per failed constraint, and their status code is
decided by the validation engine.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from constraint_messages.application.dtos.error_payload import ErrorPayload
from constraint_messages.application.exceptions import (
    ApplicationError,
    ConstraintViolationError,
)
from constraint_messages.domain.exceptions import (
    DomainException,
    InternalInconsistencyException,
)
from constraint_messages.infrastructure.binding.labels import label_for_location
from constraint_messages.infrastructure.config.settings import get_settings
from constraint_messages.infrastructure.validation.constraint_violations import (
    determine_status,
)
from constraint_messages.presentation.dependencies import (
    get_binding_inspector,
    get_handler_registry,
    get_message_cache,
    get_violation_formatter,
)
from constraint_messages.presentation.error_codes import get_http_status_for_error_code

logger = logging.getLogger(__name__)


async def constraint_violation_handler(
    request: Request, exc: ConstraintViolationError
) -> JSONResponse:
    """
    Handle constraint violations reported by the validation engine.

    Every violation is resolved to a message naming the failing element
    ("query param name must not be blank"). When the engine reported no
    structured violations, the exception text is the only message.

    A parameter bean lacking a field named on a violation's path is a
    programming error and is answered like any other domain error.
    """
    formatter = get_violation_formatter(
        message_cache=get_message_cache(get_settings()),
        binding_inspector=get_binding_inspector(),
    )
    try:
        payload = formatter.format(
            exc.violations,
            known_handlers=get_handler_registry(),
            fallback_message=exc.message,
        )
    except InternalInconsistencyException as inconsistency:
        return await domain_exception_handler(request, inconsistency)

    return JSONResponse(
        status_code=determine_status(exc.violations),
        content=payload.model_dump(),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI's own request validation errors.

    Uses the same payload as constraint violations so clients parse one
    error format: ("query", "page") + "Input should be a valid integer"
    becomes "query param page Input should be a valid integer".
    """
    errors = [f"{label_for_location(error['loc'])} {error['msg']}" for error in exc.errors()]
    payload = ErrorPayload(errors=errors or [str(exc)])

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=payload.model_dump(),
    )


async def application_error_handler(
    request: Request, exc: ApplicationError
) -> JSONResponse:
    """
    Handle ALL application layer exceptions.

    This single handler handles all ApplicationError subclasses.
    The HTTP status code is determined by the error_code attribute
    using the ERROR_CODE_TO_HTTP_STATUS mapping.
    """
    http_status = get_http_status_for_error_code(exc.error_code)

    return JSONResponse(
        status_code=http_status,
        content={
            "detail": exc.message,
            "error_code": exc.error_code,
        },
    )


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """
    Handle ALL domain layer exceptions.

    This single handler handles all DomainException subclasses.
    The HTTP status code is determined by the error_code attribute.
    Server-side errors are logged since they point at a programming error.
    """
    http_status = get_http_status_for_error_code(exc.error_code)
    if http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Domain error: {exc}", exc_info=exc)

    return JSONResponse(
        status_code=http_status,
        content={
            "detail": exc.message,
            "error_code": exc.error_code,
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all other unhandled exceptions.

    This is the catch-all handler for any unexpected errors.
    """
    # Log the actual error for debugging
    logger.error(f"Unhandled error: {exc}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An internal server error occurred",
            "error_code": "INTERNAL_SERVER_ERROR",
        },
    )
