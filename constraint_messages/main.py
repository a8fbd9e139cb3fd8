"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from constraint_messages.application.dtos.error_payload import ErrorPayload
from constraint_messages.application.exceptions import (
    ApplicationError,
    ConstraintViolationError,
)
from constraint_messages.domain.exceptions import DomainException
from constraint_messages.infrastructure.config.settings import Settings, get_settings
from constraint_messages.presentation.dependencies import get_handler_registry
from constraint_messages.presentation.exception_handlers import (
    application_error_handler,
    constraint_violation_handler,
    domain_exception_handler,
    generic_exception_handler,
    request_validation_error_handler,
)
from constraint_messages.presentation.routing import register_routes

# Get settings for app configuration
_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Announce every bound route to the handler registry before serving."""
    register_routes(app.routes, get_handler_registry())
    yield


app = FastAPI(
    title=_settings.app_name,
    description="Turns constraint violations into human-readable API error messages",
    version=_settings.app_version,
    debug=_settings.debug,
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers on an application.

    - ConstraintViolationError lists one message per failed constraint
    - ApplicationError handles ALL other application layer exceptions
    - DomainException handles ALL domain layer exceptions
    - RequestValidationError reports FastAPI's own validation in the same format
    - Exception handles everything else
    """
    app.add_exception_handler(ConstraintViolationError, constraint_violation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ApplicationError, application_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DomainException, domain_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)


register_exception_handlers(app)


@app.get("/")
async def root() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "message": _settings.app_name,
        "status": "running",
        "version": _settings.app_version,
        "environment": _settings.environment,
    }


@app.get("/config")
async def show_config(settings: Settings = Depends(get_settings)) -> dict[str, str | int | float | list[str]]:
    """Show current configuration (non-sensitive data only).

    WARNING: Only for development/debugging. Remove in production.
    """
    return {
        "environment": settings.environment,
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        "log_level": settings.log_level,
        "message_cache_ttl_seconds": settings.message_cache_ttl_seconds,
        "message_cache_max_entries": settings.message_cache_max_entries,
        "cors_origins": settings.cors_origins_list,
    }


def custom_openapi():
    """
    Customize OpenAPI schema to use our validation error payload.

    Replaces the default HTTPValidationError schema with ErrorPayload
    to match the actual error format returned by constraint_violation_handler.
    """
    # Return cached schema if it exists
    if app.openapi_schema:
        return app.openapi_schema

    # Generate the base OpenAPI schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    schemas = openapi_schema.setdefault("components", {}).setdefault("schemas", {})

    # Remove the default HTTPValidationError and the ValidationError it uses
    schemas.pop("HTTPValidationError", None)
    schemas.pop("ValidationError", None)

    # Add our validation error payload schema
    schemas["ErrorPayload"] = ErrorPayload.model_json_schema()

    # Update all 422 response references to use our payload
    for path_data in openapi_schema.get("paths", {}).values():
        for operation in path_data.values():
            if isinstance(operation, dict) and "responses" in operation:
                if "422" in operation["responses"]:
                    operation["responses"]["422"] = {
                        "description": "Validation Error",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ErrorPayload"}
                            }
                        },
                    }

    # Cache the schema
    app.openapi_schema = openapi_schema
    return app.openapi_schema


# Override the default OpenAPI schema generation
app.openapi = custom_openapi
