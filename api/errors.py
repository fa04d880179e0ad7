"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from api.base import ErrorCodes, error_json
from auth.exceptions import AuthenticationError, AuthorizationError, UnauthenticatedError
from core.exceptions import DependencyError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def request_validation_details(exc: RequestValidationError) -> dict[str, str]:
    """Flatten FastAPI validation errors to {field: message}."""
    details = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        details.setdefault(field, error.get("msg", "Invalid value"))
    return details


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(ValidationError)
    async def domain_validation_handler(request: Request, exc: ValidationError):
        return error_json(400, ErrorCodes.VALIDATION_ERROR, str(exc), exc.errors or None)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_json(
            422,
            ErrorCodes.VALIDATION_ERROR,
            "Validation failed",
            request_validation_details(exc),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error_json(404, ErrorCodes.NOT_FOUND, str(exc))

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        return error_json(401, ErrorCodes.INVALID_CREDENTIALS, "Invalid username or password")

    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated_handler(request: Request, exc: UnauthenticatedError):
        return error_json(401, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")

    @app.exception_handler(AuthorizationError)
    async def authorization_handler(request: Request, exc: AuthorizationError):
        return error_json(401, ErrorCodes.AUTHORIZATION_DENIED, "Unauthorized")

    @app.exception_handler(DependencyError)
    async def dependency_handler(request: Request, exc: DependencyError):
        logger.warning(f"Dependency failure on {request.url.path}: {exc}")
        return error_json(502, ErrorCodes.DEPENDENCY_FAILED, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return error_json(500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
