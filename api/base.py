"""
Response envelope shared by every JSON endpoint.

    {"success": ..., "data": ..., "error": {code, message, details}, "meta": {timestamp, request_id}}

The admin CSV export is the only response that is not wrapped.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field
from starlette.responses import JSONResponse

from api.middleware import get_request_id
from utils.timezone import now_utc


class APIError(BaseModel):
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="Field-level validation messages")


class APIMeta(BaseModel):
    timestamp: datetime = Field(..., description="Response timestamp (UTC)")
    request_id: str = Field(..., description="Matches the X-Request-ID response header")


class APIResponse(BaseModel):
    success: bool
    data: Any | None = None
    error: APIError | None = None
    meta: APIMeta


def _meta() -> APIMeta:
    # Outside a request (tests, scripts) there is no request id to echo
    return APIMeta(timestamp=now_utc(), request_id=get_request_id() or str(uuid4()))


def success_response(data: Any) -> APIResponse:
    return APIResponse(success=True, data=data, meta=_meta())


def error_response(code: str, message: str, details: dict[str, Any] | None = None) -> APIResponse:
    return APIResponse(
        success=False,
        error=APIError(code=code, message=message, details=details),
        meta=_meta(),
    )


def error_json(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """An error envelope as a ready-to-return response."""
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message, details).model_dump(mode="json"),
    )


class ErrorCodes:
    """Machine-readable codes carried in error.code."""

    # Admin gate
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    AUTHORIZATION_DENIED = "AUTHORIZATION_DENIED"

    NOT_FOUND = "NOT_FOUND"

    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Email gateway or other outbound service
    DEPENDENCY_FAILED = "DEPENDENCY_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
