"""Request id propagation: X-Request-ID header in, contextvar during the request, header out."""

from contextvars import ContextVar
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Id of the request being handled, or None outside a request."""
    return _request_id.get()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuses an incoming X-Request-ID or mints a uuid4."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        token = _request_id.set(request_id)
        try:
            response = await call_next(request)
        finally:
            _request_id.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response
