"""Security middleware for FastAPI - admin session check and admin context."""

import ipaddress

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from auth.exceptions import AuthorizationError, UnauthenticatedError
from auth.service import AuthService
from api.base import ErrorCodes, error_json
from utils.admin_context import set_current_admin, clear_current_admin


def get_client_ip(request: Request) -> str | None:
    """Extract valid IP address from request, or None if invalid."""
    if not request.client:
        return None
    host = request.client.host
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return None


class AdminAuthMiddleware(BaseHTTPMiddleware):
    """Middleware that rejects unauthenticated admin requests.

    Protected requests:
    - every path under /admin except the login endpoint
    - every non-GET request to /blog-posts

    For protected requests:
    1. Extracts the session token from the admin cookie
    2. Verifies signature, expiry and admin role via AuthService
    3. Sets the admin subject in request.state and admin context
    4. Clears context after request completes

    Rejected requests never reach a route, so no store is touched.
    """

    PUBLIC_ADMIN_PATHS = [
        "/admin/login",
        "/admin/logout",
    ]

    def __init__(self, app, auth_service: AuthService):
        super().__init__(app)
        self._auth_service = auth_service

    def _is_protected(self, request: Request) -> bool:
        path = request.url.path.rstrip("/") or "/"

        if path == "/admin" or path.startswith("/admin/"):
            return path not in self.PUBLIC_ADMIN_PATHS

        if path == "/blog-posts" or path.startswith("/blog-posts/"):
            return request.method not in ("GET", "HEAD", "OPTIONS")

        return False

    async def dispatch(self, request: Request, call_next):
        """Process request through middleware."""
        if not self._is_protected(request):
            return await call_next(request)

        token = request.cookies.get(self._auth_service.cookie_name)

        try:
            claims = self._auth_service.require_admin(
                token,
                ip_address=get_client_ip(request),
                user_agent=request.headers.get("User-Agent"),
            )
        except UnauthenticatedError:
            return error_json(401, ErrorCodes.NOT_AUTHENTICATED, "Authentication required")
        except AuthorizationError:
            return error_json(401, ErrorCodes.AUTHORIZATION_DENIED, "Unauthorized")

        set_current_admin(claims.sub)
        request.state.admin = claims

        try:
            return await call_next(request)
        finally:
            clear_current_admin()
