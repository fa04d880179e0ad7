"""Admin authentication and authorization."""

from auth.exceptions import (
    AuthError,
    AuthenticationError,
    UnauthenticatedError,
    AuthorizationError,
)
from auth.types import (
    ADMIN_ROLE,
    AdminLogin,
    AdminSession,
    SessionClaims,
)
from auth.config import AuthConfig
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.session import SessionManager
from auth.service import AuthService
from auth.security_middleware import AdminAuthMiddleware
from auth.api import create_auth_router
