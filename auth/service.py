"""Admin authentication service."""

import hmac

from auth.config import AuthConfig
from auth.exceptions import AuthenticationError, AuthorizationError, UnauthenticatedError
from auth.security_logger import SecurityEvent, SecurityLogger
from auth.session import SessionManager
from auth.types import ADMIN_ROLE, AdminSession, SessionClaims


def _matches(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


class AuthService:
    """Checks admin credentials and session tokens.

    Handles:
    - Login (credentials from configuration, single admin role)
    - Session verification for every admin request
    - Logout
    """

    def __init__(
        self,
        config: AuthConfig,
        session_manager: SessionManager,
        security_logger: SecurityLogger,
    ):
        self._config = config
        self._session_manager = session_manager
        self._security_logger = security_logger

    @property
    def cookie_name(self) -> str:
        return self._config.cookie_name

    @property
    def secure_cookies(self) -> bool:
        return self._config.secure_cookies

    def issue_session(
        self,
        username: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AdminSession:
        """Verify credentials and issue a signed admin session.

        Both fields are always compared so timing doesn't reveal which
        one was wrong.

        Raises:
            AuthenticationError: If either field doesn't match.
        """
        user_ok = _matches(username, self._config.admin_username)
        pass_ok = _matches(password, self._config.admin_password)

        if not (user_ok and pass_ok):
            self._security_logger.log(
                SecurityEvent.LOGIN_FAILED,
                subject=username,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            raise AuthenticationError("Invalid username or password")

        session = self._session_manager.issue(username, role=ADMIN_ROLE)

        self._security_logger.log(
            SecurityEvent.LOGIN_SUCCEEDED,
            subject=username,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return session

    def require_admin(
        self,
        token: str | None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> SessionClaims:
        """Verify a session token and require the admin role.

        Raises:
            UnauthenticatedError: No token, bad signature or expired.
            AuthorizationError: Valid token without the admin role.
        """
        if not token:
            raise UnauthenticatedError("Authentication required")

        try:
            claims = self._session_manager.verify(token)
        except UnauthenticatedError:
            self._security_logger.log(
                SecurityEvent.SESSION_REJECTED,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            raise

        if claims.role != ADMIN_ROLE:
            self._security_logger.log(
                SecurityEvent.SESSION_FORBIDDEN,
                subject=claims.sub,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"role": claims.role},
            )
            raise AuthorizationError("Admin role required")

        return claims

    def logout(self, token: str | None = None, ip_address: str | None = None) -> None:
        """Record a logout. Tokens are stateless, so nothing is revoked.

        The subject is taken from the token when it still verifies; an
        absent, expired or forged token logs the event without one.
        """
        subject = None
        if token:
            try:
                subject = self._session_manager.verify(token).sub
            except UnauthenticatedError:
                pass

        self._security_logger.log(
            SecurityEvent.LOGOUT,
            subject=subject,
            ip_address=ip_address,
        )
