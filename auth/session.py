"""Signed session tokens.

Sessions are stateless: the token is an HS256 JWT carrying {role, sub, iat,
exp}. There is no server-side session store, so logout only clears the
cookie and a leaked token stays valid until it expires.
"""

from datetime import timedelta

import jwt

from auth.config import AuthConfig
from auth.exceptions import UnauthenticatedError
from auth.types import ADMIN_ROLE, AdminSession, SessionClaims
from utils.timezone import now_utc


class SessionManager:
    """Issue and verify signed session tokens."""

    def __init__(self, config: AuthConfig):
        self._config = config

    def issue(self, subject: str, role: str = ADMIN_ROLE) -> AdminSession:
        """Sign a token for subject with the configured expiry."""
        now = now_utc().replace(microsecond=0)
        claims = SessionClaims(
            role=role,
            sub=subject,
            iat=now,
            exp=now + timedelta(days=self._config.session_expiry_days),
        )

        token = jwt.encode(
            {
                "role": claims.role,
                "sub": claims.sub,
                "iat": claims.iat,
                "exp": claims.exp,
            },
            self._config.jwt_secret,
            algorithm=self._config.jwt_algorithm,
        )

        return AdminSession(
            token=token,
            claims=claims,
            max_age_seconds=self._config.session_max_age_seconds,
        )

    def verify(self, token: str) -> SessionClaims:
        """Verify signature and expiry.

        Raises UnauthenticatedError for any invalid token, including an
        expired one. Role is not checked here.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.jwt_secret,
                algorithms=[self._config.jwt_algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.InvalidTokenError as e:
            raise UnauthenticatedError("Invalid or expired session") from e

        try:
            return SessionClaims.model_validate(payload)
        except ValueError as e:
            raise UnauthenticatedError("Malformed session claims") from e
