"""Security event logging.

Events go to the 'security' logger as single-line records. Passwords and
tokens are never logged.
"""

import logging
from enum import Enum
from typing import Any


class SecurityEvent(Enum):
    """Auth security event types."""

    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    SESSION_REJECTED = "session_rejected"
    SESSION_FORBIDDEN = "session_forbidden"
    LOGOUT = "logout"


_WARNING_EVENTS = {
    SecurityEvent.LOGIN_FAILED,
    SecurityEvent.SESSION_FORBIDDEN,
}


class SecurityLogger:
    """Writes security events to the log."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("security")

    def log(
        self,
        event: SecurityEvent,
        subject: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Log a security event."""
        level = logging.WARNING if event in _WARNING_EVENTS else logging.INFO
        self._logger.log(
            level,
            "security_event=%s subject=%s ip=%s user_agent=%r details=%s",
            event.value,
            subject,
            ip_address,
            user_agent,
            details or {},
            extra={"security_event": event.value},
        )
