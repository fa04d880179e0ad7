"""Typed exceptions for domain failures."""


class SiteError(Exception):
    """Base class for domain errors."""


class ValidationError(SiteError):
    """
    Input is missing or malformed.

    Carries field-level messages that are always safe to show to the end user.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        self.errors = errors or {}
        super().__init__(message)


class NotFoundError(SiteError):
    """Referenced id does not resolve to a live record."""


class DependencyError(SiteError):
    """
    An external collaborator (email gateway, geocoder) failed.

    Never propagated out of a write path: the durable record write has
    already succeeded by the time a collaborator is called.
    """


class ConfigurationError(SiteError):
    """Required configuration is missing. Fatal at startup."""
