"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication/authorization errors."""


class AuthenticationError(AuthError):
    """
    Login credentials did not match.

    Never says which field was wrong.
    """


class UnauthenticatedError(AuthError):
    """
    No session token, or the token is invalid or expired.

    Invalid signature and expiry are deliberately indistinguishable.
    """


class AuthorizationError(AuthError):
    """Token is valid but does not carry the admin role."""
