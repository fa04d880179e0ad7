"""Propagate the authenticated admin identity through the call stack using contextvars."""

from contextlib import contextmanager
from contextvars import ContextVar

_current_admin: ContextVar[str | None] = ContextVar("current_admin", default=None)


def get_current_admin() -> str | None:
    """
    Get the admin subject for the current request.

    Returns None outside of an authenticated admin request. Used for log
    attribution only - authorization is enforced by the admin gate.
    """
    return _current_admin.get()


def set_current_admin(subject: str) -> None:
    """
    Set current admin subject in context.

    Called by the admin auth middleware after verifying the session token.
    """
    _current_admin.set(subject)


def clear_current_admin() -> None:
    """
    Clear admin context.

    Must be called in finally block to prevent context leakage.
    """
    _current_admin.set(None)


@contextmanager
def admin_context(subject: str):
    """
    Context manager for temporarily setting the admin subject.

    Example:
        with admin_context("admin"):
            admin_service.delete_valuation(valuation_id)
    """
    previous = _current_admin.get()
    set_current_admin(subject)
    try:
        yield
    finally:
        if previous is None:
            clear_current_admin()
        else:
            set_current_admin(previous)
