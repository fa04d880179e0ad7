"""
Handler for ValuationCompleted events.

Emails the valuation report to the property owner. Failures propagate to
the event bus, which logs them without affecting the saved valuation.
"""

import logging
from typing import Callable

from core.events import ValuationCompleted

logger = logging.getLogger(__name__)


def handle_valuation_completed(notification_service) -> Callable:
    """
    Factory that returns a ValuationCompleted handler.

    Dependencies are captured at wiring time via closure.

    Args:
        notification_service: NotificationService instance

    Returns:
        Handler callable that processes ValuationCompleted events
    """

    def handler(event: ValuationCompleted):
        notification_service.send_valuation_report(event.valuation)

    return handler
