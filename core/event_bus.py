"""
Synchronous in-process publish/subscribe.

Handlers run in the publisher's thread, in subscription order, after the
write that produced the event has been saved. A failing handler is logged
and skipped; it never reaches the publisher.
"""

import logging
from typing import Callable, TypeVar

from core.events import SiteEvent

logger = logging.getLogger(__name__)

EventT = TypeVar("EventT", bound=SiteEvent)
Handler = Callable[[EventT], None]


class EventBus:
    """Routes each published event to the handlers registered for its exact class."""

    def __init__(self):
        self._handlers: dict[type[SiteEvent], list[Callable]] = {}

    def subscribe(self, event_type: type[EventT], handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def publish(self, event: SiteEvent) -> None:
        for handler in self._handlers.get(type(event), []):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s (event_id=%s)",
                    getattr(handler, "__name__", repr(handler)),
                    type(event).__name__,
                    event.event_id,
                )
