"""
Domain events published on the EventBus.

Events are immutable and carry the saved domain object, so a handler
never has to read it back from storage.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from core.models import Valuation
from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class SiteEvent:
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


@dataclass(frozen=True, kw_only=True)
class ValuationCompleted(SiteEvent):
    """Stage 2 was submitted; estimates are computed and saved."""

    valuation: Valuation

    @classmethod
    def create(cls, valuation: Valuation) -> "ValuationCompleted":
        return cls(valuation=valuation)
