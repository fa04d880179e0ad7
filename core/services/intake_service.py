"""
Two-stage valuation intake.

    CONTACT_PENDING --start_intake--> PROPERTY_PENDING --complete_intake--> COMPLETED

start_intake creates the record; complete_intake runs the calculator,
merges property data and estimates into the record, saves it, and then
publishes ValuationCompleted. Notification happens in a handler on the
event bus, so an email failure can never fail or roll back the write.

complete_intake may be called again on a completed record. The new
property data and estimates replace the old ones; no history is kept.
"""

import logging
from enum import Enum

from core.calculator import DEFAULT_ASSUMPTIONS, calculate_valuation
from core.config import ValuationAssumptions
from core.event_bus import EventBus
from core.events import ValuationCompleted
from core.exceptions import NotFoundError
from core.models import Valuation, ValuationContact, ValuationProperty
from core.services.valuation_service import ValuationService

logger = logging.getLogger(__name__)


class IntakeState(str, Enum):
    """Where a valuation is in the intake flow."""

    CONTACT_PENDING = "contact_pending"
    PROPERTY_PENDING = "property_pending"
    COMPLETED = "completed"

    @classmethod
    def of(cls, valuation: Valuation | None) -> "IntakeState":
        if valuation is None:
            return cls.CONTACT_PENDING
        if valuation.stage2_completed and valuation.has_estimates:
            return cls.COMPLETED
        return cls.PROPERTY_PENDING


class IntakeService:
    """Drives a valuation from contact details to a completed estimate."""

    def __init__(
        self,
        valuations: ValuationService,
        event_bus: EventBus,
        assumptions: ValuationAssumptions = DEFAULT_ASSUMPTIONS,
    ):
        self.valuations = valuations
        self.event_bus = event_bus
        self.assumptions = assumptions

    def start_intake(self, contact: ValuationContact) -> Valuation:
        """
        Stage 1: create a valuation from contact details.

        Args:
            contact: Validated contact data

        Returns:
            New valuation; the caller keeps its id for stage 2
        """
        valuation = self.valuations.create(contact)
        logger.info(f"Valuation {valuation.id} started")
        return valuation

    def complete_intake(self, valuation_id: str, data: ValuationProperty) -> Valuation:
        """
        Stage 2: compute estimates and save them with the property data.

        Args:
            valuation_id: Id returned by start_intake
            data: Validated property financials

        Returns:
            Updated valuation with both estimates

        Raises:
            NotFoundError: If the id doesn't resolve. Nothing is written.
        """
        if self.valuations.get(valuation_id) is None:
            raise NotFoundError(f"Valuation {valuation_id} not found")

        estimate = calculate_valuation(data, self.assumptions)

        valuation = self.valuations.update(valuation_id, {
            **data.model_dump(),
            **estimate.model_dump(),
            "stage2_completed": True,
        })

        logger.info(
            f"Valuation {valuation.id} completed: "
            f"${valuation.conservative_estimate:,} - ${valuation.optimistic_estimate:,}"
        )

        self.event_bus.publish(ValuationCompleted.create(valuation))

        return valuation
