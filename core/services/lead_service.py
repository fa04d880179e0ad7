"""
Lead record store.

Leads are contact-form submissions. They are created once and never
mutated; the only other write is delete.
"""

import logging
from typing import Any

from core.models import Lead, LeadCreate, LeadIndexEntry
from core.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class LeadService(RecordStore[Lead]):
    """Service for lead records."""

    PREFIX = "lead"
    MODEL = Lead

    def index_entry(self, record: Lead) -> dict[str, Any]:
        return LeadIndexEntry.from_lead(record).model_dump(mode="json")

    def sort_key(self, record: Lead):
        return record.created_at

    def create(self, data: LeadCreate) -> Lead:
        """
        Record a contact-form submission.

        Args:
            data: Validated lead data

        Returns:
            Created lead
        """
        lead = self._create(data.model_dump())
        logger.info(f"New lead from source={lead.source or 'unknown'}")
        return lead
