"""
Valuation record store.

Index entries carry the fields the admin table searches and filters on
(email, street, city, state, stage) so listing never loads full records.
"""

import logging
from typing import Any

from core.models import Valuation, ValuationContact, ValuationIndexEntry
from core.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class ValuationService(RecordStore[Valuation]):
    """Service for valuation records."""

    PREFIX = "valuation"
    MODEL = Valuation

    def index_entry(self, record: Valuation) -> dict[str, Any]:
        return ValuationIndexEntry.from_valuation(record).model_dump(mode="json")

    def sort_key(self, record: Valuation):
        return record.updated_at

    def create(self, contact: ValuationContact) -> Valuation:
        """
        Create a valuation from stage 1 contact data.

        Property and estimate fields start out null.

        Args:
            contact: Validated contact data

        Returns:
            Created valuation with its new id
        """
        return self._create({
            **contact.model_dump(),
            "stage1_completed": True,
            "stage2_completed": False,
        })

    def update(self, valuation_id: str, fields: dict[str, Any]) -> Valuation:
        """
        Merge fields into a valuation and refresh its index entry.

        Args:
            valuation_id: Valuation id
            fields: Attributes to overwrite

        Returns:
            Updated valuation

        Raises:
            NotFoundError: If valuation doesn't exist
        """
        return self._update(valuation_id, fields)
