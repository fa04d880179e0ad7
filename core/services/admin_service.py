"""
Admin back-office queries and actions.

Listing, search and pagination run over index entries only. Valuation
index entries already carry every column of the admin table; lead index
entries don't, so the current page of leads is resolved to full records
(falling back to the index summary when a record is missing).

Authorization is enforced before any of this runs (auth.security_middleware).
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Literal

from core.csv_export import build_csv
from core.exceptions import DependencyError, NotFoundError, ValidationError
from core.models import Lead, Valuation, ValuationStage
from core.services.lead_service import LeadService
from core.services.notification_service import NotificationService
from core.services.valuation_service import ValuationService
from utils.admin_context import get_current_admin
from utils.timezone import now_utc, parse_timestamp

logger = logging.getLogger(__name__)

ExportKind = Literal["valuations", "leads"]

VALUATION_CSV_HEADERS = [
    "ID", "Email", "First Name", "Last Name", "Phone",
    "Address", "City", "State", "ZIP",
    "Annual Rent", "Property Taxes", "Insurance", "Square Footage",
    "Taxes Reimbursed", "Stage",
    "Conservative Estimate", "Optimistic Estimate",
    "Created At", "Updated At",
]

LEAD_CSV_HEADERS = ["ID", "Name", "Email", "Phone", "Message", "Source", "Created At"]


def _iso(value: datetime | str | None) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _paginate(items: list, page: int, page_size: int) -> tuple[list, dict[str, int]]:
    if page < 1:
        raise ValidationError("Invalid page", errors={"page": "Must be 1 or greater"})
    if page_size < 1:
        raise ValidationError("Invalid page size", errors={"limit": "Must be 1 or greater"})

    total = len(items)
    start = (page - 1) * page_size
    return items[start:start + page_size], {
        "page": page,
        "page_size": page_size,
        "total": total,
        "total_pages": math.ceil(total / page_size),
    }


_UNDATED = datetime.min.replace(tzinfo=timezone.utc)


def _newest_first_key(entry: dict[str, Any], field: str) -> datetime:
    # Undated or unparseable entries sink to the end of a descending sort
    return parse_timestamp(entry.get(field)) or _UNDATED


def _contains(value: str | None, needle: str) -> bool:
    return value is not None and needle in value.lower()


def valuation_row(record: Valuation) -> list[Any]:
    return [
        record.id, record.email, record.first_name, record.last_name, record.phone,
        record.property_address, record.city, record.state, record.zip_code,
        record.annual_rent, record.annual_property_taxes, record.annual_insurance, record.square_footage,
        bool(record.taxes_reimbursed), int(record.stage),
        record.conservative_estimate, record.optimistic_estimate,
        _iso(record.created_at), _iso(record.updated_at),
    ]


def valuation_index_row(entry: dict[str, Any]) -> list[Any]:
    """Row for an index entry whose full record is missing."""
    return [
        entry.get("id"), entry.get("email"), None, None, None,
        entry.get("street"), entry.get("city"), entry.get("state"), entry.get("zip_code"),
        None, None, None, None,
        None, entry.get("stage"),
        entry.get("conservative"), entry.get("optimistic"),
        entry.get("created_at"), entry.get("updated_at"),
    ]


def lead_row(record: Lead) -> list[Any]:
    return [
        record.id, record.name, record.email, record.phone,
        record.message, record.source, _iso(record.created_at),
    ]


def lead_index_row(entry: dict[str, Any]) -> list[Any]:
    return [
        entry.get("id"), entry.get("name"), entry.get("email"), None,
        None, None, entry.get("created_at"),
    ]


class AdminService:
    """Service behind the admin dashboard."""

    def __init__(
        self,
        valuations: ValuationService,
        leads: LeadService,
        notifications: NotificationService,
        max_page_size: int = 100,
    ):
        self.valuations = valuations
        self.leads = leads
        self.notifications = notifications
        self.max_page_size = max_page_size

    def list_valuations(
        self,
        search: str | None = None,
        stage: int | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> dict[str, Any]:
        """
        Filter, sort and paginate valuation index entries.

        Args:
            search: Case-insensitive substring of email, street, city or state
            stage: 1 (contact only), 2 (property, no estimates) or 3 (completed)
            page: 1-indexed page number
            page_size: Items per page, capped at max_page_size

        Returns:
            {"items": [...], "pagination": {page, page_size, total, total_pages}}

        Raises:
            ValidationError: On an unknown stage or non-positive page/page_size
        """
        if stage is not None and stage not in {s.value for s in ValuationStage}:
            raise ValidationError("Invalid stage", errors={"stage": "Must be 1, 2 or 3"})

        entries = self.valuations.read_index()

        needle = (search or "").strip().lower()
        if needle:
            entries = [
                e for e in entries
                if any(_contains(e.get(f), needle) for f in ("email", "street", "city", "state"))
            ]

        if stage is not None:
            entries = [e for e in entries if e.get("stage") == stage]

        entries.sort(key=lambda e: _newest_first_key(e, "updated_at"), reverse=True)

        items, pagination = _paginate(entries, page, min(page_size, self.max_page_size))
        return {"items": items, "pagination": pagination}

    def list_leads(
        self,
        search: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> dict[str, Any]:
        """
        Filter, sort and paginate leads. Search matches name or email.

        Returns:
            {"items": [...], "pagination": {page, page_size, total, total_pages}}
        """
        entries = self.leads.read_index()

        needle = (search or "").strip().lower()
        if needle:
            entries = [
                e for e in entries
                if _contains(e.get("name"), needle) or _contains(e.get("email"), needle)
            ]

        entries.sort(key=lambda e: _newest_first_key(e, "created_at"), reverse=True)

        page_entries, pagination = _paginate(entries, page, min(page_size, self.max_page_size))
        return {"items": self.leads.resolve(page_entries), "pagination": pagination}

    def delete_valuation(self, valuation_id: str) -> bool:
        deleted = self.valuations.delete(valuation_id)
        if deleted:
            logger.info(f"Valuation {valuation_id} deleted by {get_current_admin()}")
        return deleted

    def delete_lead(self, lead_id: str) -> bool:
        deleted = self.leads.delete(lead_id)
        if deleted:
            logger.info(f"Lead {lead_id} deleted by {get_current_admin()}")
        return deleted

    def resend_valuation_notification(self, valuation_id: str) -> None:
        """
        Re-send the valuation report email. The record is not modified.

        Raises:
            NotFoundError: If the valuation doesn't exist or has no estimates
            DependencyError: If email is not configured or the send fails
        """
        valuation = self.valuations.get(valuation_id)
        if valuation is None or not valuation.has_estimates:
            raise NotFoundError(f"Completed valuation {valuation_id} not found")

        if not self.notifications.send_valuation_report(valuation):
            raise DependencyError("Email delivery is not configured")

        logger.info(f"Valuation report re-sent for {valuation_id}")

    def export_csv(self, kind: ExportKind) -> tuple[str, str]:
        """
        Export every indexed valuation or lead as CSV.

        Each index entry is resolved to its full record; entries whose record
        is missing are exported from the index summary.

        Args:
            kind: 'valuations' or 'leads'

        Returns:
            (filename, csv_text)

        Raises:
            ValidationError: On an unknown kind
        """
        if kind == "valuations":
            headers, store = VALUATION_CSV_HEADERS, self.valuations
            full_row, fallback_row = valuation_row, valuation_index_row
        elif kind == "leads":
            headers, store = LEAD_CSV_HEADERS, self.leads
            full_row, fallback_row = lead_row, lead_index_row
        else:
            raise ValidationError("Invalid export type", errors={"type": "Must be 'valuations' or 'leads'"})

        rows = []
        for entry in store.read_index():
            record = store.get(entry["id"])
            rows.append(full_row(record) if record is not None else fallback_row(entry))

        filename = f"{kind}-{now_utc().date().isoformat()}.csv"
        logger.info(f"Exported {len(rows)} {kind}")
        return filename, build_csv(headers, rows)

    def stats(self) -> dict[str, int]:
        """Dashboard counters computed from the indexes."""
        valuations = self.valuations.read_index()
        leads = self.leads.read_index()

        total = len(valuations)
        completed = sum(
            1 for v in valuations
            if v.get("stage") == ValuationStage.COMPLETED
            or (v.get("conservative") is not None and v.get("optimistic") is not None)
        )

        return {
            "total_valuations": total,
            "completed_reports": completed,
            "leads_total": len(leads),
            "conversion_rate": math.floor(completed / total * 100 + 0.5) if total else 0,
        }
