"""Tests for valuation models: input validation and derived stage."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.models import (
    Valuation,
    ValuationContact,
    ValuationIndexEntry,
    ValuationProperty,
    ValuationStage,
)

NOW = datetime(2025, 3, 1, tzinfo=timezone.utc)


def _valuation(**overrides) -> Valuation:
    fields = {
        "id": "v-1", "first_name": "Dana", "last_name": "Whitfield",
        "email": "dana@example.com", "created_at": NOW, "updated_at": NOW,
    }
    fields.update(overrides)
    return Valuation(**fields)


class TestValuationContact:

    def test_phone_optional(self):
        contact = ValuationContact(first_name="A", last_name="B", email="a@example.com")
        assert contact.phone is None

    def test_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            ValuationContact(first_name="A", last_name="B", email="nope")

    def test_rejects_empty_name(self):
        with pytest.raises(ValidationError):
            ValuationContact(first_name="", last_name="B", email="a@example.com")


class TestValuationProperty:

    BASE = {
        "property_address": "1 Main St",
        "annual_rent": 1000,
        "annual_property_taxes": 0,
        "annual_insurance": 0,
        "square_footage": 100,
    }

    def test_taxes_reimbursed_defaults_false(self):
        assert ValuationProperty(**self.BASE).taxes_reimbursed is False

    @pytest.mark.parametrize("field,value", [
        ("annual_rent", -1),
        ("annual_property_taxes", -0.01),
        ("annual_insurance", -5),
        ("square_footage", 0),
    ])
    def test_rejects_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            ValuationProperty(**{**self.BASE, field: value})


class TestStage:

    def test_contact_only(self):
        assert _valuation().stage == ValuationStage.CONTACT

    def test_property_without_estimates(self):
        assert _valuation(stage2_completed=True).stage == ValuationStage.PROPERTY

    def test_completed(self):
        valuation = _valuation(
            stage2_completed=True, conservative_estimate=1, optimistic_estimate=2,
        )
        assert valuation.stage == ValuationStage.COMPLETED
        assert valuation.has_estimates is True

    def test_full_name(self):
        assert _valuation().full_name == "Dana Whitfield"


class TestIndexEntry:

    def test_from_valuation(self):
        valuation = _valuation(
            property_address="1 Main St", city="Springfield", state="IL",
            stage2_completed=True, conservative_estimate=10, optimistic_estimate=20,
        )

        entry = ValuationIndexEntry.from_valuation(valuation).model_dump(mode="json")

        assert entry["street"] == "1 Main St"
        assert entry["stage"] == 3
        assert entry["conservative"] == 10
        assert entry["optimistic"] == 20
        assert entry["email"] == "dana@example.com"
