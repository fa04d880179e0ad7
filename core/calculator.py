"""
Cap-rate valuation.

Pure function, no I/O. Inputs are validated upstream (ValuationProperty);
this module never raises for business reasons.

    maintenance = square_footage * maintenance_cost_per_sqft
    taxes       = 0 if taxes_reimbursed else annual_property_taxes
    noi         = annual_rent - taxes - annual_insurance - maintenance
    estimate    = round(max(noi / cap_rate, 0))

A higher cap rate yields a lower value, so the 12% figure is the
conservative estimate and the 8% figure the optimistic one.
"""

import math

from core.config import ValuationAssumptions
from core.models import ValuationEstimate, ValuationProperty

DEFAULT_ASSUMPTIONS = ValuationAssumptions()


def _round_half_up(value: float) -> int:
    # Only called on non-negative values, where half-up equals half-away-from-zero.
    return int(math.floor(value + 0.5))


def net_operating_income(
    data: ValuationProperty,
    assumptions: ValuationAssumptions = DEFAULT_ASSUMPTIONS,
) -> float:
    """Annual rent minus non-reimbursed taxes, insurance and maintenance."""
    maintenance_cost = data.square_footage * assumptions.maintenance_cost_per_sqft
    taxes_to_subtract = 0 if data.taxes_reimbursed else data.annual_property_taxes
    return data.annual_rent - taxes_to_subtract - data.annual_insurance - maintenance_cost


def calculate_valuation(
    data: ValuationProperty,
    assumptions: ValuationAssumptions = DEFAULT_ASSUMPTIONS,
) -> ValuationEstimate:
    """
    Turn property financials into a conservative/optimistic value range.

    Both estimates are floored at zero, so a negative NOI yields 0/0.
    """
    noi = net_operating_income(data, assumptions)

    conservative = _round_half_up(max(noi / assumptions.conservative_cap_rate, 0))
    optimistic = _round_half_up(max(noi / assumptions.optimistic_cap_rate, 0))

    return ValuationEstimate(
        conservative_estimate=conservative,
        optimistic_estimate=optimistic,
    )
