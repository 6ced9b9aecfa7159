"""Return on investment and CAGR."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from .data_models import ROIResult
from .utils import Number, guard_overflow, require_non_negative, require_positive


def compute_roi(
    initial_investment: Number,
    final_value: Number,
    years: Optional[Number] = None,
    additional_costs: Optional[Number] = None,
) -> ROIResult:
    """Compute total ROI and, when a holding period is given, the CAGR.

    Additional costs count towards the amount invested. Without a positive
    ``years`` the annualized figure is 0.
    """
    initial = require_positive(initial_investment, "initial_investment")
    final = require_positive(final_value, "final_value")
    years_dec = require_non_negative(years, "years")
    costs = require_non_negative(additional_costs, "additional_costs")

    total_investment = initial + costs
    total_gain = final - total_investment
    annualized = Decimal("0")
    if years_dec > 0:
        with guard_overflow("years"):
            annualized = ((final / total_investment) ** (1 / years_dec) - 1) * 100

    return ROIResult(
        total_roi_percent=total_gain / total_investment * 100,
        annualized_roi_percent=annualized,
        total_gain=total_gain,
        total_investment=total_investment,
    )
