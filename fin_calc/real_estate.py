"""Rental property analysis.

Cash flow, capitalization rate and cash-on-cash return for a property bought
outright, plus its value after appreciating over the holding period:

    cash flow  = rent * (1 - vacancy) - expenses - taxes/12 - insurance/12
                 - price * maintenance / 12
    cap rate   = yearly cash flow / price
    total ROI  = (cash flow over the holding period + appreciation) / down payment
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import (
    DEFAULT_APPRECIATION_PERCENT,
    DEFAULT_HOLDING_YEARS,
    DEFAULT_MAINTENANCE_PERCENT,
    DEFAULT_VACANCY_PERCENT,
)
from .data_models import RentalPropertyResult
from .utils import (
    Number,
    guard_overflow,
    percent_to_rate,
    require_non_negative,
    require_positive,
    round_currency,
)

logger = logging.getLogger(__name__)


def _or_default(value: Optional[Number], default: Number) -> Number:
    return default if value is None else value


def compute_rental_property(
    purchase_price: Number,
    down_payment: Number,
    monthly_rent: Number,
    monthly_expenses: Optional[Number] = None,
    annual_property_tax: Optional[Number] = None,
    annual_insurance: Optional[Number] = None,
    maintenance_percent: Optional[Number] = None,
    vacancy_percent: Optional[Number] = None,
    appreciation_percent: Optional[Number] = None,
    holding_years: Optional[Number] = None,
) -> RentalPropertyResult:
    """Analyse a rental property.

    Maintenance (2% of the price a year), vacancy (5%), appreciation (3% a
    year) and the holding period (10 years) take their defaults when not
    given. A negative cash flow is a valid result.
    """
    price = require_positive(purchase_price, "purchase_price")
    down = require_positive(down_payment, "down_payment")
    rent = require_positive(monthly_rent, "monthly_rent")
    expenses = require_non_negative(monthly_expenses, "monthly_expenses")
    taxes = require_non_negative(annual_property_tax, "annual_property_tax")
    insurance = require_non_negative(annual_insurance, "annual_insurance")
    maintenance = percent_to_rate(
        require_non_negative(_or_default(maintenance_percent, DEFAULT_MAINTENANCE_PERCENT), "maintenance_percent")
    )
    vacancy = percent_to_rate(
        require_non_negative(_or_default(vacancy_percent, DEFAULT_VACANCY_PERCENT), "vacancy_percent")
    )
    appreciation = percent_to_rate(
        require_non_negative(
            _or_default(appreciation_percent, DEFAULT_APPRECIATION_PERCENT), "appreciation_percent"
        )
    )
    years = require_non_negative(_or_default(holding_years, DEFAULT_HOLDING_YEARS), "holding_years")

    effective_rent = rent * (1 - vacancy)
    monthly_costs = expenses + taxes / 12 + insurance / 12 + price * maintenance / 12
    monthly_cash_flow = effective_rent - monthly_costs
    annual_cash_flow = monthly_cash_flow * 12

    with guard_overflow("holding_years"):
        future_value = price * (1 + appreciation) ** years
    total_appreciation = future_value - price
    total_return = annual_cash_flow * years + total_appreciation
    logger.debug(
        "Rental of %s: %s a month, worth %s after %s years", price, monthly_cash_flow, future_value, years
    )

    return RentalPropertyResult(
        monthly_cash_flow=round_currency(monthly_cash_flow),
        annual_cash_flow=round_currency(annual_cash_flow),
        net_operating_income=round_currency(annual_cash_flow),
        cap_rate_percent=annual_cash_flow / price * 100,
        cash_on_cash_percent=annual_cash_flow / down * 100,
        future_value=round_currency(future_value),
        total_appreciation=round_currency(total_appreciation),
        total_roi_percent=total_return / down * 100,
    )
