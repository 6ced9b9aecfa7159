"""Dividend income projection."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from .config import MAX_PROJECTION_YEARS
from .data_models import DividendResult
from .utils import (
    Number,
    guard_overflow,
    percent_to_rate,
    require_at_most,
    require_non_negative,
    require_positive,
    round_currency,
)

logger = logging.getLogger(__name__)


def compute_dividend_projection(
    initial_investment: Number,
    dividend_yield_percent: Number,
    years: Number,
    annual_growth_percent: Optional[Number] = None,
    monthly_contribution: Optional[Number] = None,
    reinvest_dividends: bool = True,
) -> DividendResult:
    """Project a dividend portfolio year by year.

    Each whole year the year's contributions are added, dividends are paid
    at the current yield (and reinvested if asked), then both the portfolio
    value and the yield grow by ``annual_growth_percent``. A fractional last
    year is not simulated, though its contributions count towards
    ``total_contributions``.

    ``capital_growth`` is what the portfolio gained beyond contributions and
    reinvested dividends.
    """
    initial = require_positive(initial_investment, "initial_investment")
    current_yield = percent_to_rate(require_positive(dividend_yield_percent, "dividend_yield_percent"))
    years_dec = require_at_most(require_positive(years, "years"), MAX_PROJECTION_YEARS, "years")
    growth = percent_to_rate(require_non_negative(annual_growth_percent, "annual_growth_percent"))
    monthly = require_non_negative(monthly_contribution, "monthly_contribution")

    portfolio = initial
    dividends_received = Decimal("0")
    with guard_overflow("years"):
        for _ in range(int(years_dec)):
            portfolio += monthly * 12
            dividends = portfolio * current_yield
            dividends_received += dividends
            if reinvest_dividends:
                portfolio += dividends
            portfolio *= 1 + growth
            current_yield *= 1 + growth
        final_dividends = portfolio * current_yield

    total_contributions = initial + monthly * 12 * years_dec
    reinvested = dividends_received if reinvest_dividends else Decimal("0")
    logger.debug("Dividend portfolio after %s years: %s paying %s a year", years_dec, portfolio, final_dividends)

    return DividendResult(
        final_portfolio_value=round_currency(portfolio),
        final_annual_dividends=round_currency(final_dividends),
        monthly_dividend_income=round_currency(final_dividends / 12),
        total_dividends_received=round_currency(dividends_received),
        total_contributions=round_currency(total_contributions),
        yield_on_cost_percent=final_dividends / initial * 100,
        capital_growth=round_currency(portfolio - total_contributions - reinvested),
    )
