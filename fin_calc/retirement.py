"""Retirement planning engine.

Current savings compound yearly at the expected return until retirement,
while monthly contributions grow as an ordinary annuity at a twelfth of
that rate. The pot then supports a yearly withdrawal at the safe withdrawal
rate, which is compared with the target income grown by inflation.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from .config import DEFAULT_INFLATION_PERCENT, SAFE_WITHDRAWAL_RATE
from .data_models import RetirementResult
from .errors import CalculatorValidationError
from .utils import (
    Number,
    guard_overflow,
    percent_to_rate,
    require_non_negative,
    require_positive,
    round_currency,
)

logger = logging.getLogger(__name__)


def compute_retirement(
    current_age: Number,
    retirement_age: Number,
    annual_return_percent: Number,
    current_savings: Optional[Number] = None,
    monthly_contribution: Optional[Number] = None,
    target_annual_income: Optional[Number] = None,
    inflation_percent: Optional[Number] = None,
) -> RetirementResult:
    """Project savings to retirement and check them against an income goal.

    Parameters
    ----------
    current_age, retirement_age: Number
        The retirement age must be later than the current age.
    annual_return_percent: Number
        Expected yearly return in percent.
    current_savings, monthly_contribution: Optional[Number]
        What is already saved and what is added every month; both default to 0.
    target_annual_income: Optional[Number]
        Yearly income wanted in retirement, in today's money.
    inflation_percent: Optional[Number]
        Used to express the target in money of the retirement year; 3% when
        not given.

    Returns
    -------
    RetirementResult
        Amounts rounded to whole currency units. ``goal_met`` is decided on
        the unrounded figures.
    """
    age_now = require_positive(current_age, "current_age")
    age_at_retirement = require_positive(retirement_age, "retirement_age")
    if age_at_retirement <= age_now:
        raise CalculatorValidationError("Retirement age must be greater than current age", "retirement_age")
    annual_rate = percent_to_rate(require_positive(annual_return_percent, "annual_return_percent"))
    savings = require_non_negative(current_savings, "current_savings")
    contribution = require_non_negative(monthly_contribution, "monthly_contribution")
    target = require_non_negative(target_annual_income, "target_annual_income")
    if inflation_percent is None:
        inflation_percent = DEFAULT_INFLATION_PERCENT
    inflation = percent_to_rate(require_non_negative(inflation_percent, "inflation_percent"))

    years = age_at_retirement - age_now
    months = years * 12
    monthly_rate = annual_rate / 12

    with guard_overflow("retirement_age"):
        grown_savings = savings * (1 + annual_rate) ** years
        grown_contributions = Decimal("0")
        if contribution > 0:
            grown_contributions = contribution * ((1 + monthly_rate) ** months - 1) / monthly_rate
        total_savings = grown_savings + grown_contributions
        adjusted_target = target * (1 + inflation) ** years

    total_contributions = savings + contribution * months
    yearly_income = total_savings * SAFE_WITHDRAWAL_RATE
    goal_met = yearly_income >= adjusted_target
    logger.debug(
        "Retirement in %s years: savings %s support %s a year against %s",
        years, total_savings, yearly_income, adjusted_target,
    )

    return RetirementResult(
        total_savings=round_currency(total_savings),
        monthly_income=round_currency(yearly_income / 12),
        total_contributions=round_currency(total_contributions),
        investment_growth=round_currency(total_savings - total_contributions),
        inflation_adjusted_target=round_currency(adjusted_target),
        goal_met=goal_met,
        years_to_retirement=years,
    )
