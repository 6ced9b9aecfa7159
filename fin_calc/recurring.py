"""Recurring-contribution engine: SIP and savings goals.

SIP maturity uses the annuity-due future value (each instalment earns a
month of interest before the period closes):

    FV = PMT * ((1 + i)^m - 1) / i * (1 + i)

The savings calculator works on the ordinary annuity and can solve for the
future value, the monthly deposit a goal needs, or the time a goal takes.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Union

from .config import MAX_PROJECTION_YEARS
from .data_models import SavingsMode, SavingsResult, SIPResult
from .errors import CalculatorValidationError
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


def compute_sip(
    monthly_amount: Number,
    annual_rate_percent: Number,
    years: Number,
    step_up_percent: Optional[Number] = None,
) -> SIPResult:
    """Compute SIP maturity, rounded to whole currency units.

    With a step-up, the monthly amount grows by ``step_up_percent`` every
    year; each year's contributions are compounded at the annual rate for the
    years left. ``step_up_benefit`` is the difference from the flat SIP and
    is None when there is no step-up. The step-up projection runs year by
    year and accepts at most ``MAX_PROJECTION_YEARS``.
    """
    amount = require_positive(monthly_amount, "monthly_amount")
    monthly_rate = percent_to_rate(require_positive(annual_rate_percent, "annual_rate_percent"), 12)
    years_dec = require_positive(years, "years")
    step_up = percent_to_rate(require_non_negative(step_up_percent, "step_up_percent"))
    if step_up > 0:
        require_at_most(years_dec, MAX_PROJECTION_YEARS, "years")

    with guard_overflow("years"):
        months = years_dec * 12
        maturity = amount * (((1 + monthly_rate) ** months - 1) / monthly_rate) * (1 + monthly_rate)
        total_investment = amount * months

        step_up_benefit = None
        if step_up > 0:
            annual_rate = monthly_rate * 12
            stepped_maturity = Decimal("0")
            current_sip = amount
            for year in range(1, int(years_dec) + 1):
                years_remaining = years_dec - year + 1
                stepped_maturity += current_sip * 12 * (1 + annual_rate) ** years_remaining
                current_sip *= 1 + step_up
            step_up_benefit = round_currency(stepped_maturity - maturity)
            logger.debug("Step-up SIP maturity %s against flat %s", stepped_maturity, maturity)

    return SIPResult(
        maturity_amount=round_currency(maturity),
        total_investment=round_currency(total_investment),
        wealth_gained=round_currency(maturity - total_investment),
        step_up_benefit=step_up_benefit,
    )


def parse_savings_mode(value: Union[SavingsMode, str]) -> SavingsMode:
    try:
        return SavingsMode(value)
    except ValueError as exc:
        choices = ", ".join(m.value for m in SavingsMode)
        raise CalculatorValidationError(f"Mode must be one of {choices}; got {value}", "mode") from exc


def compute_savings(
    mode: Union[SavingsMode, str],
    annual_rate_percent: Number,
    monthly_deposit: Optional[Number] = None,
    years: Optional[Number] = None,
    target_amount: Optional[Number] = None,
    inflation_percent: Optional[Number] = None,
) -> SavingsResult:
    """Solve a monthly savings plan.

    ``future-value`` needs the deposit and years, ``goal-planning`` the target
    and years, ``time-to-goal`` the deposit and target. Inputs a mode does not
    use are ignored.
    """
    mode = parse_savings_mode(mode)
    monthly_rate = percent_to_rate(require_positive(annual_rate_percent, "annual_rate_percent"), 12)

    if mode is SavingsMode.FUTURE_VALUE:
        deposit = require_positive(monthly_deposit, "monthly_deposit")
        years_dec = require_positive(years, "years")
        inflation = percent_to_rate(require_non_negative(inflation_percent, "inflation_percent"))
        months = years_dec * 12
        with guard_overflow("years"):
            future_value = deposit * ((1 + monthly_rate) ** months - 1) / monthly_rate
            total_deposits = deposit * months
            real_value = future_value / (1 + inflation) ** years_dec if inflation > 0 else future_value
        return SavingsResult(
            mode=mode,
            future_value=future_value,
            total_deposits=total_deposits,
            total_interest=future_value - total_deposits,
            real_value=real_value,
        )

    if mode is SavingsMode.GOAL_PLANNING:
        target = require_positive(target_amount, "target_amount")
        years_dec = require_positive(years, "years")
        months = years_dec * 12
        with guard_overflow("years"):
            required = target / (((1 + monthly_rate) ** months - 1) / monthly_rate)
            total_deposits = required * months
        return SavingsResult(
            mode=mode,
            future_value=target,
            total_deposits=total_deposits,
            total_interest=target - total_deposits,
            monthly_required_for_goal=required,
        )

    deposit = require_positive(monthly_deposit, "monthly_deposit")
    target = require_positive(target_amount, "target_amount")
    with guard_overflow("target_amount"):
        years_needed = (1 + target * monthly_rate / deposit).ln() / (12 * (1 + monthly_rate).ln())
        total_deposits = deposit * years_needed * 12
    return SavingsResult(
        mode=mode,
        future_value=target,
        total_deposits=total_deposits,
        total_interest=target - total_deposits,
        years_to_reach_goal=years_needed,
    )
