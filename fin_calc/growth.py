"""Compound-growth engine: fixed deposits, compound interest and lump sums.

All three calculators share one closed-form computation:

    A = P * (1 + r/n)^(n*t)

with ``n`` taken from the compounding frequency. A monthly contribution, when
given, grows as an ordinary annuity at the monthly rate ``r/12`` over
``12*t`` months whatever ``n`` is, so principal and contributions compound on
different bases.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Union

from .config import FD_TAX_FREE_INTEREST
from .data_models import CompoundFrequency, GrowthResult
from .errors import CalculatorValidationError
from .utils import Number, guard_overflow, percent_to_rate, require_non_negative, require_positive

logger = logging.getLogger(__name__)

FrequencyLike = Union[CompoundFrequency, str, int]


def parse_frequency(value: FrequencyLike) -> CompoundFrequency:
    """Accept a ``CompoundFrequency``, its name or its periods per year."""
    if isinstance(value, CompoundFrequency):
        return value
    for freq in CompoundFrequency:
        if str(value).strip().lower() in (freq.value, str(freq.periods_per_year)):
            return freq
    raise CalculatorValidationError(
        f"Compounding frequency must be yearly, quarterly or monthly; got {value}", "frequency"
    )


def compute_compound_growth(
    principal: Number,
    annual_rate_percent: Number,
    years: Number,
    frequency: FrequencyLike = CompoundFrequency.QUARTERLY,
    monthly_contribution: Optional[Number] = None,
    tax_rate_percent: Optional[Number] = None,
) -> GrowthResult:
    """Compute maturity, interest and effective rate for a compounding deposit.

    Interest above the FD threshold is taxed at ``tax_rate_percent``; below
    it no tax applies whatever the rate. The effective annual rate is the
    simple average yearly growth of the final (post-tax, if taxed) amount over
    everything paid in.
    """
    principal_dec = require_positive(principal, "principal")
    rate = percent_to_rate(require_positive(annual_rate_percent, "annual_rate_percent"))
    years_dec = require_positive(years, "years")
    contribution = require_non_negative(monthly_contribution, "monthly_contribution")
    taxed = tax_rate_percent is not None
    tax_rate = percent_to_rate(require_non_negative(tax_rate_percent, "tax_rate_percent"))
    n = parse_frequency(frequency).periods_per_year

    with guard_overflow("years"):
        maturity = principal_dec * (1 + rate / n) ** (n * years_dec)
        if contribution > 0:
            monthly_rate = rate / 12
            maturity += contribution * ((1 + monthly_rate) ** (12 * years_dec) - 1) / monthly_rate

        total_contributions = principal_dec + contribution * 12 * years_dec
        interest_earned = maturity - total_contributions

        taxable_interest = interest_earned if interest_earned > FD_TAX_FREE_INTEREST else Decimal("0")
        tax_amount = taxable_interest * tax_rate
        post_tax = maturity - tax_amount
        effective_rate = (post_tax / total_contributions - 1) / years_dec * 100
    logger.debug(
        "Growth of %s at %s compounded %s times a year for %s years: %s",
        principal_dec, rate, n, years_dec, maturity,
    )

    return GrowthResult(
        maturity_amount=maturity,
        total_contributions=total_contributions,
        interest_earned=interest_earned,
        taxable_interest=taxable_interest,
        tax_amount=tax_amount,
        effective_annual_rate_percent=effective_rate,
        post_tax_returns=post_tax if taxed else None,
    )


def compute_fixed_deposit(
    principal: Number,
    annual_rate_percent: Number,
    years: Number,
    frequency: FrequencyLike = CompoundFrequency.QUARTERLY,
    tax_rate_percent: Optional[Number] = None,
) -> GrowthResult:
    """Fixed deposit: quarterly compounding by default, optional tax on interest."""
    return compute_compound_growth(
        principal, annual_rate_percent, years, frequency, tax_rate_percent=tax_rate_percent
    )


def compute_compound_interest(
    principal: Number,
    annual_rate_percent: Number,
    years: Number,
    frequency: FrequencyLike = CompoundFrequency.MONTHLY,
    monthly_contribution: Optional[Number] = None,
) -> GrowthResult:
    """Compound interest with an optional monthly top-up."""
    return compute_compound_growth(
        principal, annual_rate_percent, years, frequency, monthly_contribution=monthly_contribution
    )


def compute_lump_sum(
    principal: Number,
    annual_rate_percent: Number,
    years: Number,
    frequency: FrequencyLike = CompoundFrequency.YEARLY,
) -> GrowthResult:
    return compute_compound_growth(principal, annual_rate_percent, years, frequency)
