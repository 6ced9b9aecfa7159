"""Loan eligibility engine.

Lenders cap total EMIs at a share of monthly income, the Fixed Obligation to
Income Ratio (FOIR). The EMI left under that cap is turned into a principal
by inverting the annuity formula:

    P = EMI * ((1 + i)^n - 1) / (i * (1 + i)^n)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Union

from .config import FOIR_LIMITS, RECOMMENDED_LOAN_SHARE
from .data_models import EligibilityResult, LoanType
from .errors import CalculatorValidationError
from .utils import Number, guard_overflow, percent_to_rate, require_non_negative, require_positive

logger = logging.getLogger(__name__)


def parse_loan_type(value: Union[LoanType, str]) -> LoanType:
    try:
        return LoanType(value)
    except ValueError as exc:
        raise CalculatorValidationError(
            f"Loan type must be home, car or personal; got {value}", "loan_type"
        ) from exc


def principal_for_emi(emi: Decimal, rate_per_month: Decimal, months: Decimal) -> Decimal:
    """Largest principal the given EMI repays over ``months`` payments."""
    factor = (1 + rate_per_month) ** months
    return emi * (factor - 1) / (rate_per_month * factor)


def compute_eligibility(
    monthly_income: Number,
    existing_emi: Optional[Number],
    annual_rate_percent: Number,
    tenure_years: Number,
    loan_type: Union[LoanType, str] = LoanType.HOME,
) -> EligibilityResult:
    """Compute the maximum and recommended loan for an income.

    When existing EMIs already exceed the FOIR ceiling there is no room for
    a new loan: ``max_emi`` is clamped to zero and the result is flagged with
    ``obligations_exceed_limit``.
    """
    income = require_positive(monthly_income, "monthly_income")
    current_emi = require_non_negative(existing_emi, "existing_emi")
    rate_per_month = percent_to_rate(require_positive(annual_rate_percent, "annual_rate_percent"), 12)
    months = require_positive(tenure_years, "tenure_years") * 12
    foir = FOIR_LIMITS[parse_loan_type(loan_type).value]

    max_emi = income * foir - current_emi
    exceeded = max_emi < 0
    if exceeded:
        logger.warning(
            "Existing EMI %s exceeds the %s FOIR ceiling on income %s", current_emi, foir, income
        )
        max_emi = Decimal("0")

    with guard_overflow("tenure_years"):
        max_loan = principal_for_emi(max_emi, rate_per_month, months)
    return EligibilityResult(
        max_loan_amount=max_loan,
        max_emi=max_emi,
        recommended_loan_amount=max_loan * RECOMMENDED_LOAN_SHARE,
        foir_percent=foir * 100,
        obligations_exceed_limit=exceeded,
    )
