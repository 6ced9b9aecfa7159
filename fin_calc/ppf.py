"""Public Provident Fund engine.

The statutory rate and tenure are fixed (see ``config``). Deposits are made
at the start of each year and the balance is compounded yearly:

    balance = (balance + deposit) * (1 + rate)

repeated for every year of the tenure.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from .config import PPF_RATE, PPF_TENURE_YEARS
from .data_models import PPFResult
from .utils import Number, percent_to_rate, require_non_negative, require_positive

logger = logging.getLogger(__name__)


def compute_ppf(
    annual_deposit: Number,
    current_age: Number,
    tax_slab_percent: Optional[Number] = None,
) -> PPFResult:
    """Compute PPF maturity and the income-tax deduction over the tenure.

    ``current_age`` must be positive and is returned with the result, but
    the amounts do not depend on it.
    """
    deposit = require_positive(annual_deposit, "annual_deposit")
    age = require_positive(current_age, "current_age")
    tax_slab = percent_to_rate(require_non_negative(tax_slab_percent, "tax_slab_percent"))

    balance = Decimal("0")
    for _ in range(PPF_TENURE_YEARS):
        balance = (balance + deposit) * (1 + PPF_RATE)

    total_investment = deposit * PPF_TENURE_YEARS
    logger.debug("PPF of %s a year matures at %s", deposit, balance)
    return PPFResult(
        maturity_amount=balance,
        total_investment=total_investment,
        total_interest=balance - total_investment,
        tax_savings=deposit * tax_slab * PPF_TENURE_YEARS,
        current_age=age,
    )
