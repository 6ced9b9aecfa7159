"""Credit-card payoff engine.

Each call simulates three payment policies on the same balance:

* ``minimum``: the stated minimum payment, or 3 % of the balance if none;
* ``fixed``: a chosen fixed payment (falls back to ``minimum`` if not given);
* ``aggressive``: 10 % of the starting balance.

A payment that does not cover the first month's interest, or one that does
not clear the balance within the simulation bound, never pays the card off.
That outcome is returned as ``PayoffOutcome.never()``, not raised.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Union

from .config import (
    AGGRESSIVE_PAYMENT_SHARE,
    DEFAULT_MINIMUM_PAYMENT_SHARE,
    PAYOFF_MAX_MONTHS,
    PAYOFF_SETTLED_BALANCE,
)
from .data_models import CreditCardResult, PaymentStrategy, PayoffOutcome
from .errors import CalculatorValidationError
from .utils import Number, percent_to_rate, require_non_negative, require_positive

logger = logging.getLogger(__name__)


def simulate_payoff(balance: Decimal, monthly_rate: Decimal, payment: Decimal) -> PayoffOutcome:
    """Run the month-by-month payoff for one payment size."""
    remaining = balance
    months = 0
    total_interest = Decimal("0")
    while remaining > PAYOFF_SETTLED_BALANCE and months < PAYOFF_MAX_MONTHS:
        interest = remaining * monthly_rate
        principal_paid = min(payment - interest, remaining)
        if principal_paid <= 0:
            return PayoffOutcome.never()
        total_interest += interest
        remaining -= principal_paid
        months += 1

    if remaining > PAYOFF_SETTLED_BALANCE:
        logger.debug("Payment %s still owes %s after %s months", payment, remaining, months)
        return PayoffOutcome.never()
    return PayoffOutcome(months=Decimal(months), interest=total_interest)


def parse_strategy(value: Union[PaymentStrategy, str]) -> PaymentStrategy:
    try:
        return PaymentStrategy(value)
    except ValueError as exc:
        raise CalculatorValidationError(
            f"Payment strategy must be minimum, fixed or aggressive; got {value}", "strategy"
        ) from exc


def compute_credit_card_payoff(
    balance: Number,
    annual_rate_percent: Number,
    minimum_payment: Optional[Number] = None,
    fixed_payment: Optional[Number] = None,
    strategy: Union[PaymentStrategy, str] = PaymentStrategy.MINIMUM,
) -> CreditCardResult:
    """Compare payoff time and interest across the three strategies.

    ``months_to_payoff`` and ``total_interest`` describe the selected
    ``strategy``; the full breakdown is in ``strategies``.
    """
    balance_dec = require_positive(balance, "balance")
    monthly_rate = percent_to_rate(require_positive(annual_rate_percent, "annual_rate_percent"), 12)
    min_payment = require_non_negative(minimum_payment, "minimum_payment")
    fixed = require_non_negative(fixed_payment, "fixed_payment")
    selected = parse_strategy(strategy)

    if min_payment == 0:
        min_payment = balance_dec * DEFAULT_MINIMUM_PAYMENT_SHARE

    minimum_outcome = simulate_payoff(balance_dec, monthly_rate, min_payment)
    strategies = {
        PaymentStrategy.MINIMUM: minimum_outcome,
        PaymentStrategy.FIXED: (
            simulate_payoff(balance_dec, monthly_rate, fixed) if fixed > 0 else minimum_outcome
        ),
        PaymentStrategy.AGGRESSIVE: simulate_payoff(
            balance_dec, monthly_rate, balance_dec * AGGRESSIVE_PAYMENT_SHARE
        ),
    }
    chosen = strategies[selected]
    if not chosen.pays_off:
        logger.warning("Strategy %s never pays off a balance of %s", selected.value, balance_dec)

    return CreditCardResult(
        strategy=selected,
        months_to_payoff=chosen.months,
        total_interest=chosen.interest,
        strategies=strategies,
    )
