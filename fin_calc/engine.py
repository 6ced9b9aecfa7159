"""Loan EMI and amortization engine.

This module implements the equal-installment (annuity) loan: the monthly EMI,
the total interest over the term, a month-by-month amortization schedule and
the interest saved by a one-off prepayment. Schedules are produced lazily by
``generate_amortization`` and collected by ``compute_loan`` when needed.
"""

from __future__ import annotations

import logging
from decimal import ROUND_CEILING, Decimal
from itertools import islice
from typing import Iterator, Optional

from .config import BALANCE_EPSILON
from .data_models import AmortizationEntry, LoanResult
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


def calculate_annuity_payment(principal: Decimal, rate_per_month: Decimal, term: Decimal) -> Decimal:
    """Return the annuity (equal installment) monthly payment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``.
    """
    if term <= 0:
        raise ValueError("Term must be positive")
    if rate_per_month == 0:
        return principal / Decimal(term)
    factor = (1 + rate_per_month) ** term
    return principal * (rate_per_month * factor) / (factor - 1)


def generate_amortization(
    principal: Decimal,
    rate_per_month: Decimal,
    months: Decimal,
    payment: Decimal,
    prepayment: Decimal = Decimal("0"),
    prepayment_month: int = 0,
) -> Iterator[AmortizationEntry]:
    """Yield schedule entries month by month until the loan is repaid.

    The prepayment, if any, is added to the principal portion of month
    ``prepayment_month``. The schedule ends early once the balance reaches
    zero, and the final payment is trimmed so the balance never goes negative.
    """
    balance = principal
    period = 1
    while period <= months:
        interest = balance * rate_per_month
        principal_portion = payment - interest
        total_payment = payment
        if period == prepayment_month and prepayment > 0:
            principal_portion += prepayment
            total_payment += prepayment

        balance -= principal_portion
        # Treat anything less than half a paisa as repaid to avoid phantom periods
        if balance.copy_abs() < BALANCE_EPSILON:
            balance = Decimal("0")
        if balance < 0:
            adjustment = -balance
            principal_portion -= adjustment
            total_payment -= adjustment
            balance = Decimal("0")

        yield AmortizationEntry(
            period=period,
            payment=total_payment,
            principal_portion=principal_portion,
            interest_portion=interest,
            remaining_balance=balance,
        )
        if balance == 0:
            return
        period += 1


def compute_loan(
    principal: Number,
    annual_rate_percent: Number,
    years: Number,
    prepayment: Optional[Number] = None,
    prepayment_month: Optional[Number] = None,
    include_schedule: bool = False,
    schedule_limit: Optional[int] = None,
) -> LoanResult:
    """Compute the EMI, totals and optional schedule for a loan.

    Parameters
    ----------
    principal: Number
        Amount borrowed.
    annual_rate_percent: Number
        Nominal annual rate in percent (``8.5`` for 8.5 %).
    years: Number
        Loan tenure in years. The number of payments is ``years * 12``
        rounded up to a whole month.
    prepayment, prepayment_month:
        Optional one-off extra payment and the month (1-based) it is made in.
    include_schedule: bool
        Whether to return the amortization schedule.
    schedule_limit: Optional[int]
        Keep at most this many schedule rows; the rest are only counted in
        ``schedule_truncated``.

    Returns
    -------
    LoanResult
        Monthly payment, total interest and total amount rounded to whole
        currency units. ``prepayment_savings`` is the interest saved compared
        with running the loan to term.
    """
    principal_dec = require_positive(principal, "principal")
    rate_percent = require_positive(annual_rate_percent, "annual_rate_percent")
    years_dec = require_positive(years, "years")
    prepayment_dec = require_non_negative(prepayment, "prepayment")
    prepay_month = int(require_non_negative(prepayment_month, "prepayment_month"))
    if schedule_limit is not None and schedule_limit < 0:
        raise CalculatorValidationError("Schedule limit cannot be negative", "schedule_limit")

    rate_per_month = percent_to_rate(rate_percent, 12)
    months = (years_dec * 12).to_integral_value(rounding=ROUND_CEILING)
    with guard_overflow("years"):
        monthly_payment = calculate_annuity_payment(principal_dec, rate_per_month, months)
        total_amount = monthly_payment * months
        total_interest = total_amount - principal_dec
    logger.debug(
        "Loan of %s at %s%% over %s months: EMI %s", principal_dec, rate_percent, months, monthly_payment
    )

    schedule = None
    truncated = 0
    prepayment_savings = None
    entries = generate_amortization(
        principal_dec, rate_per_month, months, monthly_payment, prepayment_dec, prepay_month
    )
    if prepayment_dec > 0:
        # interest is summed over every row, kept or not
        kept = []
        interest_paid = Decimal("0")
        for entry in entries:
            interest_paid += entry.interest_portion
            if not include_schedule:
                continue
            if schedule_limit is None or len(kept) < schedule_limit:
                kept.append(entry)
            else:
                truncated += 1
        prepayment_savings = round_currency(total_interest - interest_paid)
        if include_schedule:
            schedule = tuple(kept)
    elif include_schedule:
        schedule = tuple(islice(entries, schedule_limit))
        if schedule_limit is not None and len(schedule) == schedule_limit:
            truncated = int(months) - len(schedule)

    return LoanResult(
        monthly_payment=round_currency(monthly_payment),
        total_interest=round_currency(total_interest),
        total_amount=round_currency(total_amount),
        schedule=schedule,
        prepayment_savings=prepayment_savings,
        schedule_truncated=truncated if include_schedule else 0,
    )
