"""Output helpers for the calculators.

This module formats engine results for people: amounts in rupees with Indian
digit grouping (``₹11,61,695``), percentages, and payoff periods where an
unbounded result reads as "Never". The ``print_*`` functions render each
result as a simple text table. We rely only on built-in printing and string
formatting.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from .data_models import (
    AmortizationEntry,
    CreditCardResult,
    DividendResult,
    EligibilityResult,
    GrowthResult,
    LoanComparison,
    LoanResult,
    PayoffOutcome,
    PPFResult,
    RentalPropertyResult,
    RetirementResult,
    ROIResult,
    SavingsResult,
    SIPResult,
)
from .utils import round_to_decimal_places

RULE = "-" * 72
NEVER = "Never"


def _group_indian(digits: str) -> str:
    """Group an integer digit string as lakhs and crores: 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_number(value: Decimal, max_fraction_digits: int = 3) -> str:
    """Format a number with Indian grouping and at most ``max_fraction_digits`` decimals."""
    if not value.is_finite():
        return "∞" if value > 0 else "-∞"
    rounded = round_to_decimal_places(value, max_fraction_digits)
    sign = "-" if rounded < 0 else ""
    text = f"{abs(rounded):f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0")
    grouped = _group_indian(whole)
    return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


def format_currency(amount: Decimal) -> str:
    """Format an amount in whole rupees, e.g. ``₹1,41,478``."""
    if not amount.is_finite():
        return NEVER
    rounded = round_to_decimal_places(amount, 0)
    sign = "-" if rounded < 0 else ""
    return f"{sign}₹{_group_indian(str(abs(int(rounded))))}"


def format_percent(value: Decimal, places: int = 2) -> str:
    return f"{round_to_decimal_places(value, places):.{places}f}%"


def format_months(months: Decimal) -> str:
    """Render a payoff period as years and months, or "Never" if unbounded."""
    if not months.is_finite():
        return NEVER
    total = int(months)
    years, rest = divmod(total, 12)
    if not years:
        return f"{total} months"
    return f"{total} months ({years} years {rest} months)"


def format_payoff(outcome: PayoffOutcome) -> str:
    if not outcome.pays_off:
        return "This payment will never pay off the balance"
    return f"{format_months(outcome.months)}, interest {format_currency(outcome.interest)}"


def _print_rows(title: str, rows: Sequence[Tuple[str, str]]) -> None:
    print(title)
    print(RULE)
    for label, value in rows:
        print(f"{label:24s}: {value}")
    print(RULE)


def print_loan(result: LoanResult) -> None:
    rows = [
        ("Monthly EMI", format_currency(result.monthly_payment)),
        ("Total interest", format_currency(result.total_interest)),
        ("Total amount", format_currency(result.total_amount)),
    ]
    if result.prepayment_savings is not None:
        rows.append(("Prepayment savings", format_currency(result.prepayment_savings)))
    _print_rows("Loan summary", rows)


def print_schedule(
    schedule: Iterable[AmortizationEntry], max_rows: Optional[int] = None, omitted: int = 0
) -> None:
    """Print the amortization schedule as a simple table.

    Parameters
    ----------
    schedule: Iterable[AmortizationEntry]
        The schedule entries to print.
    max_rows: Optional[int]
        Stop after this many rows and note how many were left out.
    omitted: int
        Rows the engine already left out of ``schedule``; they are added to
        the count in the closing note.
    """
    entries: List[AmortizationEntry] = list(schedule)
    shown = entries if max_rows is None else entries[:max_rows]
    print("\t".join(["Month", "Payment", "Principal", "Interest", "Balance"]))
    for entry in shown:
        print(
            "\t".join(
                [
                    str(entry.period),
                    f"{entry.payment:.2f}",
                    f"{entry.principal_portion:.2f}",
                    f"{entry.interest_portion:.2f}",
                    f"{entry.remaining_balance:.2f}",
                ]
            )
        )
    remaining = len(entries) - len(shown) + omitted
    if remaining:
        print(f"... {remaining} more rows")


def print_growth(result: GrowthResult, title: str = "Growth summary") -> None:
    rows = [
        ("Maturity amount", format_currency(result.maturity_amount)),
        ("Total contributions", format_currency(result.total_contributions)),
        ("Interest earned", format_currency(result.interest_earned)),
    ]
    if result.post_tax_returns is not None:
        rows.append(("Taxable interest", format_currency(result.taxable_interest)))
        rows.append(("Tax", format_currency(result.tax_amount)))
        rows.append(("Post-tax returns", format_currency(result.post_tax_returns)))
    rows.append(("Effective annual rate", format_percent(result.effective_annual_rate_percent)))
    _print_rows(title, rows)


def print_sip(result: SIPResult) -> None:
    rows = [
        ("Maturity amount", format_currency(result.maturity_amount)),
        ("Total investment", format_currency(result.total_investment)),
        ("Wealth gained", format_currency(result.wealth_gained)),
    ]
    if result.step_up_benefit is not None:
        rows.append(("Step-up benefit", format_currency(result.step_up_benefit)))
    _print_rows("SIP summary", rows)


def print_savings(result: SavingsResult) -> None:
    rows = [
        ("Future value", format_currency(result.future_value)),
        ("Total deposits", format_currency(result.total_deposits)),
        ("Total interest", format_currency(result.total_interest)),
    ]
    if result.real_value is not None:
        rows.append(("Value in today's money", format_currency(result.real_value)))
    if result.monthly_required_for_goal is not None:
        rows.append(("Monthly deposit needed", format_currency(result.monthly_required_for_goal)))
    if result.years_to_reach_goal is not None:
        rows.append(("Years to reach goal", format_number(result.years_to_reach_goal, 1)))
    _print_rows(f"Savings summary ({result.mode.value})", rows)


def print_ppf(result: PPFResult) -> None:
    _print_rows(
        "PPF summary",
        [
            ("Maturity amount", format_currency(result.maturity_amount)),
            ("Total investment", format_currency(result.total_investment)),
            ("Total interest", format_currency(result.total_interest)),
            ("Tax savings", format_currency(result.tax_savings)),
        ],
    )


def print_credit_card(result: CreditCardResult) -> None:
    rows = [
        ("Strategy", result.strategy.value),
        ("Time to pay off", format_months(result.months_to_payoff)),
        ("Total interest", format_currency(result.total_interest)),
    ]
    for strategy, outcome in result.strategies.items():
        rows.append((f"  {strategy.value}", format_payoff(outcome)))
    _print_rows("Credit card payoff", rows)


def print_eligibility(result: EligibilityResult) -> None:
    rows = [
        ("FOIR limit", format_percent(result.foir_percent, 0)),
        ("Maximum EMI", format_currency(result.max_emi)),
        ("Maximum loan", format_currency(result.max_loan_amount)),
        ("Recommended loan", format_currency(result.recommended_loan_amount)),
    ]
    if result.obligations_exceed_limit:
        rows.append(("Note", "existing EMIs already exceed the FOIR limit"))
    _print_rows("Loan eligibility", rows)


def print_roi(result: ROIResult) -> None:
    _print_rows(
        "Return on investment",
        [
            ("Total investment", format_currency(result.total_investment)),
            ("Total gain", format_currency(result.total_gain)),
            ("Total ROI", format_percent(result.total_roi_percent)),
            ("Annualized ROI (CAGR)", format_percent(result.annualized_roi_percent)),
        ],
    )


def print_comparison(comparisons: Sequence[LoanComparison]) -> None:
    """Print loan offers cheapest first, with the extra cost over the best one."""
    print("Comparison")
    print("=" * 72)
    print(f"{'Lender':16s} {'Rate':>7s} {'EMI':>12s} {'Total':>15s} {'Extra cost':>15s}")
    best = comparisons[0].total_amount if comparisons else Decimal("0")
    for c in comparisons:
        print(
            f"{c.name[:16]:16s} {format_percent(c.annual_rate_percent):>7s} "
            f"{format_currency(c.emi):>12s} {format_currency(c.total_amount):>15s} "
            f"{format_currency(c.total_amount - best):>15s}"
        )
    print("=" * 72)


def print_retirement(result: RetirementResult) -> None:
    rows = [
        ("Years to retirement", format_number(result.years_to_retirement, 1)),
        ("Retirement savings", format_currency(result.total_savings)),
        ("Total contributions", format_currency(result.total_contributions)),
        ("Investment growth", format_currency(result.investment_growth)),
        ("Monthly income (4% rule)", format_currency(result.monthly_income)),
    ]
    if result.inflation_adjusted_target > 0:
        rows.append(("Target income, inflated", format_currency(result.inflation_adjusted_target)))
        rows.append(("Goal", "on track" if result.goal_met else "short of target"))
    _print_rows("Retirement plan", rows)


def print_dividend(result: DividendResult) -> None:
    _print_rows(
        "Dividend projection",
        [
            ("Portfolio value", format_currency(result.final_portfolio_value)),
            ("Annual dividends", format_currency(result.final_annual_dividends)),
            ("Monthly dividend income", format_currency(result.monthly_dividend_income)),
            ("Dividends received", format_currency(result.total_dividends_received)),
            ("Total contributions", format_currency(result.total_contributions)),
            ("Capital growth", format_currency(result.capital_growth)),
            ("Yield on cost", format_percent(result.yield_on_cost_percent)),
        ],
    )


def print_rental_property(result: RentalPropertyResult) -> None:
    _print_rows(
        "Rental property",
        [
            ("Monthly cash flow", format_currency(result.monthly_cash_flow)),
            ("Annual cash flow", format_currency(result.annual_cash_flow)),
            ("Cap rate", format_percent(result.cap_rate_percent)),
            ("Cash-on-cash return", format_percent(result.cash_on_cash_percent)),
            ("Future value", format_currency(result.future_value)),
            ("Total appreciation", format_currency(result.total_appreciation)),
            ("Total ROI", format_percent(result.total_roi_percent)),
        ],
    )
