"""Command‑line interface for the financial calculators.

This module uses the ``click`` library to implement a multi‑command
interface, one command per calculator. Results are printed as text tables or
exported to JSON with ``--output``.

    fin-calc sip --amount 5000 --rate 12 --years 10
    fin-calc credit-card --balance 50k --rate 36 --minimum 1000
    fin-calc compare -p 20L --tenure 20 --offer "SBI:8.5:10000" --offer "HDFC:8.7"
    fin-calc retirement --age 30 --retire-at 60 --return 7 --contribution 10k
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import click

from .compare import compare_loans
from .credit_card import compute_credit_card_payoff
from .data_models import CompoundFrequency, LoanOffer, LoanType, PaymentStrategy, SavingsMode
from .dividend import compute_dividend_projection
from .eligibility import compute_eligibility
from .engine import compute_loan
from .errors import CalculatorValidationError
from .formatter import (
    print_comparison,
    print_credit_card,
    print_dividend,
    print_eligibility,
    print_growth,
    print_loan,
    print_ppf,
    print_rental_property,
    print_retirement,
    print_roi,
    print_savings,
    print_schedule,
    print_sip,
)
from .growth import compute_compound_interest, compute_fixed_deposit, compute_lump_sum
from .ppf import compute_ppf
from .real_estate import compute_rental_property
from .recurring import compute_savings, compute_sip
from .registry import serialize
from .retirement import compute_retirement
from .roi import compute_roi
from .utils import decimal_from_str

logger = logging.getLogger(__name__)

_SUFFIXES = (
    ("cr", Decimal("10000000")),
    ("lakh", Decimal("100000")),
    ("l", Decimal("100000")),
    ("m", Decimal("1000000")),
    ("k", Decimal("1000")),
)


def parse_amount(value: str) -> Decimal:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("500000", "5,00,000") and shorthand with ``k``,
    ``m``, ``l``/``lakh`` and ``cr`` suffixes (e.g. "20L" meaning 20,00,000).
    """
    value = value.strip().lower().replace(",", "")
    factor = Decimal("1")
    for suffix, multiplier in _SUFFIXES:
        if value.endswith(suffix):
            factor = multiplier
            value = value[: -len(suffix)].strip()
            break
    try:
        return decimal_from_str(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def parse_percent(value: str) -> Decimal:
    """Parse a percentage string ("7.1" or "7.1%") into the percent value."""
    value = value.strip()
    if value.endswith("%"):
        value = value[:-1]
    try:
        return decimal_from_str(value)
    except ValueError:
        raise click.BadParameter(f"Invalid percentage: {value}")


def _amount(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[Decimal]:
    return parse_amount(value) if value is not None else None


def _percent(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[Decimal]:
    return parse_percent(value) if value is not None else None


def parse_offer_strings(values: Tuple[str, ...]) -> List[LoanOffer]:
    offers: List[LoanOffer] = []
    for item in values:
        parts = item.split(":")
        if len(parts) not in (2, 3):
            raise click.BadParameter(f"Offer must be in NAME:RATE[:FEE] format; got {item}")
        name, rate_str = parts[0].strip(), parts[1]
        fee = parse_amount(parts[2]) if len(parts) == 3 else Decimal("0")
        offers.append(LoanOffer(name=name, annual_rate_percent=parse_percent(rate_str), processing_fee=fee))
    return offers


def _calculate(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call an engine, turning validation failures into click errors."""
    try:
        return func(*args, **kwargs)
    except CalculatorValidationError as exc:
        hint = f"'{exc.field}'" if exc.field else None
        raise click.BadParameter(str(exc), param_hint=hint)


def _emit(result: Any, output: Optional[str], printer: Callable[[Any], None]) -> None:
    if not output:
        printer(result)
        return
    path = Path(output)
    if path.suffix.lower() != ".json":
        raise click.BadParameter("Result export must use .json extension", param_hint="'--output'")
    with path.open("w", encoding="utf-8") as f:
        json.dump({"result": serialize(result)}, f, indent=2)
    click.echo(f"Result exported to {path}")


_rate_option = click.option(
    "--rate", "-r", "rate", required=True, callback=_percent, help="Annual interest rate (percent)"
)
_output_option = click.option("--output", "output", type=str, help="Output file path (.json)")


def _frequency_option(default: CompoundFrequency) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    return click.option(
        "--frequency",
        "frequency",
        type=click.Choice([f.value for f in CompoundFrequency]),
        default=default.value,
        show_default=True,
        help="Compounding frequency",
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details")
def cli(verbose: bool) -> None:
    """Financial calculators: loans, deposits, SIP, PPF, credit cards and more."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.option("--principal", "-p", "principal", required=True, callback=_amount, help="Loan amount")
@_rate_option
@click.option("--years", "-y", "years", required=True, callback=_amount, help="Loan tenure in years")
@click.option("--prepayment", "prepayment", callback=_amount, help="One-off prepayment amount")
@click.option("--prepayment-month", "prepayment_month", type=int, help="Month (1-based) of the prepayment")
@click.option("--schedule", "show_schedule", is_flag=True, help="Print the amortization schedule")
@click.option(
    "--rows", "rows", type=click.IntRange(min=0), default=12, show_default=True, help="Schedule rows to print"
)
@_output_option
def loan(
    principal: Decimal,
    rate: Decimal,
    years: Decimal,
    prepayment: Optional[Decimal],
    prepayment_month: Optional[int],
    show_schedule: bool,
    rows: int,
    output: Optional[str],
) -> None:
    """Compute the EMI, total interest and optional schedule for a loan."""
    result = _calculate(
        compute_loan,
        principal,
        rate,
        years,
        prepayment,
        prepayment_month,
        include_schedule=show_schedule,
        schedule_limit=None if output else rows,
    )

    def printer(res):
        print_loan(res)
        if show_schedule:
            print_schedule(res.schedule, omitted=res.schedule_truncated)

    _emit(result, output, printer)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, callback=_amount, help="Deposit amount")
@_rate_option
@click.option("--years", "-y", "years", required=True, callback=_amount, help="Tenure in years")
@_frequency_option(CompoundFrequency.QUARTERLY)
@click.option("--tax-rate", "tax_rate", callback=_percent, help="Tax rate on interest (percent)")
@_output_option
def fd(principal, rate, years, frequency, tax_rate, output) -> None:
    """Fixed deposit maturity, with tax on interest above the threshold."""
    result = _calculate(compute_fixed_deposit, principal, rate, years, frequency, tax_rate)
    _emit(result, output, lambda res: print_growth(res, "Fixed deposit"))


@cli.command()
@click.option("--principal", "-p", "principal", required=True, callback=_amount, help="Initial amount")
@_rate_option
@click.option("--years", "-y", "years", required=True, callback=_amount, help="Time in years")
@_frequency_option(CompoundFrequency.MONTHLY)
@click.option("--contribution", "contribution", callback=_amount, help="Monthly contribution")
@_output_option
def compound(principal, rate, years, frequency, contribution, output) -> None:
    """Compound interest with an optional monthly contribution."""
    result = _calculate(compute_compound_interest, principal, rate, years, frequency, contribution)
    _emit(result, output, lambda res: print_growth(res, "Compound interest"))


@cli.command()
@click.option("--principal", "-p", "principal", required=True, callback=_amount, help="Amount invested")
@_rate_option
@click.option("--years", "-y", "years", required=True, callback=_amount, help="Time in years")
@_frequency_option(CompoundFrequency.YEARLY)
@_output_option
def lumpsum(principal, rate, years, frequency, output) -> None:
    """Growth of a one-time investment."""
    result = _calculate(compute_lump_sum, principal, rate, years, frequency)
    _emit(result, output, lambda res: print_growth(res, "Lump sum"))


@cli.command()
@click.option("--amount", "-a", "amount", required=True, callback=_amount, help="Monthly SIP amount")
@_rate_option
@click.option("--years", "-y", "years", required=True, callback=_amount, help="Investment period in years")
@click.option("--step-up", "step_up", callback=_percent, help="Yearly increase of the SIP (percent)")
@_output_option
def sip(amount, rate, years, step_up, output) -> None:
    """Systematic investment plan maturity."""
    result = _calculate(compute_sip, amount, rate, years, step_up)
    _emit(result, output, print_sip)


@cli.command()
@click.option(
    "--mode",
    "mode",
    type=click.Choice([m.value for m in SavingsMode]),
    default=SavingsMode.FUTURE_VALUE.value,
    show_default=True,
)
@_rate_option
@click.option("--deposit", "deposit", callback=_amount, help="Monthly deposit")
@click.option("--years", "-y", "years", callback=_amount, help="Time in years")
@click.option("--target", "target", callback=_amount, help="Target amount")
@click.option("--inflation", "inflation", callback=_percent, help="Expected inflation (percent)")
@_output_option
def savings(mode, rate, deposit, years, target, inflation, output) -> None:
    """Plan monthly savings: future value, deposit for a goal, or time to a goal."""
    result = _calculate(compute_savings, mode, rate, deposit, years, target, inflation)
    _emit(result, output, print_savings)


@cli.command()
@click.option("--deposit", "deposit", required=True, callback=_amount, help="Yearly deposit")
@click.option("--age", "age", required=True, callback=_amount, help="Current age")
@click.option("--tax-slab", "tax_slab", callback=_percent, help="Income tax slab (percent)")
@_output_option
def ppf(deposit, age, tax_slab, output) -> None:
    """Public Provident Fund maturity over the 15-year tenure."""
    result = _calculate(compute_ppf, deposit, age, tax_slab)
    _emit(result, output, print_ppf)


@cli.command("credit-card")
@click.option("--balance", "-b", "balance", required=True, callback=_amount, help="Outstanding balance")
@_rate_option
@click.option("--minimum", "minimum", callback=_amount, help="Minimum payment (default 3% of balance)")
@click.option("--fixed", "fixed", callback=_amount, help="Fixed monthly payment")
@click.option(
    "--strategy",
    "strategy",
    type=click.Choice([s.value for s in PaymentStrategy]),
    default=PaymentStrategy.MINIMUM.value,
    show_default=True,
)
@_output_option
def credit_card(balance, rate, minimum, fixed, strategy, output) -> None:
    """How long a card balance takes to clear under each payment strategy."""
    result = _calculate(compute_credit_card_payoff, balance, rate, minimum, fixed, strategy)
    _emit(result, output, print_credit_card)


@cli.command()
@click.option("--income", "income", required=True, callback=_amount, help="Monthly income")
@click.option("--existing-emi", "existing_emi", callback=_amount, help="Current EMIs per month")
@_rate_option
@click.option("--tenure", "-t", "tenure", required=True, callback=_amount, help="Tenure in years")
@click.option(
    "--loan-type",
    "loan_type",
    type=click.Choice([t.value for t in LoanType]),
    default=LoanType.HOME.value,
    show_default=True,
)
@_output_option
def eligibility(income, existing_emi, rate, tenure, loan_type, output) -> None:
    """Maximum loan an income supports under the FOIR limit."""
    result = _calculate(compute_eligibility, income, existing_emi, rate, tenure, loan_type)
    _emit(result, output, print_eligibility)


@cli.command()
@click.option("--initial", "initial", required=True, callback=_amount, help="Initial investment")
@click.option("--final", "final", required=True, callback=_amount, help="Final value")
@click.option("--years", "-y", "years", callback=_amount, help="Holding period in years")
@click.option("--costs", "costs", callback=_amount, help="Additional costs")
@_output_option
def roi(initial, final, years, costs, output) -> None:
    """Total return and CAGR of an investment."""
    result = _calculate(compute_roi, initial, final, years, costs)
    _emit(result, output, print_roi)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, callback=_amount, help="Loan amount")
@click.option("--tenure", "-t", "tenure", required=True, callback=_amount, help="Tenure in years")
@click.option("--offer", "offer", multiple=True, required=True, help="Offer in NAME:RATE[:FEE] format")
@_output_option
def compare(principal, tenure, offer, output) -> None:
    """Compare loan offers for the same amount and tenure.

    Offers are given as NAME:RATE[:FEE], for example:

        fin-calc compare -p 20L -t 20 --offer "SBI:8.5:10000" --offer "HDFC:8.7"
    """
    offers = parse_offer_strings(offer)
    result = _calculate(compare_loans, principal, tenure, offers)
    _emit(result, output, print_comparison)


@cli.command()
@click.option("--age", "age", required=True, callback=_amount, help="Current age")
@click.option("--retire-at", "retire_at", required=True, callback=_amount, help="Retirement age")
@click.option("--return", "annual_return", required=True, callback=_percent, help="Expected return (percent)")
@click.option("--savings", "current_savings", callback=_amount, help="Current retirement savings")
@click.option("--contribution", "contribution", callback=_amount, help="Monthly contribution")
@click.option("--target-income", "target_income", callback=_amount, help="Yearly income wanted, in today's money")
@click.option("--inflation", "inflation", callback=_percent, help="Expected inflation (percent, default 3)")
@_output_option
def retirement(
    age, retire_at, annual_return, current_savings, contribution, target_income, inflation, output
) -> None:
    """Retirement savings and the income they support under the 4% rule."""
    result = _calculate(
        compute_retirement, age, retire_at, annual_return, current_savings, contribution, target_income, inflation
    )
    _emit(result, output, print_retirement)


@cli.command()
@click.option("--initial", "initial", required=True, callback=_amount, help="Initial investment")
@click.option("--yield", "dividend_yield", required=True, callback=_percent, help="Dividend yield (percent)")
@click.option("--years", "-y", "years", required=True, callback=_amount, help="Years to project")
@click.option("--growth", "growth", callback=_percent, help="Yearly growth of price and dividend (percent)")
@click.option("--contribution", "contribution", callback=_amount, help="Monthly contribution")
@click.option("--reinvest/--no-reinvest", "reinvest", default=True, show_default=True, help="Reinvest dividends")
@_output_option
def dividend(initial, dividend_yield, years, growth, contribution, reinvest, output) -> None:
    """Dividend income from a portfolio, year by year."""
    result = _calculate(
        compute_dividend_projection, initial, dividend_yield, years, growth, contribution, reinvest
    )
    _emit(result, output, print_dividend)


@cli.command("real-estate")
@click.option("--price", "price", required=True, callback=_amount, help="Purchase price")
@click.option("--down-payment", "down_payment", required=True, callback=_amount, help="Cash invested")
@click.option("--rent", "rent", required=True, callback=_amount, help="Monthly rent")
@click.option("--expenses", "expenses", callback=_amount, help="Other monthly expenses")
@click.option("--property-tax", "property_tax", callback=_amount, help="Yearly property tax")
@click.option("--insurance", "insurance", callback=_amount, help="Yearly insurance")
@click.option("--maintenance", "maintenance", callback=_percent, help="Yearly maintenance, percent of price")
@click.option("--vacancy", "vacancy", callback=_percent, help="Vacancy rate (percent)")
@click.option("--appreciation", "appreciation", callback=_percent, help="Yearly appreciation (percent)")
@click.option("--years", "-y", "years", callback=_amount, help="Holding period in years (default 10)")
@_output_option
def real_estate(
    price, down_payment, rent, expenses, property_tax, insurance, maintenance, vacancy, appreciation, years, output
) -> None:
    """Cash flow, cap rate and total return of a rental property."""
    result = _calculate(
        compute_rental_property,
        price,
        down_payment,
        rent,
        expenses,
        property_tax,
        insurance,
        maintenance,
        vacancy,
        appreciation,
        years,
    )
    _emit(result, output, print_rental_property)


if __name__ == "__main__":
    cli()
