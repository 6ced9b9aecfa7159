"""Name-based dispatch to the calculators.

Outer layers (the web API, scripted callers) hold raw user input as a mapping
of strings. The registry knows which inputs each calculator takes, parses
them the lenient form way and calls the engine. Required numeric inputs that
are missing parse as 0 and are then rejected by the engine's own validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Tuple

from .compare import compare_loans
from .credit_card import compute_credit_card_payoff
from .dividend import compute_dividend_projection
from .eligibility import compute_eligibility
from .engine import compute_loan
from .errors import CalculatorValidationError
from .growth import compute_compound_interest, compute_fixed_deposit, compute_lump_sum
from .ppf import compute_ppf
from .real_estate import compute_rental_property
from .recurring import compute_savings, compute_sip
from .retirement import compute_retirement
from .roi import compute_roi
from .utils import parse_numeric_input

NUMBER = "number"
TEXT = "text"
FLAG = "flag"
ITEMS = "items"


@dataclass(frozen=True)
class Field:
    name: str
    kind: str = NUMBER
    required: bool = True


@dataclass(frozen=True)
class Calculator:
    name: str
    func: Callable[..., Any]
    fields: Tuple[Field, ...]
    description: str = ""
    accepts_schedule_limit: bool = False

    def parse(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """Turn raw input into keyword arguments for ``func``."""
        kwargs: Dict[str, Any] = {}
        for field in self.fields:
            value = raw.get(field.name)
            blank = value is None or (isinstance(value, str) and not value.strip())
            if blank and not field.required:
                continue
            if field.kind == NUMBER:
                kwargs[field.name] = parse_numeric_input(value)
            elif field.kind == FLAG:
                kwargs[field.name] = _truthy(value)
            elif field.kind == ITEMS:
                if not isinstance(value, (list, tuple)):
                    raise CalculatorValidationError(f"{field.name} must be a list", field.name)
                kwargs[field.name] = list(value)
            else:
                kwargs[field.name] = str(value).strip().lower() if value is not None else ""
        return kwargs

    def run(self, raw: Mapping[str, Any], **options: Any) -> Any:
        """Parse ``raw`` and call the engine; ``options`` are passed through as is."""
        return self.func(**self.parse(raw), **options)


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _optional(name: str, kind: str = NUMBER) -> Field:
    return Field(name, kind, required=False)


CALCULATORS: Dict[str, Calculator] = {
    calc.name: calc
    for calc in (
        Calculator(
            "loan",
            compute_loan,
            (
                Field("principal"),
                Field("annual_rate_percent"),
                Field("years"),
                _optional("prepayment"),
                _optional("prepayment_month"),
                _optional("include_schedule", FLAG),
            ),
            "Loan EMI, totals and amortization schedule",
            accepts_schedule_limit=True,
        ),
        Calculator(
            "fd",
            compute_fixed_deposit,
            (
                Field("principal"),
                Field("annual_rate_percent"),
                Field("years"),
                _optional("frequency", TEXT),
                _optional("tax_rate_percent"),
            ),
            "Fixed deposit maturity with tax on interest",
        ),
        Calculator(
            "compound-interest",
            compute_compound_interest,
            (
                Field("principal"),
                Field("annual_rate_percent"),
                Field("years"),
                _optional("frequency", TEXT),
                _optional("monthly_contribution"),
            ),
            "Compound interest with optional monthly contribution",
        ),
        Calculator(
            "lump-sum",
            compute_lump_sum,
            (
                Field("principal"),
                Field("annual_rate_percent"),
                Field("years"),
                _optional("frequency", TEXT),
            ),
            "One-time investment growth",
        ),
        Calculator(
            "sip",
            compute_sip,
            (
                Field("monthly_amount"),
                Field("annual_rate_percent"),
                Field("years"),
                _optional("step_up_percent"),
            ),
            "Systematic investment plan with optional annual step-up",
        ),
        Calculator(
            "savings",
            compute_savings,
            (
                Field("mode", TEXT),
                Field("annual_rate_percent"),
                _optional("monthly_deposit"),
                _optional("years"),
                _optional("target_amount"),
                _optional("inflation_percent"),
            ),
            "Savings goal planning",
        ),
        Calculator(
            "ppf",
            compute_ppf,
            (
                Field("annual_deposit"),
                Field("current_age"),
                _optional("tax_slab_percent"),
            ),
            "Public Provident Fund maturity and tax savings",
        ),
        Calculator(
            "credit-card",
            compute_credit_card_payoff,
            (
                Field("balance"),
                Field("annual_rate_percent"),
                _optional("minimum_payment"),
                _optional("fixed_payment"),
                _optional("strategy", TEXT),
            ),
            "Credit card payoff time by payment strategy",
        ),
        Calculator(
            "eligibility",
            compute_eligibility,
            (
                Field("monthly_income"),
                _optional("existing_emi"),
                Field("annual_rate_percent"),
                Field("tenure_years"),
                _optional("loan_type", TEXT),
            ),
            "Loan eligibility from income (FOIR)",
        ),
        Calculator(
            "roi",
            compute_roi,
            (
                Field("initial_investment"),
                Field("final_value"),
                _optional("years"),
                _optional("additional_costs"),
            ),
            "Return on investment and CAGR",
        ),
        Calculator(
            "compare",
            compare_loans,
            (
                Field("principal"),
                Field("tenure_years"),
                Field("offers", ITEMS),
            ),
            "Compare loan offers by total cost",
        ),
        Calculator(
            "retirement",
            compute_retirement,
            (
                Field("current_age"),
                Field("retirement_age"),
                Field("annual_return_percent"),
                _optional("current_savings"),
                _optional("monthly_contribution"),
                _optional("target_annual_income"),
                _optional("inflation_percent"),
            ),
            "Retirement corpus and income against an inflation-adjusted goal",
        ),
        Calculator(
            "dividend",
            compute_dividend_projection,
            (
                Field("initial_investment"),
                Field("dividend_yield_percent"),
                Field("years"),
                _optional("annual_growth_percent"),
                _optional("monthly_contribution"),
                _optional("reinvest_dividends", FLAG),
            ),
            "Dividend income projection with optional reinvestment",
        ),
        Calculator(
            "real-estate",
            compute_rental_property,
            (
                Field("purchase_price"),
                Field("down_payment"),
                Field("monthly_rent"),
                _optional("monthly_expenses"),
                _optional("annual_property_tax"),
                _optional("annual_insurance"),
                _optional("maintenance_percent"),
                _optional("vacancy_percent"),
                _optional("appreciation_percent"),
                _optional("holding_years"),
            ),
            "Rental property cash flow, cap rate and total return",
        ),
    )
}


def get_calculator(name: str) -> Calculator:
    try:
        return CALCULATORS[name]
    except KeyError:
        raise KeyError(f"Unknown calculator: {name}") from None


def list_calculators() -> List[Dict[str, str]]:
    return [{"name": c.name, "description": c.description} for c in CALCULATORS.values()]


def serialize(result: Any) -> Any:
    """JSON-friendly form of an engine result (a record or a list of records)."""
    if isinstance(result, list):
        return [serialize(item) for item in result]
    return result.to_dict()
