"""Data models for the financial calculators.

This module defines the enumerations used to select calculator behaviour and
the immutable dataclasses every engine returns. Results are created fresh on
each call and never modified afterwards, so they can be shared freely between
callers. Each record can be turned into JSON-friendly data with ``to_dict``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class CompoundFrequency(str, Enum):
    """How often interest is compounded in the growth engine."""

    YEARLY = "yearly"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"

    @property
    def periods_per_year(self) -> int:
        return {"yearly": 1, "quarterly": 4, "monthly": 12}[self.value]


class PaymentStrategy(str, Enum):
    """Payment-size policy used by the credit-card payoff simulation."""

    MINIMUM = "minimum"
    FIXED = "fixed"
    AGGRESSIVE = "aggressive"


class LoanType(str, Enum):
    HOME = "home"
    CAR = "car"
    PERSONAL = "personal"


class SavingsMode(str, Enum):
    """What the savings calculator solves for."""

    FUTURE_VALUE = "future-value"
    GOAL_PLANNING = "goal-planning"
    TIME_TO_GOAL = "time-to-goal"


def _json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        # unbounded values and those beyond float range both serialize as None
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _json_value(v) for k, v in value.items()}
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


class _Record:
    """Shared serialization for result dataclasses."""

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: _json_value(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class AmortizationEntry(_Record):
    """One month of an amortizing loan.

    Attributes
    ----------
    period: int
        Month number, starting at 1.
    payment: Decimal
        Total paid this month, including any prepayment.
    principal_portion: Decimal
        Part of the payment that reduced the balance.
    interest_portion: Decimal
        Interest charged on the opening balance.
    remaining_balance: Decimal
        Balance after the payment; never negative.
    """

    period: int
    payment: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class LoanResult(_Record):
    """EMI figures for a loan, rounded to whole currency units.

    ``schedule`` is only present when it was requested;
    ``prepayment_savings`` only when a prepayment was given. When the
    schedule was cut to a row limit, ``schedule_truncated`` counts the rows
    left out.
    """

    monthly_payment: Decimal
    total_interest: Decimal
    total_amount: Decimal
    schedule: Optional[Tuple[AmortizationEntry, ...]] = None
    prepayment_savings: Optional[Decimal] = None
    schedule_truncated: int = 0


@dataclass(frozen=True)
class GrowthResult(_Record):
    """Outcome of a compound-growth calculation (FD, compound interest, lump sum).

    ``post_tax_returns`` is None unless a tax rate was supplied.
    """

    maturity_amount: Decimal
    total_contributions: Decimal
    interest_earned: Decimal
    taxable_interest: Decimal
    tax_amount: Decimal
    effective_annual_rate_percent: Decimal
    post_tax_returns: Optional[Decimal] = None


@dataclass(frozen=True)
class SIPResult(_Record):
    maturity_amount: Decimal
    total_investment: Decimal
    wealth_gained: Decimal
    step_up_benefit: Optional[Decimal] = None


@dataclass(frozen=True)
class SavingsResult(_Record):
    """Savings plan figures. Which optional field is set depends on the mode."""

    mode: SavingsMode
    future_value: Decimal
    total_deposits: Decimal
    total_interest: Decimal
    real_value: Optional[Decimal] = None
    monthly_required_for_goal: Optional[Decimal] = None
    years_to_reach_goal: Optional[Decimal] = None


@dataclass(frozen=True)
class PPFResult(_Record):
    """PPF maturity figures.

    ``current_age`` is carried through from the input; it does not affect
    any of the amounts.
    """

    maturity_amount: Decimal
    total_investment: Decimal
    total_interest: Decimal
    tax_savings: Decimal
    current_age: Decimal


@dataclass(frozen=True)
class PayoffOutcome(_Record):
    """Months and interest needed to clear a card balance at a given payment.

    Both values are ``Decimal("Infinity")`` when the payment never clears the
    balance within the simulation bound.
    """

    months: Decimal
    interest: Decimal

    @classmethod
    def never(cls) -> "PayoffOutcome":
        return cls(months=Decimal("Infinity"), interest=Decimal("Infinity"))

    @property
    def pays_off(self) -> bool:
        return self.months.is_finite()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.pays_off:
            data["months"] = int(self.months)
        data["never_pays_off"] = not self.pays_off
        return data


@dataclass(frozen=True)
class CreditCardResult(_Record):
    strategy: PaymentStrategy
    months_to_payoff: Decimal
    total_interest: Decimal
    strategies: Dict[PaymentStrategy, PayoffOutcome]

    @property
    def selected(self) -> PayoffOutcome:
        return self.strategies[self.strategy]

    def to_dict(self) -> Dict[str, Any]:
        selected = self.selected.to_dict()
        return {
            "strategy": self.strategy.value,
            "months_to_payoff": selected["months"],
            "total_interest": selected["interest"],
            "never_pays_off": selected["never_pays_off"],
            "strategies": {k.value: v.to_dict() for k, v in self.strategies.items()},
        }


@dataclass(frozen=True)
class EligibilityResult(_Record):
    """Loan affordability derived from income.

    ``obligations_exceed_limit`` is True when existing EMIs already use up
    the FOIR ceiling; ``max_emi`` is then reported as zero.
    """

    max_loan_amount: Decimal
    max_emi: Decimal
    recommended_loan_amount: Decimal
    foir_percent: Decimal
    obligations_exceed_limit: bool = False


@dataclass(frozen=True)
class ROIResult(_Record):
    total_roi_percent: Decimal
    annualized_roi_percent: Decimal
    total_gain: Decimal
    total_investment: Decimal


@dataclass(frozen=True)
class LoanOffer(_Record):
    """A lender's terms for the comparison calculator."""

    name: str
    annual_rate_percent: Decimal
    processing_fee: Decimal = Decimal("0")


@dataclass(frozen=True)
class LoanComparison(_Record):
    name: str
    annual_rate_percent: Decimal
    processing_fee: Decimal
    emi: Decimal
    total_interest: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class RetirementResult(_Record):
    """Savings at retirement and the income they support.

    Attributes
    ----------
    total_savings: Decimal
        Current savings and monthly contributions grown to retirement.
    monthly_income: Decimal
        Income from withdrawing the safe rate of ``total_savings`` each year.
    total_contributions: Decimal
        Current savings plus every monthly contribution.
    investment_growth: Decimal
        ``total_savings`` less ``total_contributions``.
    inflation_adjusted_target: Decimal
        Target annual income expressed in money of the retirement year.
    goal_met: bool
        Whether the withdrawal income covers the adjusted target.
    """

    total_savings: Decimal
    monthly_income: Decimal
    total_contributions: Decimal
    investment_growth: Decimal
    inflation_adjusted_target: Decimal
    goal_met: bool
    years_to_retirement: Decimal


@dataclass(frozen=True)
class DividendResult(_Record):
    final_portfolio_value: Decimal
    final_annual_dividends: Decimal
    monthly_dividend_income: Decimal
    total_dividends_received: Decimal
    total_contributions: Decimal
    yield_on_cost_percent: Decimal
    capital_growth: Decimal


@dataclass(frozen=True)
class RentalPropertyResult(_Record):
    """Cash flow and returns of a rental property bought without a loan.

    Currency amounts are rounded to whole units; percentages are not.
    """

    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    net_operating_income: Decimal
    cap_rate_percent: Decimal
    cash_on_cash_percent: Decimal
    future_value: Decimal
    total_appreciation: Decimal
    total_roi_percent: Decimal
