"""Financial calculators: loans, deposits, SIP, PPF, credit cards, eligibility, ROI,
retirement, dividends and rental property."""

from .compare import compare_loans
from .credit_card import compute_credit_card_payoff, simulate_payoff
from .dividend import compute_dividend_projection
from .eligibility import compute_eligibility
from .engine import compute_loan, generate_amortization
from .errors import CalculatorValidationError
from .growth import (
    compute_compound_growth,
    compute_compound_interest,
    compute_fixed_deposit,
    compute_lump_sum,
)
from .ppf import compute_ppf
from .real_estate import compute_rental_property
from .recurring import compute_savings, compute_sip
from .retirement import compute_retirement
from .roi import compute_roi

__version__ = "0.1.0"
