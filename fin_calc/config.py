"""Fixed parameters used by the calculators.

Statutory figures (PPF rate and tenure, the FD interest threshold) and the
policy ratios the engines apply (FOIR ceilings, payoff simulation bounds) are
collected here so that they can be reviewed and updated in one place.
"""

from decimal import Decimal

# Decimal precision for all intermediate financial calculations
DECIMAL_PRECISION = 28

# Public Provident Fund
PPF_RATE = Decimal("0.071")
PPF_TENURE_YEARS = 15

# Interest above this amount on a fixed deposit is taxable
FD_TAX_FREE_INTEREST = Decimal("40000")

# Fixed Obligation to Income Ratio ceilings, keyed by loan type value
FOIR_LIMITS = {
    "home": Decimal("0.5"),
    "car": Decimal("0.4"),
    "personal": Decimal("0.3"),
}
RECOMMENDED_LOAN_SHARE = Decimal("0.8")

# Credit-card payoff simulation
PAYOFF_MAX_MONTHS = 600  # 50 years
PAYOFF_SETTLED_BALANCE = Decimal("0.01")
DEFAULT_MINIMUM_PAYMENT_SHARE = Decimal("0.03")
AGGRESSIVE_PAYMENT_SHARE = Decimal("0.1")

# Balances below half a paisa are treated as fully repaid
BALANCE_EPSILON = Decimal("0.005")

# Year-by-year projections (step-up SIP, dividends) run one iteration per year
MAX_PROJECTION_YEARS = 100

# Retirement planning
SAFE_WITHDRAWAL_RATE = Decimal("0.04")
DEFAULT_INFLATION_PERCENT = Decimal("3")

# Rental property analysis
DEFAULT_MAINTENANCE_PERCENT = Decimal("2")
DEFAULT_VACANCY_PERCENT = Decimal("5")
DEFAULT_APPRECIATION_PERCENT = Decimal("3")
DEFAULT_HOLDING_YEARS = Decimal("10")
