"""
Tests for the dividend income projection.
"""

from decimal import Decimal
from unittest import TestCase

from fin_calc.dividend import compute_dividend_projection
from fin_calc.errors import CalculatorValidationError


class DividendProjectionTests(TestCase):

    def test_reinvested_dividends_compound(self):
        result = compute_dividend_projection(100000, 4, 2)
        self.assertEqual(result.final_portfolio_value, Decimal("108160"))
        self.assertEqual(result.total_dividends_received, Decimal("8160"))
        self.assertEqual(result.final_annual_dividends, Decimal("4326"))
        self.assertEqual(result.monthly_dividend_income, Decimal("361"))
        self.assertEqual(result.total_contributions, Decimal("100000"))
        self.assertEqual(result.capital_growth, Decimal("0"))
        self.assertAlmostEqual(float(result.yield_on_cost_percent), 4.3264, places=9)

    def test_paid_out_dividends(self):
        result = compute_dividend_projection(100000, 4, 2, reinvest_dividends=False)
        self.assertEqual(result.final_portfolio_value, Decimal("100000"))
        self.assertEqual(result.total_dividends_received, Decimal("8000"))
        self.assertEqual(result.capital_growth, Decimal("0"))

    def test_growth_and_contributions(self):
        """Contributions land first, dividends are paid, then price and yield grow."""
        result = compute_dividend_projection(100000, 4, 1, annual_growth_percent=10, monthly_contribution=1000)
        self.assertEqual(result.final_portfolio_value, Decimal("128128"))
        self.assertEqual(result.total_dividends_received, Decimal("4480"))
        self.assertEqual(result.final_annual_dividends, Decimal("5638"))
        self.assertEqual(result.total_contributions, Decimal("112000"))
        self.assertEqual(result.capital_growth, Decimal("11648"))

    def test_fractional_year_counts_contributions_only(self):
        whole = compute_dividend_projection(100000, 4, 2, monthly_contribution=1000)
        partial = compute_dividend_projection(100000, 4, "2.5", monthly_contribution=1000)
        self.assertEqual(partial.final_portfolio_value, whole.final_portfolio_value)
        self.assertEqual(partial.total_contributions, whole.total_contributions + 6000)

    def test_years_are_capped(self):
        self.assertGreater(compute_dividend_projection(1000, 3, 100).final_portfolio_value, 1000)
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_dividend_projection(1000, 3, 101)
        self.assertEqual(ctx.exception.field, "years")

    def test_invalid_inputs(self):
        for args in ((0, 4, 5), (1000, 0, 5), (1000, 4, 0)):
            with self.assertRaises(CalculatorValidationError):
                compute_dividend_projection(*args)
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_dividend_projection(1000, 4, 5, annual_growth_percent=-2)
        self.assertEqual(ctx.exception.field, "annual_growth_percent")
