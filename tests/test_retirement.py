"""
Tests for retirement planning.
"""

from decimal import Decimal
from unittest import TestCase

from fin_calc.errors import CalculatorValidationError
from fin_calc.retirement import compute_retirement


class RetirementTests(TestCase):

    def test_savings_and_contributions_grow_separately(self):
        result = compute_retirement(30, 60, 7, current_savings=100000, monthly_contribution=10000)
        savings = 100000 * 1.07 ** 30
        contributions = 10000 * ((1 + 0.07 / 12) ** 360 - 1) / (0.07 / 12)
        self.assertAlmostEqual(float(result.total_savings), savings + contributions, delta=1)
        self.assertEqual(result.total_contributions, Decimal("3700000"))
        self.assertEqual(result.investment_growth, result.total_savings - result.total_contributions)
        self.assertEqual(result.years_to_retirement, Decimal("30"))

    def test_four_percent_rule(self):
        result = compute_retirement(40, 65, 8, current_savings=1000000)
        expected = 1000000 * 1.08 ** 25 * 0.04 / 12
        self.assertAlmostEqual(float(result.monthly_income), expected, delta=1)

    def test_goal_against_inflated_target(self):
        met = compute_retirement(
            30, 60, 7, current_savings=100000, monthly_contribution=10000, target_annual_income=200000
        )
        self.assertTrue(met.goal_met)
        self.assertAlmostEqual(float(met.inflation_adjusted_target), 200000 * 1.03 ** 30, delta=1)
        missed = compute_retirement(
            30, 60, 7, current_savings=100000, monthly_contribution=10000, target_annual_income=600000
        )
        self.assertFalse(missed.goal_met)

    def test_zero_inflation_keeps_target(self):
        result = compute_retirement(50, 60, 6, current_savings=10, target_annual_income=120000, inflation_percent=0)
        self.assertEqual(result.inflation_adjusted_target, Decimal("120000"))
        self.assertFalse(result.goal_met)

    def test_no_savings_at_all(self):
        result = compute_retirement(30, 31, 5)
        self.assertEqual(result.total_savings, Decimal("0"))
        self.assertTrue(result.goal_met)

    def test_retirement_age_must_be_later(self):
        for retirement_age in (30, 25):
            with self.assertRaises(CalculatorValidationError) as ctx:
                compute_retirement(30, retirement_age, 7)
            self.assertEqual(ctx.exception.field, "retirement_age")

    def test_invalid_inputs(self):
        with self.assertRaises(CalculatorValidationError):
            compute_retirement(0, 60, 7)
        with self.assertRaises(CalculatorValidationError):
            compute_retirement(30, 60, 0)
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_retirement(30, 60, 7, monthly_contribution=-1)
        self.assertEqual(ctx.exception.field, "monthly_contribution")

    def test_horizon_beyond_decimal_range_is_rejected(self):
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_retirement(30, "1e8", 7, current_savings=1000)
        self.assertEqual(ctx.exception.field, "retirement_age")

    def test_to_dict(self):
        data = compute_retirement(30, 60, 7, monthly_contribution=5000).to_dict()
        self.assertIs(data["goal_met"], True)
        self.assertEqual(data["years_to_retirement"], 30.0)
