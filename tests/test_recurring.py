"""
Tests for SIP and savings-goal calculations.
"""

from decimal import Decimal
from unittest import TestCase

from fin_calc.data_models import SavingsMode
from fin_calc.errors import CalculatorValidationError
from fin_calc.recurring import compute_savings, compute_sip


class SIPTests(TestCase):

    def test_flat_sip_example(self):
        """5,000 a month at 12% for 10 years."""
        result = compute_sip(5000, 12, 10)
        self.assertEqual(result.maturity_amount, Decimal("1161695"))
        self.assertEqual(result.total_investment, Decimal("600000"))
        self.assertEqual(result.wealth_gained, Decimal("561695"))
        self.assertIsNone(result.step_up_benefit)

    def test_zero_step_up_has_no_benefit(self):
        self.assertIsNone(compute_sip(5000, 12, 10, step_up_percent=0).step_up_benefit)

    def test_matches_annuity_due_formula(self):
        i = 0.09 / 12
        m = 7 * 12
        expected = 2500 * (((1 + i) ** m - 1) / i) * (1 + i)
        result = compute_sip(2500, 9, 7)
        self.assertEqual(result.maturity_amount, Decimal(round(expected)))

    def test_outputs_are_whole_units(self):
        result = compute_sip(3333, 11.7, 6.5, step_up_percent=7)
        for value in (result.maturity_amount, result.total_investment, result.wealth_gained, result.step_up_benefit):
            self.assertEqual(value, value.to_integral_value())

    def test_one_year_step_up(self):
        """One year of step-up: 60,000 compounded a year at 12% against the flat SIP."""
        result = compute_sip(5000, 12, 1, step_up_percent=10)
        self.assertEqual(result.step_up_benefit, Decimal("3153"))

    def test_step_up_increases_benefit(self):
        low = compute_sip(5000, 12, 10, step_up_percent=5)
        high = compute_sip(5000, 12, 10, step_up_percent=10)
        self.assertGreater(low.step_up_benefit, 0)
        self.assertGreater(high.step_up_benefit, low.step_up_benefit)
        self.assertEqual(low.maturity_amount, high.maturity_amount)

    def test_invalid_inputs(self):
        for args in ((0, 12, 10), (5000, 0, 10), (5000, 12, 0)):
            with self.assertRaises(CalculatorValidationError):
                compute_sip(*args)
        with self.assertRaises(CalculatorValidationError):
            compute_sip(5000, 12, 10, step_up_percent=-5)

    def test_tenure_beyond_decimal_range_is_rejected(self):
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_sip(5000, 12, "1e8")
        self.assertEqual(ctx.exception.field, "years")

    def test_step_up_projection_is_capped(self):
        self.assertIsNotNone(compute_sip(1000, 10, 100, step_up_percent=5).step_up_benefit)
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_sip(1000, 10, 101, step_up_percent=5)
        self.assertEqual(ctx.exception.field, "years")
        self.assertIsNone(compute_sip(1000, 10, 101).step_up_benefit)


class SavingsTests(TestCase):

    def test_future_value_is_ordinary_annuity(self):
        result = compute_savings("future-value", 12, monthly_deposit=1000, years=1)
        expected = 1000 * ((1.01 ** 12) - 1) / 0.01
        self.assertAlmostEqual(float(result.future_value), expected, places=6)
        self.assertEqual(result.total_deposits, Decimal("12000"))
        self.assertEqual(result.total_interest, result.future_value - Decimal("12000"))
        self.assertEqual(result.real_value, result.future_value)
        self.assertIs(result.mode, SavingsMode.FUTURE_VALUE)

    def test_inflation_discounts_real_value(self):
        result = compute_savings(SavingsMode.FUTURE_VALUE, 8, monthly_deposit=2000, years=5, inflation_percent=6)
        self.assertAlmostEqual(float(result.real_value), float(result.future_value) / 1.06 ** 5, places=6)

    def test_goal_planning_inverts_future_value(self):
        fv = compute_savings("future-value", 10, monthly_deposit=1500, years=4).future_value
        result = compute_savings("goal-planning", 10, years=4, target_amount=fv)
        self.assertAlmostEqual(float(result.monthly_required_for_goal), 1500, places=6)
        self.assertEqual(result.future_value, fv)

    def test_time_to_goal_inverts_future_value(self):
        fv = compute_savings("future-value", 12, monthly_deposit=1000, years=3).future_value
        result = compute_savings("time-to-goal", 12, monthly_deposit=1000, target_amount=fv)
        self.assertAlmostEqual(float(result.years_to_reach_goal), 3.0, places=9)
        self.assertAlmostEqual(float(result.total_deposits), 36000, places=4)

    def test_mode_specific_requirements(self):
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_savings("future-value", 12, years=5)
        self.assertEqual(ctx.exception.field, "monthly_deposit")
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_savings("goal-planning", 12, years=5)
        self.assertEqual(ctx.exception.field, "target_amount")
        with self.assertRaises(CalculatorValidationError):
            compute_savings("time-to-goal", 12, monthly_deposit=1000)

    def test_unknown_mode(self):
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_savings("retire-early", 12, monthly_deposit=1000, years=5)
        self.assertEqual(ctx.exception.field, "mode")

    def test_rate_required(self):
        with self.assertRaises(CalculatorValidationError):
            compute_savings("future-value", 0, monthly_deposit=1000, years=5)

    def test_tenure_beyond_decimal_range_is_rejected(self):
        for mode, kwargs in (
            ("future-value", {"monthly_deposit": 1000}),
            ("goal-planning", {"target_amount": 1000000}),
        ):
            with self.assertRaises(CalculatorValidationError) as ctx:
                compute_savings(mode, 12, years="1e8", **kwargs)
            self.assertEqual(ctx.exception.field, "years")
