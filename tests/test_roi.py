"""
Tests for ROI and CAGR.
"""

from decimal import Decimal
from unittest import TestCase

from fin_calc.errors import CalculatorValidationError
from fin_calc.roi import compute_roi


class ROITests(TestCase):

    def test_total_gain_includes_costs(self):
        result = compute_roi(100000, 150000, additional_costs=10000)
        self.assertEqual(result.total_investment, Decimal("110000"))
        self.assertEqual(result.total_gain, Decimal("40000"))
        self.assertAlmostEqual(float(result.total_roi_percent), 36.363636, places=5)

    def test_no_period_means_no_annualized_figure(self):
        result = compute_roi(100000, 150000, years=0)
        self.assertEqual(result.annualized_roi_percent, Decimal("0"))
        self.assertEqual(compute_roi(100000, 150000).annualized_roi_percent, Decimal("0"))

    def test_cagr(self):
        result = compute_roi(100, 121, years=2)
        self.assertAlmostEqual(float(result.annualized_roi_percent), 10.0, places=9)
        self.assertEqual(result.total_roi_percent, Decimal("21"))

    def test_fractional_years(self):
        result = compute_roi(1000, 1500, years=2.5)
        self.assertAlmostEqual(float(result.annualized_roi_percent), ((1.5 ** (1 / 2.5)) - 1) * 100, places=9)

    def test_loss(self):
        result = compute_roi(1000, 800, years=1)
        self.assertEqual(result.total_gain, Decimal("-200"))
        self.assertAlmostEqual(float(result.annualized_roi_percent), -20.0, places=9)

    def test_invalid_inputs(self):
        with self.assertRaises(CalculatorValidationError):
            compute_roi(0, 1000)
        with self.assertRaises(CalculatorValidationError):
            compute_roi(1000, 0)
        with self.assertRaises(CalculatorValidationError):
            compute_roi(1000, 1500, years=-1)
        with self.assertRaises(CalculatorValidationError):
            compute_roi(1000, 1500, additional_costs=-5)

    def test_tiny_period_is_rejected(self):
        """A 50% gain over a billionth of a year compounds past the decimal range."""
        with self.assertRaises(CalculatorValidationError) as ctx:
            compute_roi(100000, 150000, years="1e-9")
        self.assertEqual(ctx.exception.field, "years")
