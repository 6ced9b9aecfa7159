"""
Tests for name-based calculator dispatch.
"""

from decimal import Decimal
from unittest import TestCase

from fin_calc.data_models import SIPResult
from fin_calc.errors import CalculatorValidationError
from fin_calc.registry import CALCULATORS, get_calculator, list_calculators, serialize


class RegistryTests(TestCase):

    def test_all_calculators_listed(self):
        names = [c["name"] for c in list_calculators()]
        self.assertEqual(
            names,
            ["loan", "fd", "compound-interest", "lump-sum", "sip", "savings", "ppf",
             "credit-card", "eligibility", "roi", "compare", "retirement", "dividend", "real-estate"],
        )
        self.assertTrue(all(c["description"] for c in list_calculators()))

    def test_unknown_calculator(self):
        with self.assertRaises(KeyError):
            get_calculator("mortgage")

    def test_blank_optional_fields_are_left_out(self):
        kwargs = CALCULATORS["sip"].parse(
            {"monthly_amount": "5,000", "annual_rate_percent": "12%", "years": "10", "step_up_percent": " "}
        )
        self.assertEqual(
            kwargs,
            {"monthly_amount": Decimal("5000"), "annual_rate_percent": Decimal("12"), "years": Decimal("10")},
        )

    def test_run_sip(self):
        result = get_calculator("sip").run({"monthly_amount": "5000", "annual_rate_percent": "12", "years": "10"})
        self.assertIsInstance(result, SIPResult)
        self.assertEqual(result.maturity_amount, Decimal("1161695"))

    def test_missing_required_field_is_rejected_by_engine(self):
        with self.assertRaises(CalculatorValidationError) as ctx:
            get_calculator("ppf").run({"current_age": "30"})
        self.assertEqual(ctx.exception.field, "annual_deposit")

    def test_flag_field(self):
        result = get_calculator("loan").run(
            {"principal": "100000", "annual_rate_percent": "12", "years": "1", "include_schedule": "true"}
        )
        self.assertEqual(len(result.schedule), 12)
        result = get_calculator("loan").run(
            {"principal": "100000", "annual_rate_percent": "12", "years": "1", "include_schedule": "no"}
        )
        self.assertIsNone(result.schedule)

    def test_text_field_is_normalized(self):
        result = get_calculator("credit-card").run(
            {"balance": "50000", "annual_rate_percent": "36", "strategy": " Aggressive "}
        )
        self.assertEqual(result.strategy.value, "aggressive")

    def test_offers_must_be_a_list(self):
        with self.assertRaises(CalculatorValidationError) as ctx:
            get_calculator("compare").run({"principal": "500000", "tenure_years": "10", "offers": "SBI"})
        self.assertEqual(ctx.exception.field, "offers")

    def test_serialize_list(self):
        results = get_calculator("compare").run(
            {
                "principal": "500000",
                "tenure_years": "10",
                "offers": [{"name": "A", "annual_rate_percent": "9"}, {"name": "B", "annual_rate_percent": "8"}],
            }
        )
        data = serialize(results)
        self.assertEqual([d["name"] for d in data], ["B", "A"])
        self.assertIsInstance(data[0]["emi"], float)

    def test_options_pass_through_to_engine(self):
        calculator = get_calculator("loan")
        self.assertTrue(calculator.accepts_schedule_limit)
        self.assertFalse(get_calculator("sip").accepts_schedule_limit)
        result = calculator.run(
            {"principal": "100000", "annual_rate_percent": "12", "years": "1", "include_schedule": "1"},
            schedule_limit=4,
        )
        self.assertEqual(len(result.schedule), 4)
        self.assertEqual(result.schedule_truncated, 8)

    def test_run_real_estate_with_defaults(self):
        result = get_calculator("real-estate").run(
            {"purchase_price": "60,00,000", "down_payment": "1200000", "monthly_rent": "30000"}
        )
        self.assertEqual(result.future_value, Decimal("8063498"))
