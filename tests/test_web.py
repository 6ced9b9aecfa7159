"""
Tests for the Flask JSON API.
"""

from unittest import TestCase

from fin_calc_web.app import create_app


class WebAppTests(TestCase):

    def setUp(self):
        self.app = create_app({"TESTING": True, "MAX_SCHEDULE_ROWS": 5})
        self.client = self.app.test_client()

    def test_healthz(self):
        response = self.client.get("/healthz")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {"status": "ok"})

    def test_list_calculators(self):
        data = self.client.get("/api/calculators").get_json()
        self.assertIn("sip", [c["name"] for c in data["calculators"]])

    def test_sip(self):
        response = self.client.post(
            "/api/calculators/sip",
            json={"monthly_amount": "5,000", "annual_rate_percent": "12", "years": "10"},
        )
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data["calculator"], "sip")
        self.assertEqual(data["result"]["maturity_amount"], 1161695.0)
        self.assertEqual(data["result"]["wealth_gained"], 561695.0)

    def test_form_body(self):
        response = self.client.post(
            "/api/calculators/roi",
            data={"initial_investment": "100", "final_value": "121", "years": "2"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertAlmostEqual(response.get_json()["result"]["annualized_roi_percent"], 10.0, places=6)

    def test_validation_error(self):
        response = self.client.post(
            "/api/calculators/sip",
            json={"monthly_amount": "", "annual_rate_percent": "12", "years": "10"},
        )
        self.assertEqual(response.status_code, 400)
        data = response.get_json()
        self.assertEqual(data["field"], "monthly_amount")
        self.assertIn("greater than 0", data["error"])

    def test_non_object_body(self):
        response = self.client.post("/api/calculators/sip", json=[1, 2, 3])
        self.assertEqual(response.status_code, 400)

    def test_unknown_calculator(self):
        response = self.client.post("/api/calculators/mortgage", json={})
        self.assertEqual(response.status_code, 404)

    def test_credit_card_never_pays_off(self):
        response = self.client.post(
            "/api/calculators/credit-card",
            json={"balance": "50000", "annual_rate_percent": "36", "minimum_payment": "1000"},
        )
        data = response.get_json()["result"]
        self.assertTrue(data["never_pays_off"])
        self.assertIsNone(data["months_to_payoff"])
        self.assertIsNone(data["total_interest"])

    def test_schedule_is_trimmed(self):
        response = self.client.post(
            "/api/calculators/loan",
            json={"principal": "100000", "annual_rate_percent": "12", "years": "2", "include_schedule": True},
        )
        data = response.get_json()["result"]
        self.assertEqual(len(data["schedule"]), 5)
        self.assertEqual(data["schedule_truncated"], 19)
        self.assertEqual(data["schedule"][0]["period"], 1)

    def test_long_tenure_schedule_is_capped(self):
        response = self.client.post(
            "/api/calculators/loan",
            json={"principal": "100000", "annual_rate_percent": "12", "years": "5000", "include_schedule": True},
        )
        self.assertEqual(response.status_code, 200)
        data = response.get_json()["result"]
        self.assertEqual(len(data["schedule"]), 5)
        self.assertEqual(data["schedule_truncated"], 59995)

    def test_overflowing_tenure_is_a_validation_error(self):
        response = self.client.post(
            "/api/calculators/lump-sum",
            json={"principal": "1000", "annual_rate_percent": "7", "years": "1e8"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["field"], "years")

    def test_offer_that_is_not_an_object(self):
        response = self.client.post(
            "/api/calculators/compare",
            json={"principal": "500000", "tenure_years": "10", "offers": ["SBI"]},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["field"], "offers")

    def test_retirement(self):
        response = self.client.post(
            "/api/calculators/retirement",
            json={
                "current_age": "30",
                "retirement_age": "60",
                "annual_return_percent": "7",
                "current_savings": "1,00,000",
                "monthly_contribution": "10000",
                "target_annual_income": "200000",
            },
        )
        self.assertEqual(response.status_code, 200)
        data = response.get_json()["result"]
        self.assertTrue(data["goal_met"])
        self.assertEqual(data["total_contributions"], 3700000.0)

    def test_dividend_without_reinvestment(self):
        response = self.client.post(
            "/api/calculators/dividend",
            json={
                "initial_investment": "100000",
                "dividend_yield_percent": "4",
                "years": "2",
                "reinvest_dividends": "false",
            },
        )
        data = response.get_json()["result"]
        self.assertEqual(data["final_portfolio_value"], 100000.0)
        self.assertEqual(data["total_dividends_received"], 8000.0)
