"""Tests for calculation parameter bounds."""

from dataclasses import replace
from decimal import Decimal

import pytest

from harbor_finance.engine.validation import validate_parameters
from harbor_finance.models.calculation import CalculationParameters


class TestValidParameters:
    def test_canonical_loan_is_valid(self, boat_loan):
        assert validate_parameters(boat_loan) is None

    @pytest.mark.parametrize("changes", [
        {"interest_rate": Decimal("0")},
        {"interest_rate": Decimal("30")},
        {"term_months": 12},
        {"term_months": 360},
        {"down_payment": Decimal("90000")},  # exactly 90%
        {"down_payment": Decimal("0")},
        {"boat_price": Decimal("10000000")},
    ])
    def test_inclusive_bounds(self, boat_loan, changes):
        assert validate_parameters(replace(boat_loan, **changes)) is None


class TestRejections:
    def test_boat_price_too_low(self, boat_loan):
        msg = validate_parameters(replace(boat_loan, boat_price=Decimal("500"), down_payment=Decimal("0")))
        assert msg == "Boat price must be between $1,000 and $10,000,000"

    def test_boat_price_too_high(self, boat_loan):
        msg = validate_parameters(replace(boat_loan, boat_price=Decimal("10000000.01")))
        assert "$1,000 and $10,000,000" in msg

    def test_down_payment_over_ninety_percent(self, boat_loan):
        msg = validate_parameters(replace(boat_loan, down_payment=Decimal("95000")))
        assert msg == "Down payment must be between $0 and 90% of boat price"

    def test_negative_down_payment(self, boat_loan):
        msg = validate_parameters(replace(boat_loan, down_payment=Decimal("-1")))
        assert "Down payment" in msg

    def test_interest_rate_too_high(self, boat_loan):
        msg = validate_parameters(replace(boat_loan, interest_rate=Decimal("35")))
        assert msg == "Interest rate must be between 0% and 30%"

    def test_negative_interest_rate(self, boat_loan):
        msg = validate_parameters(replace(boat_loan, interest_rate=Decimal("-0.5")))
        assert "Interest rate" in msg

    def test_term_too_short(self, boat_loan):
        msg = validate_parameters(replace(boat_loan, term_months=6))
        assert msg == "Loan term must be between 12 and 360 months"

    def test_term_too_long(self, boat_loan):
        assert "Loan term" in validate_parameters(replace(boat_loan, term_months=361))

    def test_loan_amount_below_minimum(self):
        params = CalculationParameters(
            boat_price=Decimal("1000"),
            down_payment=Decimal("100"),
            interest_rate=Decimal("5"),
            term_months=24,
        )
        assert validate_parameters(params) == "Loan amount must be at least $1,000"

    def test_first_failing_rule_wins(self, boat_loan):
        params = replace(
            boat_loan,
            boat_price=Decimal("500"),
            interest_rate=Decimal("99"),
            term_months=1,
        )
        assert validate_parameters(params).startswith("Boat price")
