"""Tests for loan scenario comparison."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from harbor_finance.engine.amortization import calculate_loan
from harbor_finance.engine.scenarios import calculate_scenarios
from harbor_finance.errors import ValidationError
from harbor_finance.models.calculation import ScenarioOverride


@pytest.fixture
def four_overrides() -> list[ScenarioOverride]:
    return [
        ScenarioOverride(interest_rate=Decimal("5.5")),
        ScenarioOverride(interest_rate=Decimal("7.5")),
        ScenarioOverride(term_months=180),
        ScenarioOverride(down_payment=Decimal("30000")),
    ]


class TestCalculateScenarios:
    def test_each_override_applied_alone(self, boat_loan, four_overrides):
        scenarios = calculate_scenarios(boat_loan, four_overrides)
        assert len(scenarios) == 4

        assert scenarios[0].result.interest_rate == Decimal("5.5")
        assert scenarios[0].result.term_months == 240

        assert scenarios[1].result.interest_rate == Decimal("7.5")
        assert scenarios[1].result.down_payment == Decimal("20000")

        assert scenarios[2].result.term_months == 180
        assert scenarios[2].result.interest_rate == Decimal("6.5")

        assert scenarios[3].result.down_payment == Decimal("30000")
        assert scenarios[3].result.loan_amount == Decimal("70000")

    def test_results_match_direct_calculation(self, boat_loan, four_overrides):
        scenarios = calculate_scenarios(boat_loan, four_overrides)
        for scenario in scenarios:
            direct = calculate_loan(scenario.params)
            assert scenario.result.monthly_payment == direct.monthly_payment
            assert scenario.result.total_cost == direct.total_cost

    def test_labels_and_ids(self, boat_loan, four_overrides):
        scenarios = calculate_scenarios(boat_loan, four_overrides)
        assert [s.name for s in scenarios] == ["Scenario 1", "Scenario 2", "Scenario 3", "Scenario 4"]
        assert len({s.scenario_id for s in scenarios}) == 4
        assert len({s.result.calculation_id for s in scenarios}) == 4

    def test_results_are_ephemeral(self, boat_loan, four_overrides):
        for scenario in calculate_scenarios(boat_loan, four_overrides):
            assert scenario.result.user_id is None
            assert not scenario.result.saved
            assert not scenario.result.shared

    def test_listing_id_propagates(self, boat_loan, four_overrides):
        scenarios = calculate_scenarios(boat_loan, four_overrides, listing_id="listing-42")
        assert {s.result.listing_id for s in scenarios} == {"listing-42"}

    def test_empty_batch_rejected(self, boat_loan):
        with pytest.raises(ValidationError, match="At least one scenario is required"):
            calculate_scenarios(boat_loan, [])

    def test_more_than_ten_rejected(self, boat_loan):
        overrides = [ScenarioOverride(interest_rate=Decimal(i)) for i in range(11)]
        with pytest.raises(ValidationError, match="Maximum of 10 scenarios allowed"):
            calculate_scenarios(boat_loan, overrides)

    def test_ten_allowed(self, boat_loan):
        overrides = [ScenarioOverride(interest_rate=Decimal(i)) for i in range(10)]
        assert len(calculate_scenarios(boat_loan, overrides)) == 10

    def test_invalid_base_rejected(self, boat_loan):
        with pytest.raises(ValidationError) as excinfo:
            calculate_scenarios(replace(boat_loan, term_months=6), [ScenarioOverride(term_months=120)])
        assert excinfo.value.message == "Base parameters: Loan term must be between 12 and 360 months"

    def test_merged_scenarios_not_revalidated(self, boat_loan):
        """Only the base is checked; an override outside the business bounds still computes."""
        scenarios = calculate_scenarios(boat_loan, [ScenarioOverride(interest_rate=Decimal("35"))])
        assert scenarios[0].result.interest_rate == Decimal("35")
        assert scenarios[0].result.monthly_payment > 0

    def test_inputs_rounded_to_stored_precision(self, boat_loan):
        (scenario,) = calculate_scenarios(boat_loan, [ScenarioOverride(boat_price=Decimal("100000.555"))])
        assert scenario.params.boat_price == Decimal("100000.56")
        assert scenario.result.loan_amount == Decimal("80000.56")


class TestScenarioIsolation:
    def test_overflowing_override_keeps_siblings(self, boat_loan):
        scenarios = calculate_scenarios(boat_loan, [
            ScenarioOverride(interest_rate=Decimal("5.5")),
            ScenarioOverride(interest_rate=Decimal("1000000"), term_months=1000000),
        ])
        assert len(scenarios) == 2

        ok, failed = scenarios
        assert ok.error is None
        assert ok.result.interest_rate == Decimal("5.5")
        assert failed.result is None
        assert failed.error == "Unable to calculate loan for these parameters"
        assert failed.name == "Scenario 2"

    def test_zero_term_override(self, boat_loan):
        failed, ok = calculate_scenarios(boat_loan, [
            ScenarioOverride(term_months=0),
            ScenarioOverride(term_months=180),
        ])
        assert failed.error is not None
        assert ok.result.term_months == 180

    def test_schedule_past_last_calendar_year(self, boat_loan):
        scenarios = calculate_scenarios(
            boat_loan,
            [ScenarioOverride(term_months=120), ScenarioOverride(term_months=240, include_schedule=True)],
            start_date=date(9990, 1, 1),
        )
        assert scenarios[0].result is not None
        assert scenarios[1].error is not None
