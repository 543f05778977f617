"""Tests for scenario definitions and multi-scenario runs."""

import pytest
from family_plan_ch import (
    SCENARIO_ORDER,
    SCENARIOS,
    HouseholdProfile,
    ScenarioModifiers,
    get_modifiers,
    run_scenario,
    run_scenarios,
    simulate,
)

START_YEAR = 2026


class TestScenarioDefinitions:
    def test_neutral_is_identity(self):
        assert SCENARIOS["neutral"] == ScenarioModifiers()

    def test_pessimistic(self):
        m = get_modifiers("pessimistic")
        assert m.salary_growth == -0.005
        assert m.investment_return == -0.02
        assert m.inflation == 0.01
        assert m.expense_multiplier == 1.05

    def test_optimistic(self):
        m = get_modifiers("optimistic")
        assert m.salary_growth == 0.005
        assert m.investment_return == 0.015
        assert m.inflation == -0.005
        assert m.expense_multiplier == 0.95

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown scenario 'boom'"):
            get_modifiers("boom")


class TestRunScenarios:
    def setup_method(self):
        self.p = HouseholdProfile()
        self.results = run_scenarios(self.p, start_year=START_YEAR)

    def test_all_scenarios_in_order(self):
        assert list(self.results) == SCENARIO_ORDER
        for name, r in self.results.items():
            assert r.scenario == name

    def test_neutral_matches_plain_simulation(self):
        plain = simulate(self.p, start_year=START_YEAR)
        assert self.results["neutral"].snapshots == plain.snapshots

    def test_runs_are_independent(self):
        alone = run_scenario(self.p, "optimistic", start_year=START_YEAR)
        assert alone.final_wealth == self.results["optimistic"].final_wealth

    def test_ordering_of_outcomes(self):
        finals = [self.results[name].final_wealth for name in SCENARIO_ORDER]
        assert finals[0] <= finals[1] <= finals[2]

    def test_ordering_for_pension_only_retiree(self):
        """Higher inflation raises the public pension but must not beat a better return."""
        p = HouseholdProfile(
            current_age=65, retirement_age=65, future_children=0, current_savings=0,
            pillar2_balance_1=0, pillar2_balance_2=0, pillar3_balance_1=0, pillar3_balance_2=0,
            monthly_housing_cost=0, monthly_living_cost=0, yearly_travel_budget=0,
        )
        results = run_scenarios(p, start_year=START_YEAR)
        assert results["pessimistic"].final_wealth <= results["optimistic"].final_wealth

    def test_pessimistic_costs_more(self):
        pess = self.results["pessimistic"].snapshot_at(40)
        neut = self.results["neutral"].snapshot_at(40)
        assert pess.living_expenses > neut.living_expenses
