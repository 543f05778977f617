"""Scenario definitions and multi-scenario execution."""

from family_plan_ch.params import HouseholdProfile, ScenarioModifiers
from family_plan_ch.simulation import ScenarioResult, simulate

SCENARIOS: dict[str, ScenarioModifiers] = {
    "pessimistic": ScenarioModifiers(
        salary_growth=-0.005,
        investment_return=-0.02,
        inflation=0.01,
        expense_multiplier=1.05,
    ),
    "neutral": ScenarioModifiers(),
    "optimistic": ScenarioModifiers(
        salary_growth=0.005,
        investment_return=0.015,
        inflation=-0.005,
        expense_multiplier=0.95,
    ),
}

SCENARIO_ORDER = ["pessimistic", "neutral", "optimistic"]


def get_modifiers(name: str) -> ScenarioModifiers:
    """Look up a scenario by name. Raises ValueError for unknown names."""
    try:
        return SCENARIOS[name]
    except KeyError:
        raise ValueError(
            f"Unknown scenario '{name}' (choose from {', '.join(SCENARIO_ORDER)})"
        ) from None


def run_scenario(profile: HouseholdProfile, name: str, start_year: int | None = None) -> ScenarioResult:
    return simulate(profile, get_modifiers(name), scenario=name, start_year=start_year)


def run_scenarios(profile: HouseholdProfile, start_year: int | None = None) -> dict[str, ScenarioResult]:
    """Execute the projection for every scenario.

    Runs are independent: each builds its own state from the immutable
    profile, so order does not affect results.
    """
    return {name: run_scenario(profile, name, start_year) for name in SCENARIO_ORDER}
