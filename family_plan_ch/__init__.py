"""Swiss Family Financial Projection Package."""

from family_plan_ch.params import (
    HouseholdProfile,
    ScenarioModifiers,
    END_AGE,
    validate_profile,
    check_profile,
)
from family_plan_ch.simulation import (
    YearlySnapshot,
    ScenarioResult,
    simulate,
    is_sustainable,
    find_earliest_retirement_age,
    DEPLETION_EPSILON,
    EARLY_RETIREMENT_MIN_AGE,
    EARLY_RETIREMENT_MAX_AGE,
    RETIREMENT_SAFETY_BUFFER,
)
from family_plan_ch.scenarios import SCENARIOS, SCENARIO_ORDER, get_modifiers, run_scenario, run_scenarios
from family_plan_ch.pension import PensionPhase
from family_plan_ch.housing import HousingState
from family_plan_ch.estimates import CostEstimate, estimate_location_costs, apply_cost_estimate
from family_plan_ch.whatif import WhatIf

__all__ = [
    "HouseholdProfile",
    "ScenarioModifiers",
    "END_AGE",
    "validate_profile",
    "check_profile",
    "YearlySnapshot",
    "ScenarioResult",
    "simulate",
    "is_sustainable",
    "find_earliest_retirement_age",
    "DEPLETION_EPSILON",
    "EARLY_RETIREMENT_MIN_AGE",
    "EARLY_RETIREMENT_MAX_AGE",
    "RETIREMENT_SAFETY_BUFFER",
    "SCENARIOS",
    "SCENARIO_ORDER",
    "get_modifiers",
    "run_scenario",
    "run_scenarios",
    "PensionPhase",
    "HousingState",
    "CostEstimate",
    "estimate_location_costs",
    "apply_cost_estimate",
    "WhatIf",
]
