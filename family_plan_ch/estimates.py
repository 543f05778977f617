"""Location-based cost estimates used as optional profile overrides.

The projection never depends on where these numbers come from: an
estimate is just an alternative set of monthly cost inputs. Anything
missing or malformed means "keep the profile value".
"""

import dataclasses
import math
import sys
from collections.abc import Mapping
from dataclasses import dataclass

from family_plan_ch.params import HouseholdProfile

# Cost index relative to the Swiss average (rent, childcare and living scale alike)
_CANTON_COST_INDEX: dict[str, float] = {
    "zürich": 1.15,
    "zurich": 1.15,
    "zug": 1.20,
    "geneva": 1.15,
    "genève": 1.15,
    "basel": 1.05,
    "vaud": 1.05,
    "bern": 0.95,
}

# Lifestyle tiers: (base rent, rent per child beyond two, living, daycare, school) CHF/month
_LIFESTYLE_COSTS: dict[str, tuple[float, float, float, float, float]] = {
    "basic": (1_500, 300, 4_500, 2_000, 250),
    "comfortable": (2_000, 500, 6_000, 2_500, 400),
    "premium": (3_000, 800, 8_500, 3_000, 700),
}
_CHILDREN_IN_BASE_RENT = 2
LIVING_COST_PER_CHILD_SHARE = 0.10  # living cost grows 10% per child

OVERRIDE_FIELDS = (
    "monthly_housing_cost",
    "monthly_living_cost",
    "monthly_daycare_cost",
    "monthly_school_activity_cost",
)


@dataclass(frozen=True)
class CostEstimate:
    """Suggested monthly costs for a location, family size and lifestyle."""

    monthly_housing_cost: float
    monthly_living_cost: float
    monthly_daycare_cost: float
    monthly_school_activity_cost: float

    def as_overrides(self) -> dict[str, float]:
        return dataclasses.asdict(self)


def canton_cost_index(canton: str | None) -> float:
    if not canton:
        return 1.0
    return _CANTON_COST_INDEX.get(canton.strip().lower(), 1.0)


def estimate_location_costs(canton: str, total_children: int, lifestyle: str) -> CostEstimate | None:
    """Estimate monthly costs. Returns None for an unknown lifestyle tier."""
    if lifestyle not in _LIFESTYLE_COSTS:
        return None
    base_rent, rent_per_child, living, daycare, school = _LIFESTYLE_COSTS[lifestyle]
    index = canton_cost_index(canton)
    extra_children = max(0, total_children - _CHILDREN_IN_BASE_RENT)
    rent = base_rent + extra_children * rent_per_child
    living *= 1 + LIVING_COST_PER_CHILD_SHARE * max(0, total_children)
    return CostEstimate(
        monthly_housing_cost=round(rent * index),
        monthly_living_cost=round(living * index),
        monthly_daycare_cost=round(daycare * index),
        monthly_school_activity_cost=round(school * index),
    )


def _clean_value(value) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def apply_cost_estimate(
    profile: HouseholdProfile,
    estimate: CostEstimate | Mapping | None,
) -> HouseholdProfile:
    """Return a profile with valid estimate values substituted.

    Invalid entries are reported on stderr and skipped; this never raises.
    """
    if estimate is None:
        return profile
    if isinstance(estimate, CostEstimate):
        values = estimate.as_overrides()
    elif isinstance(estimate, Mapping):
        values = estimate
    else:
        print(f"cost estimate ignored: unexpected type {type(estimate).__name__}", file=sys.stderr)
        return profile

    overrides = {}
    for key, value in values.items():
        if key not in OVERRIDE_FIELDS:
            print(f"cost estimate: unknown field '{key}' ignored", file=sys.stderr)
            continue
        number = _clean_value(value)
        if number is None:
            print(f"cost estimate: invalid value for {key} ({value!r}) ignored", file=sys.stderr)
            continue
        overrides[key] = number
    if not overrides:
        return profile
    return dataclasses.replace(profile, **overrides)
