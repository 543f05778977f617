"""Household profile and input validation."""

from dataclasses import dataclass

END_AGE = 90  # projection horizon (inclusive)

CAREER_STAGES = ("junior", "mid", "senior", "executive")
LIFESTYLES = ("basic", "comfortable", "premium")
HOUSING_STATUSES = ("rent", "own")

# University support policy
#   annual: university_support is paid every year the child is 19-24
#   spread: university_support is a total, divided over UNIVERSITY_SPREAD_YEARS
UNIVERSITY_POLICIES = ("annual", "spread")
DEFAULT_UNIVERSITY_POLICY = "annual"

_MONEY_FIELDS = (
    "salary_1",
    "salary_2",
    "annual_bonus",
    "current_savings",
    "pillar2_balance_1",
    "pillar2_balance_2",
    "pillar3_balance_1",
    "pillar3_balance_2",
    "pillar3_contribution_1",
    "pillar3_contribution_2",
    "monthly_housing_cost",
    "monthly_living_cost",
    "monthly_daycare_cost",
    "monthly_school_activity_cost",
    "yearly_travel_budget",
    "university_support",
)

_COUNT_FIELDS = (
    "current_age",
    "retirement_age",
    "current_children",
    "future_children",
    "first_child_birth_year_offset",
    "child_spacing_years",
)


@dataclass(frozen=True)
class HouseholdProfile:
    """Immutable household input for one projection run (CHF, rates as fractions)."""

    # Ages
    current_age: int = 30
    retirement_age: int = 65

    # Children
    current_children: int = 0
    future_children: int = 2
    first_child_birth_year_offset: int = 1  # 1 = born next year
    child_spacing_years: int = 2

    # Income (annual gross)
    salary_1: float = 110_000
    salary_2: float = 90_000
    career_stage_1: str = "mid"
    career_stage_2: str = "mid"
    annual_bonus: float = 0.0
    expected_salary_increase: float = 0.02  # baseline inflation / growth

    # Free savings
    current_savings: float = 150_000
    investment_return: float = 0.045

    # Pillar 2 (occupational) and pillar 3 (private) per person
    pillar2_balance_1: float = 50_000
    pillar2_balance_2: float = 20_000
    pillar3_balance_1: float = 14_000
    pillar3_balance_2: float = 0.0
    pillar3_contribution_1: float = 7_056
    pillar3_contribution_2: float = 3_000

    # Housing (monthly)
    housing_status: str = "rent"
    monthly_housing_cost: float = 1_800
    current_rooms: float = 3.5
    housing_cost_increase: float = 0.02

    # Living costs
    monthly_living_cost: float = 6_000
    monthly_daycare_cost: float = 2_500
    monthly_school_activity_cost: float = 400
    yearly_travel_budget: float = 6_000
    university_support: float = 25_000
    university_cost_policy: str = DEFAULT_UNIVERSITY_POLICY

    canton: str = "Zürich"
    lifestyle: str = "comfortable"

    @property
    def pillar2_balance(self) -> float:
        return self.pillar2_balance_1 + self.pillar2_balance_2

    @property
    def pillar3_balance(self) -> float:
        return self.pillar3_balance_1 + self.pillar3_balance_2

    @property
    def planned_pillar3_contribution(self) -> float:
        return self.pillar3_contribution_1 + self.pillar3_contribution_2

    @property
    def total_children(self) -> int:
        return self.current_children + self.future_children

    @property
    def years_to_horizon(self) -> int:
        """Number of simulated years (current age .. END_AGE inclusive)."""
        return max(0, END_AGE - self.current_age + 1)


def validate_profile(profile: HouseholdProfile) -> list[str]:
    """Validate a profile. Returns list of error messages (empty = valid)."""
    errors = []
    for name in _MONEY_FIELDS:
        value = getattr(profile, name)
        if value < 0:
            errors.append(f"{name} must be non-negative (got {value})")
    for name in _COUNT_FIELDS:
        value = getattr(profile, name)
        if not isinstance(value, int) or isinstance(value, bool):
            errors.append(f"{name} must be an integer (got {value!r})")
        elif value < 0:
            errors.append(f"{name} must be non-negative (got {value})")
    if profile.current_rooms < 0:
        errors.append(f"current_rooms must be non-negative (got {profile.current_rooms})")

    if profile.retirement_age < profile.current_age:
        errors.append(
            f"retirement age {profile.retirement_age} is before current age {profile.current_age}"
        )
    if profile.current_age > END_AGE:
        errors.append(f"current age {profile.current_age} is beyond the {END_AGE}-year horizon")
    elif profile.retirement_age > END_AGE:
        errors.append(f"retirement age {profile.retirement_age} is beyond the {END_AGE}-year horizon")

    for label, stage in [("career_stage_1", profile.career_stage_1),
                         ("career_stage_2", profile.career_stage_2)]:
        if stage not in CAREER_STAGES:
            errors.append(f"{label} '{stage}' is not one of {', '.join(CAREER_STAGES)}")
    if profile.lifestyle not in LIFESTYLES:
        errors.append(f"lifestyle '{profile.lifestyle}' is not one of {', '.join(LIFESTYLES)}")
    if profile.housing_status not in HOUSING_STATUSES:
        errors.append(
            f"housing_status '{profile.housing_status}' is not one of {', '.join(HOUSING_STATUSES)}"
        )
    if profile.university_cost_policy not in UNIVERSITY_POLICIES:
        errors.append(
            f"university_cost_policy '{profile.university_cost_policy}' is not one of "
            f"{', '.join(UNIVERSITY_POLICIES)}"
        )
    return errors


def check_profile(profile: HouseholdProfile) -> None:
    """Raise ValueError listing every problem if the profile is invalid."""
    errors = validate_profile(profile)
    if errors:
        raise ValueError("Invalid household profile:\n" + "\n".join(f"  ✗ {e}" for e in errors))


@dataclass(frozen=True)
class ScenarioModifiers:
    """Macro deltas applied uniformly over one run (defaults = neutral)."""

    salary_growth: float = 0.0
    investment_return: float = 0.0
    inflation: float = 0.0
    expense_multiplier: float = 1.0
