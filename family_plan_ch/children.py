"""Per-child relative ages and age-band cost schedule."""

from family_plan_ch.params import HouseholdProfile

# Age bands (child age, years)
DAYCARE_AGE_END = 5      # Kita: 0-4
SCHOOL_AGE_END = 19      # school and activities: 5-18
DEPENDENT_AGE_END = 25   # university support: 19-24; no cost from 25

# Existing children are placed at 2, 4, 6, ... (no exact ages are collected)
EXISTING_CHILD_FIRST_AGE = 2
EXISTING_CHILD_SPACING = 2

UNIVERSITY_SPREAD_YEARS = 4
BASIC_UNIVERSITY_CAP = 15_000  # study locally, live at home


def initial_child_ages(profile: HouseholdProfile) -> list[int]:
    """Return each child's age at the start of the projection (negative = unborn)."""
    ages = [
        EXISTING_CHILD_FIRST_AGE + i * EXISTING_CHILD_SPACING
        for i in range(profile.current_children)
    ]
    for j in range(profile.future_children):
        ages.append(-(profile.first_child_birth_year_offset + j * profile.child_spacing_years))
    return ages


def university_cost_per_year(profile: HouseholdProfile) -> float:
    """Effective yearly university support for one child in the 19-24 band."""
    amount = profile.university_support
    if profile.university_cost_policy == "spread":
        amount /= UNIVERSITY_SPREAD_YEARS
    if profile.lifestyle == "basic":
        amount = min(amount, BASIC_UNIVERSITY_CAP)
    return amount


def child_cost(age: int, profile: HouseholdProfile) -> float:
    """Annual cost of one child at the given age (0 if unborn or independent)."""
    if age < 0 or age >= DEPENDENT_AGE_END:
        return 0.0
    if age < DAYCARE_AGE_END:
        return profile.monthly_daycare_cost * 12
    if age < SCHOOL_AGE_END:
        return profile.monthly_school_activity_cost * 12
    return university_cost_per_year(profile)


def lifetime_cost_per_child(profile: HouseholdProfile) -> float:
    """Nominal cost of raising one child from birth to independence."""
    return sum(child_cost(age, profile) for age in range(DEPENDENT_AGE_END))


class ChildCostSchedule:
    """Ages every child slot one year per call and prices the current year."""

    def __init__(self, profile: HouseholdProfile):
        self.profile = profile
        self.ages = initial_child_ages(profile)

    def active_children(self) -> int:
        return sum(1 for age in self.ages if 0 <= age < DEPENDENT_AGE_END)

    def advance(self) -> tuple[float, int]:
        """Return (annual_cost, active_children) for this year, then age every slot.

        Costs are nominal; the scenario expense multiplier is applied by the caller.
        """
        cost = sum(child_cost(age, self.profile) for age in self.ages)
        active = self.active_children()
        self.ages = [age + 1 for age in self.ages]
        return cost, active
