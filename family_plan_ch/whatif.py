"""What-if stress toggles applied to a profile before projection."""

import dataclasses
from dataclasses import dataclass

from family_plan_ch.params import HouseholdProfile

PART_TIME_FACTOR = 0.5           # second earner drops to 50%
MARKET_SHOCK_RETURN_CUT = 0.02
PRIVATE_SCHOOL_UNIVERSITY_EXTRA = 25_000
PRIVATE_SCHOOL_ACTIVITY_FACTOR = 2.0


@dataclass(frozen=True)
class WhatIf:
    """Independent stress toggles; all off = profile unchanged."""

    part_time: bool = False
    market_shock: bool = False
    private_school: bool = False

    @property
    def active(self) -> bool:
        return self.part_time or self.market_shock or self.private_school

    def labels(self) -> list[str]:
        labels = []
        if self.part_time:
            labels.append("second earner part-time (50%)")
        if self.market_shock:
            labels.append(f"market shock (return -{MARKET_SHOCK_RETURN_CUT:.0%})")
        if self.private_school:
            labels.append("private school / study abroad")
        return labels

    def apply(self, profile: HouseholdProfile) -> HouseholdProfile:
        """Return a new profile with the selected stresses applied."""
        changes = {}
        if self.part_time:
            changes["salary_2"] = profile.salary_2 * PART_TIME_FACTOR
        if self.market_shock:
            changes["investment_return"] = max(0.0, profile.investment_return - MARKET_SHOCK_RETURN_CUT)
        if self.private_school:
            changes["university_support"] = profile.university_support + PRIVATE_SCHOOL_UNIVERSITY_EXTRA
            changes["monthly_school_activity_cost"] = (
                profile.monthly_school_activity_cost * PRIVATE_SCHOOL_ACTIVITY_FACTOR
            )
        if not changes:
            return profile
        return dataclasses.replace(profile, **changes)
