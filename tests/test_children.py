"""Tests for child ages and the age-band cost schedule."""

import pytest
from family_plan_ch import HouseholdProfile
from family_plan_ch.children import (
    ChildCostSchedule,
    child_cost,
    initial_child_ages,
    lifetime_cost_per_child,
    university_cost_per_year,
)


class TestInitialChildAges:
    def test_existing_and_planned(self):
        p = HouseholdProfile(current_children=2, future_children=2,
                             first_child_birth_year_offset=1, child_spacing_years=2)
        assert initial_child_ages(p) == [2, 4, -1, -3]

    def test_no_children(self):
        assert initial_child_ages(HouseholdProfile(future_children=0)) == []

    def test_birth_this_year(self):
        p = HouseholdProfile(future_children=1, first_child_birth_year_offset=0)
        assert initial_child_ages(p) == [0]


class TestChildCost:
    def setup_method(self):
        self.p = HouseholdProfile()

    def test_unborn(self):
        assert child_cost(-1, self.p) == 0

    def test_daycare_band(self):
        assert child_cost(0, self.p) == 30_000
        assert child_cost(4, self.p) == 30_000

    def test_school_band(self):
        assert child_cost(5, self.p) == 4_800
        assert child_cost(18, self.p) == 4_800

    def test_university_band(self):
        assert child_cost(19, self.p) == 25_000
        assert child_cost(24, self.p) == 25_000

    def test_independent(self):
        assert child_cost(25, self.p) == 0
        assert child_cost(40, self.p) == 0

    def test_lifetime_cost(self):
        assert lifetime_cost_per_child(self.p) == pytest.approx(5 * 30_000 + 14 * 4_800 + 6 * 25_000)


class TestUniversityPolicy:
    def test_annual(self):
        assert university_cost_per_year(HouseholdProfile()) == 25_000

    def test_spread(self):
        p = HouseholdProfile(university_cost_policy="spread")
        assert university_cost_per_year(p) == pytest.approx(6_250)

    def test_basic_lifestyle_cap(self):
        p = HouseholdProfile(lifestyle="basic")
        assert university_cost_per_year(p) == 15_000

    def test_basic_cap_below_spread(self):
        p = HouseholdProfile(lifestyle="basic", university_cost_policy="spread")
        assert university_cost_per_year(p) == pytest.approx(6_250)


class TestChildCostSchedule:
    def test_birth_next_year(self):
        """Daycare starts the year the child is born, not before."""
        p = HouseholdProfile(future_children=1, first_child_birth_year_offset=1,
                             monthly_daycare_cost=2_500)
        schedule = ChildCostSchedule(p)
        assert schedule.advance() == (0, 0)
        assert schedule.advance() == (30_000, 1)

    def test_ages_advance(self):
        p = HouseholdProfile(current_children=1, future_children=0)
        schedule = ChildCostSchedule(p)
        schedule.advance()
        schedule.advance()
        assert schedule.ages == [4]

    def test_child_leaves_at_25(self):
        p = HouseholdProfile(current_children=1, future_children=0)
        schedule = ChildCostSchedule(p)
        for _ in range(22):
            schedule.advance()
        assert schedule.ages == [24]
        assert schedule.advance() == (25_000, 1)
        assert schedule.advance() == (0, 0)
