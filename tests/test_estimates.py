"""Tests for location cost estimates and profile overrides."""

from family_plan_ch import CostEstimate, HouseholdProfile, apply_cost_estimate, estimate_location_costs


class TestEstimateLocationCosts:
    def test_zurich_comfortable(self):
        e = estimate_location_costs("Zürich", 2, "comfortable")
        assert e == CostEstimate(
            monthly_housing_cost=2_300,
            monthly_living_cost=8_280,
            monthly_daycare_cost=2_875,
            monthly_school_activity_cost=460,
        )

    def test_large_family_unknown_canton(self):
        e = estimate_location_costs("Ticino", 4, "basic")
        assert e.monthly_housing_cost == 2_100
        assert e.monthly_living_cost == 6_300
        assert e.monthly_daycare_cost == 2_000
        assert e.monthly_school_activity_cost == 250

    def test_zug_more_expensive_than_bern(self):
        zug = estimate_location_costs("Zug", 2, "premium")
        bern = estimate_location_costs("Bern", 2, "premium")
        assert zug.monthly_housing_cost > bern.monthly_housing_cost

    def test_unknown_lifestyle(self):
        assert estimate_location_costs("Zürich", 2, "lavish") is None


class TestApplyCostEstimate:
    def setup_method(self):
        self.p = HouseholdProfile()

    def test_none_keeps_profile(self):
        assert apply_cost_estimate(self.p, None) is self.p

    def test_estimate_applied(self):
        e = estimate_location_costs("Zug", 2, "comfortable")
        q = apply_cost_estimate(self.p, e)
        assert q.monthly_housing_cost == 2_400
        assert q.monthly_daycare_cost == 3_000
        assert q.salary_1 == self.p.salary_1

    def test_partial_mapping(self):
        q = apply_cost_estimate(self.p, {"monthly_housing_cost": "2500"})
        assert q.monthly_housing_cost == 2_500
        assert q.monthly_living_cost == self.p.monthly_living_cost

    def test_invalid_values_ignored(self, capsys):
        q = apply_cost_estimate(self.p, {
            "monthly_housing_cost": -5,
            "monthly_living_cost": "abc",
            "monthly_daycare_cost": True,
            "monthly_school_activity_cost": float("nan"),
            "pool_cost": 300,
        })
        assert q is self.p
        err = capsys.readouterr().err
        assert "monthly_housing_cost" in err
        assert "pool_cost" in err

    def test_unexpected_type(self, capsys):
        assert apply_cost_estimate(self.p, 42) is self.p
        assert "unexpected type" in capsys.readouterr().err
