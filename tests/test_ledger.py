"""Tests for the multi-bucket wealth ledger."""

import pytest
from family_plan_ch.ledger import WealthLedger


class TestFromSavings:
    def test_split(self):
        ledger = WealthLedger.from_savings(100_000, 50_000, 10_000)
        assert ledger.cash == pytest.approx(30_000)
        assert ledger.invested == pytest.approx(70_000)
        assert ledger.free_assets == pytest.approx(100_000)
        assert ledger.pension_wealth == 60_000
        assert ledger.total == pytest.approx(160_000)


class TestAdvanceWorking:
    def test_surplus_split_and_pillar2(self):
        ledger = WealthLedger(pillar2=10_000)
        step = ledger.advance_working(
            net_income=100_000, expenses=50_000, gross_salaries=100_000,
            planned_pillar3=10_000, investment_return=0.0,
        )
        assert step.pillar3_contribution == 10_000
        assert step.net_cash_flow == pytest.approx(40_000)
        assert step.unfunded_shortfall == 0
        assert ledger.cash == pytest.approx(12_000)
        assert ledger.invested == pytest.approx(28_000)
        assert ledger.pillar2 == pytest.approx(10_200 + 12_000)
        assert ledger.pillar3 == pytest.approx(10_000)

    def test_contribution_capped_by_income(self):
        ledger = WealthLedger()
        step = ledger.advance_working(5_000, 0, 0, 10_000, 0.0)
        assert step.pillar3_contribution == 5_000
        assert step.net_cash_flow == 0

    def test_no_income_no_contribution(self):
        ledger = WealthLedger(cash=1_000)
        step = ledger.advance_working(0, 0, 0, 10_000, 0.0)
        assert step.pillar3_contribution == 0
        assert ledger.pillar3 == 0

    def test_invested_compounds_after_surplus(self):
        ledger = WealthLedger(invested=1_000)
        ledger.advance_working(1_000, 0, 0, 0, 0.10)
        assert ledger.cash == pytest.approx(300)
        assert ledger.invested == pytest.approx((1_000 + 700) * 1.10)

    def test_deficit_cash_first(self):
        ledger = WealthLedger(cash=1_000, invested=5_000)
        step = ledger.advance_working(0, 3_000, 0, 0, 0.0)
        assert step.unfunded_shortfall == 0
        assert ledger.cash == 0
        assert ledger.invested == pytest.approx(3_000)

    def test_deficit_beyond_free_assets(self):
        ledger = WealthLedger(cash=1_000, invested=5_000, pillar2=9_000, pillar3=4_000)
        step = ledger.advance_working(0, 10_000, 0, 0, 0.0)
        assert step.net_cash_flow == -10_000
        assert step.unfunded_shortfall == pytest.approx(4_000)
        assert ledger.cash == 0
        assert ledger.invested == 0
        # pension capital is never used to cover a deficit
        assert ledger.pillar2 == pytest.approx(9_180)
        assert ledger.pillar3 == 4_000


class TestRetirement:
    def test_convert_pillar2(self):
        ledger = WealthLedger(pillar2=80_000)
        assert ledger.convert_pillar2() == 80_000
        assert ledger.pillar2 == 0

    def test_surplus_split_like_working_years(self):
        ledger = WealthLedger(pillar3=10_000)
        step = ledger.advance_retired(20_000, 10_000, 1_000, 0.10)
        assert step.net_cash_flow == 10_000
        assert ledger.cash == pytest.approx(3_000)
        assert ledger.invested == pytest.approx(7_000 * 1.10)
        assert ledger.pillar3 == pytest.approx(9_000 * 1.03)

    def test_pillar3_never_negative(self):
        ledger = WealthLedger(pillar3=500)
        ledger.advance_retired(0, 0, 1_000, 0.05)
        assert ledger.pillar3 == 0

    def test_retired_deficit(self):
        ledger = WealthLedger(cash=2_000, invested=10_000)
        step = ledger.advance_retired(10_000, 15_000, 0, 0.0)
        assert step.unfunded_shortfall == 0
        assert ledger.cash == 0
        assert ledger.invested == pytest.approx(7_000)
