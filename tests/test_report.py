"""Tests for report building, rendering and chart output."""

import datetime

import pytest
from family_plan_ch import HouseholdProfile, PensionPhase, ScenarioResult, WhatIf, YearlySnapshot
from family_plan_ch.report import (
    CAUSE_CHILDREN,
    CAUSE_RETIREMENT,
    build_report_context,
    find_deficit_periods,
    fmt_chf,
    fmt_pct,
    render_report,
    timeline_events,
)

START_YEAR = 2026
TODAY = datetime.date(2026, 1, 15)


def _snapshot(age, net_cash_flow, children=0.0, notes=()):
    return YearlySnapshot(
        age=age, year=START_YEAR + age - 40, phase=PensionPhase.WORKING, active_children=0,
        gross_income=0, net_income=0,
        housing_expenses=10_000, living_expenses=10_000, children_expenses=children,
        net_cash_flow=net_cash_flow, notes=notes,
    )


class TestFormat:
    def test_chf(self):
        assert fmt_chf(12_345.6) == "CHF 12,346"
        assert fmt_chf(-500) == "-CHF 500"

    def test_pct(self):
        assert fmt_pct(0.045) == "4.5%"


class TestDeficitPeriods:
    def setup_method(self):
        self.result = ScenarioResult("neutral", snapshots=[
            _snapshot(40, 100),
            _snapshot(41, -100, children=20_000),
            _snapshot(42, -100, children=20_000),
            _snapshot(43, 100),
            _snapshot(44, -100),
        ])

    def test_grouping(self):
        periods = find_deficit_periods(self.result, retirement_age=44)
        assert len(periods) == 2
        assert (periods[0].start_age, periods[0].end_age) == (41, 42)
        assert (periods[0].start_year, periods[0].end_year) == (2027, 2028)
        assert (periods[1].start_age, periods[1].end_age) == (44, 44)

    def test_causes(self):
        periods = find_deficit_periods(self.result, retirement_age=44)
        assert periods[0].cause == CAUSE_CHILDREN
        assert periods[1].cause == CAUSE_RETIREMENT

    def test_no_deficit(self):
        r = ScenarioResult("neutral", snapshots=[_snapshot(40, 1), _snapshot(41, 1)])
        assert find_deficit_periods(r, 65) == []

    def test_timeline(self):
        r = ScenarioResult("neutral", snapshots=[_snapshot(40, 1), _snapshot(41, 1, notes=("a", "b"))])
        assert timeline_events(r) == [(2027, 41, "a, b")]


class TestReport:
    def setup_method(self):
        self.ctx = build_report_context(HouseholdProfile(current_rooms=2.5),
                                        start_year=START_YEAR, generated_on=TODAY)

    def test_context(self):
        assert set(self.ctx.results) == {"pessimistic", "neutral", "optimistic"}
        assert self.ctx.chart_paths == {}
        assert not self.ctx.whatif.active

    def test_sections(self):
        md = render_report(self.ctx)
        assert md.startswith("# Family Financial Planning Report")
        for heading in (
            "## 1. Overview and Diagnosis",
            "## 2. Cash-Flow Narrative",
            "## 3. Recommendations",
            "## 4. Timeline of Key Events",
            "## 5. Scenario Comparison at 90",
            "## 6. Early Retirement",
        ):
            assert heading in md
        assert "2026-01-15" in md
        assert "## Charts" not in md

    def test_relocation_mentioned(self):
        md = render_report(self.ctx)
        assert "larger home" in md
        assert "one-time rent increase of 30%" in md

    def test_pillar3_gap(self):
        md = render_report(self.ctx)
        assert "CHF 4,056" in md

    def test_cost_per_child(self):
        md = render_report(self.ctx)
        assert "Raising one child until 25 costs about CHF 367,200" in md

    def test_whatif(self):
        ctx = build_report_context(HouseholdProfile(), whatif=WhatIf(part_time=True),
                                   start_year=START_YEAR, generated_on=TODAY)
        assert ctx.profile.salary_2 == pytest.approx(45_000)
        assert "What-if stresses applied" in render_report(ctx)

    def test_progress_on_stderr(self, capsys):
        build_report_context(HouseholdProfile(), start_year=START_YEAR, generated_on=TODAY)
        captured = capsys.readouterr()
        assert "running scenarios" in captured.err
        assert captured.out == ""


class TestCharts:
    def test_files_written(self, tmp_path):
        ctx = build_report_context(HouseholdProfile(), start_year=START_YEAR,
                                   generated_on=TODAY, chart_dir=tmp_path, name="30")
        assert set(ctx.chart_paths) == {"scenarios", "wealth", "cashflow"}
        assert ctx.chart_paths["scenarios"] == tmp_path / "scenarios-30.png"
        for path in ctx.chart_paths.values():
            assert path.exists()
        assert "## Charts" in render_report(ctx)

    def test_empty_results(self, tmp_path):
        from family_plan_ch.charts import plot_scenarios, plot_wealth_buckets

        with pytest.raises(ValueError):
            plot_scenarios({}, tmp_path)
        with pytest.raises(ValueError):
            plot_wealth_buckets(ScenarioResult("neutral"), tmp_path)
