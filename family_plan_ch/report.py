"""Template-based advisory report.

Builds a ReportContext from projection results and renders a Markdown report
using Python f-strings. Reads results only; never feeds back into the engine.
"""

from __future__ import annotations

import datetime
import sys
from dataclasses import dataclass, field
from pathlib import Path

from family_plan_ch.charts import plot_cashflow, plot_scenarios, plot_wealth_buckets
from family_plan_ch.children import lifetime_cost_per_child
from family_plan_ch.housing import HOUSEHOLD_ADULTS, ROOM_TOLERANCE
from family_plan_ch.params import HouseholdProfile
from family_plan_ch.scenarios import SCENARIO_ORDER, run_scenarios
from family_plan_ch.simulation import (
    EARLY_RETIREMENT_MAX_AGE,
    EARLY_RETIREMENT_MIN_AGE,
    NOTE_RELOCATED,
    ScenarioResult,
    find_earliest_retirement_age,
)
from family_plan_ch.tax import PILLAR3_MAX_ANNUAL, pillar3_gap, pillar3_tax_saving
from family_plan_ch.whatif import WhatIf

TIMELINE_MAX_EVENTS = 8
CHILD_COST_CAUSE_SHARE = 0.30  # children > 30% of expenses → childcare/education

CAUSE_CHILDREN = "childcare and education costs"
CAUSE_RETIREMENT = "insufficient retirement income"
CAUSE_GENERAL = "general expenses"

# ---------------------------------------------------------------------------
# Format helpers
# ---------------------------------------------------------------------------


def fmt_chf(v: float) -> str:
    """12345.6 → "CHF 12,346" """
    sign = "-" if v < 0 else ""
    return f"{sign}CHF {abs(v):,.0f}"


def fmt_pct(v: float) -> str:
    """0.045 → "4.5%" """
    return f"{v * 100:.1f}%"


def fmt_status(r: ScenarioResult) -> str:
    if r.is_viable:
        return "viable"
    return f"depleted at {r.depleted_age}"


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DeficitPeriod:
    start_year: int
    end_year: int
    start_age: int
    end_age: int
    cause: str


@dataclass
class ReportContext:
    profile: HouseholdProfile
    results: dict[str, ScenarioResult]
    early_retirement_age: int | None
    generated_on: datetime.date
    whatif: WhatIf = field(default_factory=WhatIf)
    chart_paths: dict[str, Path] = field(default_factory=dict)

    @property
    def neutral(self) -> ScenarioResult:
        return self.results["neutral"]


def _deficit_cause(snapshot, retirement_age: int) -> str:
    if snapshot.children_expenses > snapshot.total_expenses * CHILD_COST_CAUSE_SHARE:
        return CAUSE_CHILDREN
    if snapshot.age >= retirement_age:
        return CAUSE_RETIREMENT
    return CAUSE_GENERAL


def find_deficit_periods(result: ScenarioResult, retirement_age: int) -> list[DeficitPeriod]:
    """Group consecutive deficit years; the cause is judged on the last year of each run."""
    periods = []
    run = []
    for snapshot in result.snapshots + [None]:
        if snapshot is not None and snapshot.is_deficit:
            run.append(snapshot)
            continue
        if run:
            periods.append(DeficitPeriod(
                start_year=run[0].year,
                end_year=run[-1].year,
                start_age=run[0].age,
                end_age=run[-1].age,
                cause=_deficit_cause(run[-1], retirement_age),
            ))
            run = []
    return periods


def timeline_events(result: ScenarioResult) -> list[tuple[int, int, str]]:
    """[(year, age, notes), ...] for every year carrying a note."""
    return [
        (s.year, s.age, ", ".join(s.notes))
        for s in result.snapshots
        if s.notes
    ]


def build_report_context(
    profile: HouseholdProfile,
    whatif: WhatIf | None = None,
    start_year: int | None = None,
    generated_on: datetime.date | None = None,
    chart_dir: Path | None = None,
    name: str = "",
) -> ReportContext:
    """Run all scenarios and the early-retirement search, optionally render charts.

    `profile` is the household as entered; the what-if stresses (if any) are
    applied here so the report can name them.
    """
    whatif = whatif or WhatIf()
    stressed = whatif.apply(profile)
    if start_year is None:
        start_year = datetime.date.today().year

    print("running scenarios...", file=sys.stderr)
    results = run_scenarios(stressed, start_year=start_year)
    print(
        f"searching earliest retirement age ({EARLY_RETIREMENT_MIN_AGE}-{EARLY_RETIREMENT_MAX_AGE})...",
        file=sys.stderr,
    )
    early_age = find_earliest_retirement_age(stressed, start_year=start_year)

    ctx = ReportContext(
        profile=stressed,
        results=results,
        early_retirement_age=early_age,
        generated_on=generated_on or datetime.date.today(),
        whatif=whatif,
    )
    if chart_dir is not None:
        print(f"writing charts to {chart_dir}...", file=sys.stderr)
        ctx.chart_paths = {
            "scenarios": plot_scenarios(results, chart_dir, name),
            "wealth": plot_wealth_buckets(ctx.neutral, chart_dir, name),
            "cashflow": plot_cashflow(ctx.neutral, chart_dir, name),
        }
    return ctx


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_title(ctx: ReportContext) -> str:
    p = ctx.profile
    lines = [
        "# Family Financial Planning Report",
        "",
        f"**Date:** {ctx.generated_on.isoformat()} | **Canton:** {p.canton} | "
        f"**Lifestyle:** {p.lifestyle.upper()}",
        "",
    ]
    if ctx.whatif.active:
        lines.append(f"**What-if stresses applied:** {'; '.join(ctx.whatif.labels())}")
        lines.append("")
    return "\n".join(lines)


def _render_overview(ctx: ReportContext) -> str:
    p = ctx.profile
    neutral = ctx.neutral
    at_retirement = neutral.snapshot_at(p.retirement_age)
    wealth_at_retirement = at_retirement.total_wealth if at_retirement else neutral.final_wealth
    children_total = sum(s.children_expenses for s in neutral.snapshots)
    verdict = "🟢 VIABLE" if neutral.is_viable else "🔴 VULNERABLE"

    lines = [
        "## 1. Overview and Diagnosis",
        "",
        f"Under neutral assumptions the plan is **{verdict}**.",
        "",
        "**Key figures:**",
        f"- **Wealth at retirement ({p.retirement_age}):** {fmt_chf(wealth_at_retirement)}",
        f"- **Wealth at 90:** {fmt_chf(neutral.final_wealth)} (peak {fmt_chf(neutral.peak_wealth)})",
    ]
    relocation = next((s for s in neutral.snapshots if NOTE_RELOCATED in s.notes), None)
    if relocation is not None:
        lines.append(
            f"- **Housing:** a move to a larger home is expected around {relocation.year} "
            f"(age {relocation.age}) to fit the family."
        )
    lines.append(f"- **Total cost of children:** {fmt_chf(children_total)} (until each child turns 25).")
    if neutral.retirement is not None:
        r = neutral.retirement
        lines.append(
            f"- **Pension at retirement (gross/year):** public {fmt_chf(r.public_annual)}, "
            f"occupational {fmt_chf(r.occupational_annual)}, private {fmt_chf(r.private_annual)}"
        )
    if not neutral.is_viable and neutral.total_unfunded_shortfall > 0:
        lines.append(
            f"- **Uncovered shortfall:** {fmt_chf(neutral.total_unfunded_shortfall)} of expenses "
            "could not be paid from free assets."
        )
    lines.append("")
    return "\n".join(lines)


def _render_cashflow(ctx: ReportContext) -> str:
    periods = find_deficit_periods(ctx.neutral, ctx.profile.retirement_age)
    lines = ["## 2. Cash-Flow Narrative", ""]
    if not periods:
        lines.append(
            "✅ **Sustainable:** savings stay positive for the whole projection."
        )
    else:
        lines.append("⚠️ **Periods of financial strain (deficit):**")
        for period in periods:
            lines.append(
                f"- **{period.start_year}–{period.end_year}** (age {period.start_age}–{period.end_age}): "
                f"negative cash flow mainly caused by **{period.cause}**; savings are drawn down."
            )
        lines.append("")
        lines.append(
            "*A temporary deficit is acceptable when earlier savings cover it, "
            "as is typical during the daycare years.*"
        )
    lines.append("")
    return "\n".join(lines)


def _render_recommendations(ctx: ReportContext) -> str:
    p = ctx.profile
    gap = pillar3_gap(p.pillar3_contribution_1, p.pillar3_contribution_2)
    lines = ["## 3. Recommendations", "", "### Pillar 3 and taxes"]
    if gap > 0:
        lines.append(f"🚨 The pillar-3 deduction is not fully used: the gap is {fmt_chf(gap)} per year.")
        lines.append(
            f"> Filling it would save roughly **{fmt_chf(pillar3_tax_saving(gap))} in taxes every year**."
        )
    else:
        lines.append(
            f"✅ Both partners contribute the maximum ({fmt_chf(PILLAR3_MAX_ANNUAL * 2)} per year in total)."
        )

    lines.extend(["", "### Housing"])
    if p.housing_status == "rent":
        lines.append(f"Current rent is {fmt_chf(p.monthly_housing_cost)} per month.")
    if HOUSEHOLD_ADULTS + p.total_children > p.current_rooms + ROOM_TOLERANCE:
        lines.append(
            f"With {p.total_children} children planned and {p.current_rooms:g} rooms, the projection "
            "includes a one-time rent increase of 30% when the family outgrows the home."
        )
    else:
        lines.append("The current home fits the planned family size.")

    lines.extend(["", "### Education"])
    if p.total_children > 0:
        lines.append(
            f"University support is modelled at {fmt_chf(p.university_support)} "
            f"({p.university_cost_policy}) per child. Studying in another canton or abroad "
            "can cost CHF 30,000–40,000 per year."
        )
        lines.append(
            f"Raising one child until 25 costs about {fmt_chf(lifetime_cost_per_child(p))} "
            "at today's prices (daycare, school and university support)."
        )
    else:
        lines.append("No children planned: no education costs are modelled.")
    lines.append("")
    return "\n".join(lines)


def _render_timeline(ctx: ReportContext) -> str:
    events = timeline_events(ctx.neutral)
    if not events:
        return ""
    lines = ["## 4. Timeline of Key Events", "", "| Year | Age | Event |", "| :--- | :--- | :--- |"]
    for year, age, note in events[:TIMELINE_MAX_EVENTS]:
        lines.append(f"| **{year}** | {age} | {note} |")
    lines.append("")
    return "\n".join(lines)


def _render_scenarios(ctx: ReportContext) -> str:
    lines = [
        "## 5. Scenario Comparison at 90",
        "",
        "| Scenario | Final wealth | Peak wealth | Status |",
        "| :--- | ---: | ---: | :--- |",
    ]
    for scenario in SCENARIO_ORDER:
        r = ctx.results.get(scenario)
        if r is None:
            continue
        lines.append(
            f"| {scenario.capitalize()} | {fmt_chf(r.final_wealth)} | {fmt_chf(r.peak_wealth)} | {fmt_status(r)} |"
        )
    lines.append("")
    return "\n".join(lines)


def _render_early_retirement(ctx: ReportContext) -> str:
    planned = ctx.profile.retirement_age
    age = ctx.early_retirement_age
    lines = ["## 6. Early Retirement", ""]
    if age is None:
        lines.append(
            f"No retirement age between {EARLY_RETIREMENT_MIN_AGE} and {EARLY_RETIREMENT_MAX_AGE} "
            "keeps the plan solvent with a safety buffer under neutral assumptions."
        )
    elif age < planned:
        lines.append(f"Retiring at **{age}** ({planned - age} years early) remains sustainable.")
    else:
        lines.append(f"Earliest sustainable retirement age is **{age}**: no room to retire before {planned}.")
    lines.append("")
    return "\n".join(lines)


def _render_charts(ctx: ReportContext) -> str:
    if not ctx.chart_paths:
        return ""
    lines = ["## Charts", ""]
    for label, path in ctx.chart_paths.items():
        lines.append(f"![{label}]({path.as_posix()})")
    lines.append("")
    return "\n".join(lines)


def render_report(ctx: ReportContext) -> str:
    """Render a complete Markdown report from a ReportContext."""
    sections = [
        _render_title(ctx),
        _render_overview(ctx),
        _render_cashflow(ctx),
        _render_recommendations(ctx),
        _render_timeline(ctx),
        _render_scenarios(ctx),
        _render_early_retirement(ctx),
        _render_charts(ctx),
    ]
    return "\n".join(s for s in sections if s)
