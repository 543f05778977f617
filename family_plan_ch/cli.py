"""CLI entry point for the three-scenario projection."""

import argparse
import sys

from family_plan_ch.config import build_profile, build_whatif, parse_args
from family_plan_ch.params import END_AGE, HouseholdProfile
from family_plan_ch.report import fmt_chf, fmt_pct, fmt_status
from family_plan_ch.scenarios import SCENARIO_ORDER, SCENARIOS, run_scenarios
from family_plan_ch.simulation import (
    EARLY_RETIREMENT_MAX_AGE,
    EARLY_RETIREMENT_MIN_AGE,
    ScenarioResult,
    find_earliest_retirement_age,
)
from family_plan_ch.tax import canton_net_factor

LOG_INTERVAL = 5


def _add_cli_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--scenario", choices=SCENARIO_ORDER, default="neutral",
        help="scenario for the yearly log (default: neutral)",
    )
    parser.add_argument(
        "--start-year", type=int, default=None,
        help="calendar year of the first simulated year (default: this year)",
    )


def _print_header(profile: HouseholdProfile, whatif_labels: list[str]):
    p = profile
    years = END_AGE - p.current_age
    print("=" * 100)
    print(f"Family financial projection (age {p.current_age}-{END_AGE}, {years} years)")
    print(
        f"  Salaries: {fmt_chf(p.salary_1)} ({p.career_stage_1}) + {fmt_chf(p.salary_2)} ({p.career_stage_2})"
        f" / bonus {fmt_chf(p.annual_bonus)} / {p.canton} net factor {canton_net_factor(p.canton):.2f}"
    )
    print(
        f"  Savings: {fmt_chf(p.current_savings)} / pillar 2 {fmt_chf(p.pillar2_balance)}"
        f" / pillar 3 {fmt_chf(p.pillar3_balance)} (+{fmt_chf(p.planned_pillar3_contribution)}/year)"
    )
    print(
        f"  Growth: inflation {fmt_pct(p.expected_salary_increase)} / return {fmt_pct(p.investment_return)}"
        f" / rent +{fmt_pct(p.housing_cost_increase)}"
    )
    if p.total_children:
        print(
            f"  Children: {p.current_children} now + {p.future_children} planned"
            f" (first in {p.first_child_birth_year_offset} years, every {p.child_spacing_years} years)"
        )
    else:
        print("  Children: none")
    print(f"  Retirement at {p.retirement_age}")
    if whatif_labels:
        print(f"  What-if: {'; '.join(whatif_labels)}")
    print("=" * 100)
    print()


def print_parameters():
    """Print scenario modifiers."""
    print(f"{'Scenario':<14} {'Salary':>10} {'Return':>10} {'Inflation':>10} {'Expenses':>10}")
    print("-" * 60)
    for name in SCENARIO_ORDER:
        m = SCENARIOS[name]
        print(
            f"{name:<14} {m.salary_growth * 100:>+9.1f}% {m.investment_return * 100:>+9.1f}%"
            f" {m.inflation * 100:>+9.1f}% {m.expense_multiplier:>9.2f}x"
        )
    print()


def print_results(results: dict[str, ScenarioResult], retirement_age: int):
    print(f"{'Scenario':<14} {'At retirement':>16} {'Peak':>16} {'Final (90)':>16}  Status")
    print("-" * 100)
    for name in SCENARIO_ORDER:
        r = results[name]
        at_retirement = r.snapshot_at(retirement_age)
        retirement_wealth = at_retirement.total_wealth if at_retirement else r.final_wealth
        print(
            f"{name:<14} {retirement_wealth:>16,.0f} {r.peak_wealth:>16,.0f}"
            f" {r.final_wealth:>16,.0f}  {fmt_status(r)}"
        )
    print("-" * 100)
    print()


def print_yearly_log(result: ScenarioResult):
    print(f"[Yearly log every {LOG_INTERVAL} years - {result.scenario}]")
    print("-" * 100)
    print(
        f"{'Age':<5} {'Year':<6} {'Net income':>12} {'Housing':>10} {'Children':>10}"
        f" {'Living':>10} {'Cash flow':>11} {'Total wealth':>14}  Notes"
    )
    print("-" * 100)
    last = len(result.snapshots) - 1
    for i, s in enumerate(result.snapshots):
        if i % LOG_INTERVAL and i != last and not s.notes:
            continue
        print(
            f"{s.age:<5} {s.year:<6} {s.net_income:>12,.0f} {s.housing_expenses:>10,.0f}"
            f" {s.children_expenses:>10,.0f} {s.living_expenses:>10,.0f}"
            f" {s.net_cash_flow:>11,.0f} {s.total_wealth:>14,.0f}  {', '.join(s.notes)}"
        )
    print("-" * 100)


def main():
    """Run all scenarios and the early-retirement search."""
    r, args = parse_args("Family financial projection", _add_cli_args)
    try:
        profile = build_profile(r)
    except ValueError as e:
        print(e, file=sys.stderr)
        raise SystemExit(1)

    _print_header(profile, build_whatif(r).labels())
    print_parameters()
    results = run_scenarios(profile, start_year=args.start_year)
    print_results(results, profile.retirement_age)

    early_age = find_earliest_retirement_age(profile, start_year=args.start_year)
    if early_age is None:
        print(
            f"Earliest sustainable retirement: none found"
            f" ({EARLY_RETIREMENT_MIN_AGE}-{EARLY_RETIREMENT_MAX_AGE}, neutral scenario)"
        )
    else:
        print(f"Earliest sustainable retirement: age {early_age} (neutral scenario)")
    print()

    print_yearly_log(results[args.scenario])


if __name__ == "__main__":
    main()
