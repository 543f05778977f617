"""TOML config loader with CLI > config > default resolution."""

import argparse
import dataclasses
import sys
import tomllib
from pathlib import Path
from typing import Callable

from family_plan_ch.estimates import apply_cost_estimate, estimate_location_costs
from family_plan_ch.params import (
    CAREER_STAGES,
    HOUSING_STATUSES,
    LIFESTYLES,
    UNIVERSITY_POLICIES,
    HouseholdProfile,
    check_profile,
)
from family_plan_ch.whatif import WhatIf

DEFAULT_CONFIG_PATH = Path("config.toml")

_PROFILE_DEFAULTS = {f.name: f.default for f in dataclasses.fields(HouseholdProfile)}

DEFAULTS = {
    **_PROFILE_DEFAULTS,
    "estimate_costs": False,
    "cost_estimate": None,
    "part_time": False,
    "market_shock": False,
    "private_school": False,
}

# Rates may be written as percentages in the config file (4.5 → 0.045, 1 → 0.01)
_RATE_KEYS = ("expected_salary_increase", "investment_return", "housing_cost_increase")


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    for key in _RATE_KEYS:
        v = raw.get(key)
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v >= 1:
            raw[key] = v / 100
    # Older files carry one pillar-2/pillar-3 value for the household → earner 1
    for legacy, target in [("pillar2_value", "pillar2_balance_1"), ("pillar3_value", "pillar3_balance_1")]:
        if legacy in raw:
            v = raw.pop(legacy)
            raw.setdefault(target, v)
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared household flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="config file (default: config.toml)")
    parser.add_argument("--current-age", type=int, default=None, help=f"current age (default: {d['current_age']})")
    parser.add_argument("--retirement-age", type=int, default=None, help=f"planned retirement age (default: {d['retirement_age']})")
    parser.add_argument("--current-children", type=int, default=None, help=f"children already born (default: {d['current_children']})")
    parser.add_argument("--future-children", type=int, default=None, help=f"children planned (default: {d['future_children']})")
    parser.add_argument("--first-child-birth-year-offset", type=int, default=None, help=f"years until the first planned birth (default: {d['first_child_birth_year_offset']})")
    parser.add_argument("--child-spacing-years", type=int, default=None, help=f"years between planned births (default: {d['child_spacing_years']})")
    parser.add_argument("--salary-1", type=float, default=None, help=f"earner 1 gross salary CHF/year (default: {d['salary_1']:,.0f})")
    parser.add_argument("--salary-2", type=float, default=None, help=f"earner 2 gross salary CHF/year (default: {d['salary_2']:,.0f})")
    parser.add_argument("--career-stage-1", choices=CAREER_STAGES, default=None, help=f"earner 1 career stage (default: {d['career_stage_1']})")
    parser.add_argument("--career-stage-2", choices=CAREER_STAGES, default=None, help=f"earner 2 career stage (default: {d['career_stage_2']})")
    parser.add_argument("--annual-bonus", type=float, default=None, help=f"gross bonus CHF/year (default: {d['annual_bonus']:,.0f})")
    parser.add_argument("--expected-salary-increase", type=float, default=None, help=f"baseline inflation/growth rate (default: {d['expected_salary_increase']})")
    parser.add_argument("--current-savings", type=float, default=None, help=f"free savings CHF (default: {d['current_savings']:,.0f})")
    parser.add_argument("--investment-return", type=float, default=None, help=f"annual investment return (default: {d['investment_return']})")
    parser.add_argument("--pillar2-balance-1", type=float, default=None, help=f"earner 1 pillar-2 capital (default: {d['pillar2_balance_1']:,.0f})")
    parser.add_argument("--pillar2-balance-2", type=float, default=None, help=f"earner 2 pillar-2 capital (default: {d['pillar2_balance_2']:,.0f})")
    parser.add_argument("--pillar3-balance-1", type=float, default=None, help=f"earner 1 pillar-3 capital (default: {d['pillar3_balance_1']:,.0f})")
    parser.add_argument("--pillar3-balance-2", type=float, default=None, help=f"earner 2 pillar-3 capital (default: {d['pillar3_balance_2']:,.0f})")
    parser.add_argument("--pillar3-contribution-1", type=float, default=None, help=f"earner 1 planned pillar-3 CHF/year (default: {d['pillar3_contribution_1']:,.0f})")
    parser.add_argument("--pillar3-contribution-2", type=float, default=None, help=f"earner 2 planned pillar-3 CHF/year (default: {d['pillar3_contribution_2']:,.0f})")
    parser.add_argument("--housing-status", choices=HOUSING_STATUSES, default=None, help=f"rent or own (default: {d['housing_status']})")
    parser.add_argument("--monthly-housing-cost", type=float, default=None, help=f"rent CHF/month (default: {d['monthly_housing_cost']:,.0f})")
    parser.add_argument("--current-rooms", type=float, default=None, help=f"rooms in the current home (default: {d['current_rooms']})")
    parser.add_argument("--housing-cost-increase", type=float, default=None, help=f"annual rent increase (default: {d['housing_cost_increase']})")
    parser.add_argument("--monthly-living-cost", type=float, default=None, help=f"living cost CHF/month (default: {d['monthly_living_cost']:,.0f})")
    parser.add_argument("--monthly-daycare-cost", type=float, default=None, help=f"daycare per child CHF/month (default: {d['monthly_daycare_cost']:,.0f})")
    parser.add_argument("--monthly-school-activity-cost", type=float, default=None, help=f"school/activities per child CHF/month (default: {d['monthly_school_activity_cost']:,.0f})")
    parser.add_argument("--yearly-travel-budget", type=float, default=None, help=f"travel CHF/year (default: {d['yearly_travel_budget']:,.0f})")
    parser.add_argument("--university-support", type=float, default=None, help=f"university support per child CHF (default: {d['university_support']:,.0f})")
    parser.add_argument("--university-cost-policy", choices=UNIVERSITY_POLICIES, default=None, help="annual: paid every year 19-24, spread: total over 4 years (default: annual)")
    parser.add_argument("--canton", type=str, default=None, help=f"canton for the tax factor (default: {d['canton']})")
    parser.add_argument("--lifestyle", choices=LIFESTYLES, default=None, help=f"lifestyle tier (default: {d['lifestyle']})")
    parser.add_argument("--estimate-costs", action="store_true", default=None, help="replace housing/living/childcare costs with a location estimate")
    parser.add_argument("--part-time", action="store_true", default=None, help="what-if: second earner works 50%%")
    parser.add_argument("--market-shock", action="store_true", default=None, help="what-if: investment return -2 points")
    parser.add_argument("--private-school", action="store_true", default=None, help="what-if: private school / study abroad")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def build_whatif(r: dict) -> WhatIf:
    return WhatIf(
        part_time=bool(r["part_time"]),
        market_shock=bool(r["market_shock"]),
        private_school=bool(r["private_school"]),
    )


def build_profile(r: dict) -> HouseholdProfile:
    """Build and validate a HouseholdProfile from a resolved config dict.

    Cost overrides are applied first (generated estimate, then an explicit
    [cost_estimate] table), what-if stresses last. Raises ValueError if the
    resulting profile is invalid.
    """
    profile = HouseholdProfile(**{key: r[key] for key in _PROFILE_DEFAULTS})
    if r["estimate_costs"]:
        profile = apply_cost_estimate(
            profile,
            estimate_location_costs(profile.canton, profile.total_children, profile.lifestyle),
        )
    profile = apply_cost_estimate(profile, r["cost_estimate"])
    profile = build_whatif(r).apply(profile)
    check_profile(profile)
    return profile


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, namespace). namespace carries extra CLI args
    added via add_args_fn.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    config = load_config(args.config)
    return resolve(args, config), args


def resolve_config_file(path: Path | None) -> dict:
    """Load and resolve a config file without CLI args."""
    ns = argparse.Namespace(**{k: None for k in DEFAULTS})
    return resolve(ns, load_config(path))
