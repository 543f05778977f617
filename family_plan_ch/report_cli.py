"""CLI entry point for report and chart generation."""

import argparse
import dataclasses
import sys
from pathlib import Path

from family_plan_ch.config import build_profile, build_whatif, parse_args
from family_plan_ch.params import check_profile
from family_plan_ch.report import build_report_context, render_report
from family_plan_ch.whatif import WhatIf


def _add_report_args(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--name", type=str, default="",
        help="output filename suffix (e.g. 30 → report-30.md)",
    )
    parser.add_argument(
        "--output", type=Path, default=Path("reports"),
        help="report output directory (default: reports)",
    )
    parser.add_argument(
        "--chart-dir", type=Path, default=Path("reports/charts"),
        help="chart output directory (default: reports/charts)",
    )
    parser.add_argument(
        "--no-charts", action="store_true",
        help="skip chart generation",
    )
    parser.add_argument(
        "--start-year", type=int, default=None,
        help="calendar year of the first simulated year (default: this year)",
    )


def main():
    r, args = parse_args("Family financial planning report", _add_report_args)
    whatif = build_whatif(r)
    try:
        # What-if stresses are applied by the report so it can list them
        profile = build_profile({**r, **{f.name: False for f in dataclasses.fields(WhatIf)}})
        check_profile(whatif.apply(profile))
    except ValueError as e:
        print(e, file=sys.stderr)
        raise SystemExit(1)

    suffix = f"-{args.name}" if args.name else ""
    out_path = args.output / f"report{suffix}.md"
    print(f"generating report → {out_path}", file=sys.stderr)

    ctx = build_report_context(
        profile,
        whatif=whatif,
        start_year=args.start_year,
        chart_dir=None if args.no_charts else args.chart_dir,
        name=args.name,
    )
    md = render_report(ctx)

    args.output.mkdir(parents=True, exist_ok=True)
    out_path.write_text(md, encoding="utf-8")
    print("done", file=sys.stderr)


if __name__ == "__main__":
    main()
