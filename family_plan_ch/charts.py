"""Chart generation for projection results."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from family_plan_ch.simulation import ScenarioResult

SCENARIO_COLORS = {
    "pessimistic": "#d62728",  # red
    "neutral": "#1f77b4",      # blue
    "optimistic": "#2ca02c",   # green
}

BUCKET_COLORS = {
    "cash": "#8da0cb",
    "invested": "#66c2a5",
    "pillar2": "#fc8d62",
    "pillar3": "#e78ac3",
}

DEFAULT_COLOR = "#7f7f7f"


def _format_chf_axis(ax: plt.Axes):
    """Thousands separators on Y, plus a CHF-million axis on the right."""
    ax.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x:,.0f}")
    )
    ax_right = ax.secondary_yaxis("right")
    ax_right.yaxis.set_major_formatter(
        ticker.FuncFormatter(lambda x, _: f"{x / 1e6:.1f}M" if x != 0 else "0")
    )
    ax_right.set_ylabel("")


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150)
    plt.close(fig)
    return filepath


def _mark_notes(ax: plt.Axes, result: ScenarioResult):
    """Dotted vertical line and label for every life-event note."""
    y_lo, y_hi = ax.get_ylim()
    i = 0
    for snapshot in result.snapshots:
        for note in snapshot.notes:
            ax.axvline(snapshot.age, color="#888888", linewidth=0.7, linestyle=":", alpha=0.6, zorder=3)
            y_pos = y_hi - (y_hi - y_lo) * (0.06 + 0.06 * (i % 4))
            ax.annotate(
                note,
                xy=(snapshot.age, y_pos),
                fontsize=9, color="#333333",
                ha="center", va="bottom",
                bbox=dict(boxstyle="round,pad=0.4", fc="white", ec="#888888", alpha=0.9, linewidth=0.8),
                zorder=10,
            )
            i += 1


def plot_scenarios(results: dict[str, ScenarioResult], output_path: Path, name: str = "") -> Path:
    """Line chart of total wealth per scenario.

    Args:
        results: run_scenarios() output.
        output_path: directory to save the PNG.
        name: optional filename suffix (e.g. "30" → "scenarios-30.png").
    """
    if not results:
        raise ValueError("No results for scenario chart")

    fig, ax = plt.subplots(figsize=(14, 8))
    for scenario, r in results.items():
        ages = [s.age for s in r.snapshots]
        wealth = [s.total_wealth for s in r.snapshots]
        label = scenario if r.is_viable else f"{scenario} (depleted at {r.depleted_age})"
        ax.plot(ages, wealth, label=label, color=SCENARIO_COLORS.get(scenario, DEFAULT_COLOR), linewidth=2)

    retirement = next((r.retirement for r in results.values() if r.retirement), None)
    if retirement is not None:
        ax.axvline(retirement.age, color="black", linewidth=1.2, linestyle="--", alpha=0.6)

    ax.set_xlabel("Age")
    ax.set_ylabel("Total wealth (CHF)")
    ax.set_title("Total wealth by scenario")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_chf_axis(ax)
    return _save(fig, output_path, "scenarios", name)


def plot_wealth_buckets(result: ScenarioResult, output_path: Path, name: str = "") -> Path:
    """Stacked area chart of cash, invested, pillar-2 and pillar-3 balances."""
    if not result.snapshots:
        raise ValueError("No snapshots for wealth chart")

    ages = [s.age for s in result.snapshots]
    fig, ax = plt.subplots(figsize=(14, 8))
    ax.stackplot(
        ages,
        [s.cash for s in result.snapshots],
        [s.invested for s in result.snapshots],
        [s.pillar2 for s in result.snapshots],
        [s.pillar3 for s in result.snapshots],
        labels=["Cash", "Invested", "Pillar 2", "Pillar 3"],
        colors=[BUCKET_COLORS[k] for k in ("cash", "invested", "pillar2", "pillar3")],
        alpha=0.8,
    )
    ax.set_xlabel("Age")
    ax.set_ylabel("Wealth (CHF)")
    ax.set_title(f"Wealth composition ({result.scenario})")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_chf_axis(ax)
    _mark_notes(ax, result)
    return _save(fig, output_path, "wealth", name)


def plot_cashflow(result: ScenarioResult, output_path: Path, name: str = "") -> Path:
    """Stacked yearly expenses against net income."""
    if not result.snapshots:
        raise ValueError("No snapshots for cashflow chart")

    ages = [s.age for s in result.snapshots]
    fig, ax = plt.subplots(figsize=(14, 8))
    ax.stackplot(
        ages,
        [s.housing_expenses for s in result.snapshots],
        [s.living_expenses for s in result.snapshots],
        [s.children_expenses for s in result.snapshots],
        [s.travel_expenses for s in result.snapshots],
        labels=["Housing", "Living", "Children", "Travel"],
        colors=["#8da0cb", "#66c2a5", "#fc8d62", "#ffd92f"],
        alpha=0.75,
    )
    ax.plot(ages, [s.net_income for s in result.snapshots], color="#1f77b4", linewidth=2, label="Net income")
    ax.plot(
        ages,
        [s.net_cash_flow for s in result.snapshots],
        color="#d62728", linewidth=1.8, linestyle="--", label="Net cash flow",
    )
    if result.depleted_age is not None:
        ax.axvline(result.depleted_age, color="#d62728", linewidth=2, linestyle=":")

    ax.axhline(0, color="black", linewidth=1.5)
    ax.set_xlabel("Age")
    ax.set_ylabel("CHF per year")
    ax.set_title(f"Yearly cash flow ({result.scenario})")
    ax.legend(loc="upper right", fontsize=9)
    ax.grid(True, alpha=0.3)
    _format_chf_axis(ax)
    return _save(fig, output_path, "cashflow", name)
