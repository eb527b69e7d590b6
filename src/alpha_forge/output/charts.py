from __future__ import annotations

import logging
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt

from alpha_forge.models.performance import BenchmarkPoint
from alpha_forge.models.report import PortfolioReport

matplotlib.use("Agg")

logger = logging.getLogger(__name__)

COLORS = {
    "low": "#2ca02c",
    "moderate": "#bcbd22",
    "high": "#ff7f0e",
    "extreme": "#d62728",
    "gain": "#2ca02c",
    "loss": "#d62728",
    "portfolio": "#1f77b4",
    "benchmark": "#7f7f7f",
}


def _apply_style(ax: plt.Axes) -> None:
    ax.set_facecolor("white")
    ax.grid(True, alpha=0.3, linestyle="--")
    ax.tick_params(labelsize=9)
    handles, labels = ax.get_legend_handles_labels()
    if handles:
        ax.legend(fontsize=9, loc="upper left")


def _save_figure(fig: plt.Figure, path: Path) -> None:
    fig.savefig(
        path,
        dpi=150,
        bbox_inches="tight",
        facecolor="white",
        edgecolor="none",
    )
    plt.close(fig)


def generate_sector_chart(report: PortfolioReport, output_dir: Path) -> Path | None:
    try:
        sectors = report.risk.sector_concentration
        if not sectors:
            return None

        fig, ax = plt.subplots(figsize=(10, max(3, 0.6 * len(sectors) + 1)))
        fig.suptitle("Sector Concentration", fontsize=14, fontweight="bold")

        names = [s.sector for s in reversed(sectors)]
        weights = [s.weight for s in reversed(sectors)]
        colors = [COLORS[s.risk_level.value] for s in reversed(sectors)]
        ax.barh(names, weights, color=colors, alpha=0.85)
        for threshold in (25, 40, 60):
            ax.axvline(threshold, color="#7f7f7f", linestyle=":", linewidth=0.8)
        ax.set_xlabel("Weight (%)", fontsize=10)
        ax.set_xlim(0, 100)
        _apply_style(ax)

        path = output_dir / f"sectors_{report.as_of.isoformat()}.png"
        _save_figure(fig, path)
        return path
    except Exception:
        logger.warning("Failed to generate sector chart", exc_info=True)
        return None


def generate_scenario_chart(report: PortfolioReport, output_dir: Path) -> Path | None:
    try:
        if not report.analysis or not report.analysis.scenario_analysis:
            return None
        scenarios = report.analysis.scenario_analysis

        fig, ax = plt.subplots(figsize=(10, 4))
        fig.suptitle("Scenario Analysis", fontsize=14, fontweight="bold")

        names = [s.name for s in scenarios]
        changes = [s.change_percent for s in scenarios]
        colors = [COLORS["gain"] if c >= 0 else COLORS["loss"] for c in changes]
        ax.bar(names, changes, color=colors, alpha=0.85)
        ax.axhline(0, color="black", linewidth=0.8)
        ax.set_ylabel("Portfolio change (%)", fontsize=10)
        _apply_style(ax)

        path = output_dir / f"scenarios_{report.as_of.isoformat()}.png"
        _save_figure(fig, path)
        return path
    except Exception:
        logger.warning("Failed to generate scenario chart", exc_info=True)
        return None


def generate_performance_chart(
    points: list[BenchmarkPoint], output_dir: Path
) -> Path | None:
    try:
        if len(points) < 2:
            return None

        fig, ax = plt.subplots(figsize=(12, 5))
        fig.suptitle("Portfolio vs Benchmark", fontsize=14, fontweight="bold")

        dates = [p.date for p in points]
        ax.plot(
            dates,
            [p.portfolio for p in points],
            color=COLORS["portfolio"],
            linewidth=1.4,
            label="Portfolio",
        )
        ax.plot(
            dates,
            [p.benchmark for p in points],
            color=COLORS["benchmark"],
            linewidth=1.0,
            linestyle="--",
            label="Benchmark (10%/yr)",
        )
        ax.set_ylabel("Value (USD)", fontsize=10)
        fig.autofmt_xdate()
        _apply_style(ax)

        path = output_dir / f"performance_{points[-1].date.isoformat()}.png"
        _save_figure(fig, path)
        return path
    except Exception:
        logger.warning("Failed to generate performance chart", exc_info=True)
        return None


def generate_all_charts(
    report: PortfolioReport,
    output_dir: Path,
    history_points: list[BenchmarkPoint] | None = None,
) -> dict[str, Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    charts: dict[str, Path] = {}

    generators = {
        "sectors": generate_sector_chart,
        "scenarios": generate_scenario_chart,
    }
    for name, gen_func in generators.items():
        path = gen_func(report, output_dir)
        if path:
            charts[name] = path

    if history_points:
        path = generate_performance_chart(history_points, output_dir)
        if path:
            charts["performance"] = path

    return charts
