import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path

import numpy as np
from rich.console import Console

from alpha_forge.config import AnalysisConfig, ReferenceData
from alpha_forge.models.common import RiskTolerance
from alpha_forge.models.position import Position
from alpha_forge.models.report import PortfolioReport

logger = logging.getLogger(__name__)
console = Console()

COMMANDS = ("analyze", "advice", "calendar", "performance", "snapshot")


def _add_verbose(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date: {value}") from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="alpha-forge",
        description="Portfolio risk, tax and advisory analytics",
    )
    sub = p.add_subparsers(dest="command")

    # --- analyze (default) ---
    analyze = sub.add_parser("analyze", help="Render the portfolio dashboard")
    analyze.add_argument("positions", type=Path, help="Positions JSON file")
    analyze.add_argument(
        "--other-income",
        type=float,
        default=100_000.0,
        help="Non-portfolio income used for tax bracketing",
    )
    analyze.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for placeholder correlations and holding periods",
    )
    analyze.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="As-of date for calendars (YYYY-MM-DD)",
    )
    analyze.add_argument(
        "--markdown",
        type=Path,
        default=None,
        help="Directory to write a markdown report into",
    )
    analyze.add_argument(
        "--charts",
        action="store_true",
        help="Generate PNG charts alongside the markdown report",
    )
    analyze.add_argument(
        "--history",
        type=Path,
        default=None,
        help="Snapshot history JSON for the performance chart",
    )
    _add_verbose(analyze)

    # --- advice ---
    advice = sub.add_parser("advice", help="Print investment advice")
    advice.add_argument("positions", type=Path, help="Positions JSON file")
    advice.add_argument(
        "--risk-tolerance",
        choices=[t.value for t in RiskTolerance],
        default=RiskTolerance.MODERATE.value,
        help="Investor risk tolerance",
    )
    advice.add_argument("--seed", type=int, default=None)
    _add_verbose(advice)

    # --- calendar ---
    cal = sub.add_parser("calendar", help="Show dividend and earnings calendars")
    cal.add_argument("positions", type=Path, help="Positions JSON file")
    cal.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="As-of date (YYYY-MM-DD)",
    )
    _add_verbose(cal)

    # --- performance ---
    perf = sub.add_parser("performance", help="Summarize snapshot history")
    perf.add_argument("history", type=Path, help="Snapshot history JSON file")
    _add_verbose(perf)

    # --- snapshot ---
    snap = sub.add_parser("snapshot", help="Record today's portfolio snapshot")
    snap.add_argument("positions", type=Path, help="Positions JSON file")
    snap.add_argument("history", type=Path, help="Snapshot history JSON file")
    _add_verbose(snap)

    return p


def build_report(
    positions: list[Position],
    config: AnalysisConfig,
    today: date | None = None,
    reference: ReferenceData | None = None,
) -> PortfolioReport:
    from alpha_forge.analysis.advisor import PortfolioAdvisor
    from alpha_forge.analysis.dividends import dividend_summary
    from alpha_forge.analysis.earnings import earnings_calendar
    from alpha_forge.analysis.risk import RiskAnalyzer
    from alpha_forge.analysis.tax import TaxAnalyzer

    today = today or date.today()
    reference = reference or ReferenceData()
    rng = np.random.default_rng(config.seed)

    risk_analyzer = RiskAnalyzer(reference, config, rng)
    tax_analyzer = TaxAnalyzer(config, rng)
    advisor = PortfolioAdvisor(risk_analyzer)

    return PortfolioReport(
        as_of=today,
        positions=positions,
        risk=risk_analyzer.analyze(positions),
        tax=tax_analyzer.summarize(positions),
        analysis=advisor.analyze(positions),
        dividends=dividend_summary(positions, today, reference),
        earnings=earnings_calendar(positions, today, reference),
    )


def _load(path: Path) -> list[Position]:
    from alpha_forge.data.position_store import load_positions

    return load_positions(path)


def _run_analyze(args: argparse.Namespace) -> None:
    """Execute the analyze subcommand."""
    from alpha_forge.output.renderer import DashboardRenderer

    config = AnalysisConfig(other_income=args.other_income, seed=args.seed)
    positions = _load(args.positions)

    with console.status("[cyan]Running portfolio analytics..."):
        report = build_report(positions, config, args.date)

    DashboardRenderer(console).render(report)

    if args.markdown is None:
        return

    chart_paths: dict[str, Path] = {}
    if args.charts:
        from alpha_forge.analysis.performance import benchmark_series
        from alpha_forge.data.position_store import load_history
        from alpha_forge.output.charts import generate_all_charts

        points = benchmark_series(load_history(args.history)) if args.history else None
        charts_dir = args.markdown / "charts"
        chart_paths = generate_all_charts(report, charts_dir, points)
        if chart_paths:
            console.print(
                f"\n[green]Generated {len(chart_paths)} chart(s) in {charts_dir}[/green]"
            )

    from alpha_forge.output.markdown_renderer import MarkdownRenderer

    md_content = MarkdownRenderer().render(
        report,
        chart_paths=chart_paths,
        charts_rel_dir="charts",
    )
    args.markdown.mkdir(parents=True, exist_ok=True)
    filepath = args.markdown / f"portfolio_{report.as_of.isoformat()}.md"
    filepath.write_text(md_content)
    console.print(f"[green]Report saved to {filepath}[/green]")


def _run_advice(args: argparse.Namespace) -> None:
    from alpha_forge.analysis.advisor import PortfolioAdvisor
    from alpha_forge.analysis.risk import RiskAnalyzer

    config = AnalysisConfig(seed=args.seed)
    advisor = PortfolioAdvisor(RiskAnalyzer(config=config))
    text = advisor.advice(_load(args.positions), RiskTolerance(args.risk_tolerance))
    console.print(text, highlight=False, markup=False)


def _run_calendar(args: argparse.Namespace) -> None:
    from alpha_forge.analysis.dividends import dividend_summary
    from alpha_forge.analysis.earnings import earnings_calendar
    from alpha_forge.output.renderer import DashboardRenderer

    positions = _load(args.positions)
    today = args.date or date.today()
    renderer = DashboardRenderer(console)
    renderer.render_dividends(dividend_summary(positions, today))
    renderer.render_earnings(earnings_calendar(positions, today))


def _run_performance(args: argparse.Namespace) -> None:
    from alpha_forge.analysis.performance import performance_metrics
    from alpha_forge.data.position_store import load_history
    from alpha_forge.output.renderer import DashboardRenderer

    history = load_history(args.history)
    if len(history) < 2:
        console.print("[yellow]Need at least two snapshots for performance.[/yellow]")
    DashboardRenderer(console).render_performance(performance_metrics(history))


def _run_snapshot(args: argparse.Namespace) -> None:
    from alpha_forge.analysis.performance import record_snapshot
    from alpha_forge.data.position_store import load_history, save_history

    positions = _load(args.positions)
    history = load_history(args.history) if args.history.exists() else []
    history = record_snapshot(history, positions, datetime.now())
    save_history(args.history, history)
    console.print(
        f"[green]Recorded snapshot ({len(history)} in history) to {args.history}[/green]"
    )


def main() -> None:
    parser = build_parser()

    # A bare positions path means "analyze"
    if len(sys.argv) > 1 and sys.argv[1] not in (*COMMANDS, "-h", "--help"):
        sys.argv.insert(1, "analyze")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    handlers = {
        "analyze": _run_analyze,
        "advice": _run_advice,
        "calendar": _run_calendar,
        "performance": _run_performance,
        "snapshot": _run_snapshot,
    }

    try:
        handlers[args.command](args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
