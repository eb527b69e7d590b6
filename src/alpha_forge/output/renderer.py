from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from alpha_forge.models.calendar import DividendSummary, EarningsSummary
from alpha_forge.models.performance import PerformanceMetrics
from alpha_forge.models.report import PortfolioReport
from alpha_forge.output.formatters import (
    beat_rate_color,
    fmt_large_number,
    fmt_money,
    fmt_number,
    fmt_pct,
    fmt_weight,
    health_color,
    report_time_label,
    risk_level_color,
    score_bar,
    tax_recommendation_color,
    urgency_color,
)


class DashboardRenderer:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, report: PortfolioReport) -> None:
        self._render_header(report)
        self._render_positions(report)
        self._render_risk(report)
        self._render_sectors(report)
        self._render_tax(report)
        if report.analysis:
            self._render_scenarios(report)
            self._render_recommendations(report)
        if report.dividends:
            self.render_dividends(report.dividends)
        if report.earnings:
            self.render_earnings(report.earnings)
        if report.analysis:
            self._render_verdict(report)

    def _render_header(self, report: PortfolioReport) -> None:
        pnl = report.total_value - report.total_cost
        self.console.print()
        self.console.print(
            Panel(
                f"[bold]{len(report.positions)} positions[/bold]  —  "
                f"{fmt_money(report.total_value)}  ({fmt_money(pnl)} P&L)",
                title=f"Alpha Forge Portfolio — {report.as_of.isoformat()}",
                style="cyan",
            )
        )

    def _render_positions(self, report: PortfolioReport) -> None:
        if not report.positions:
            return
        risks = report.risk.position_risks
        if len(risks) != len(report.positions):
            risks = [None] * len(report.positions)
        table = Table(title="Positions", show_header=True)
        table.add_column("Ticker", style="cyan")
        table.add_column("Shares", justify="right")
        table.add_column("Avg Price", justify="right")
        table.add_column("Price", justify="right")
        table.add_column("Value", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("Beta", justify="right")

        for p, pr in zip(report.positions, risks):
            price = fmt_money(p.current_price) if p.has_quote else "—"
            table.add_row(
                p.ticker,
                fmt_number(p.shares, 4 if p.shares % 1 else 0),
                fmt_money(p.avg_price),
                price,
                fmt_money(p.market_value),
                fmt_weight(pr.weight if pr else None),
                fmt_number(pr.beta if pr else None),
            )

        self.console.print(table)

    def _render_risk(self, report: PortfolioReport) -> None:
        r = report.risk
        table = Table(title="Risk Metrics", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row(
            "Portfolio Beta",
            fmt_number(r.portfolio_beta),
            "Volatility",
            fmt_weight(r.portfolio_volatility),
        )
        table.add_row(
            "Sharpe Ratio",
            fmt_number(r.sharpe_ratio),
            "Max Drawdown",
            fmt_pct(r.max_drawdown, 1),
        )
        table.add_row("VaR (95%)", fmt_large_number(r.var_95), "", "")

        self.console.print(table)

    def _render_sectors(self, report: PortfolioReport) -> None:
        sectors = report.risk.sector_concentration
        if not sectors:
            return
        table = Table(title="Sector Concentration", show_header=True)
        table.add_column("Sector", style="cyan")
        table.add_column("Weight", justify="right")
        table.add_column("Risk", justify="center")

        for s in sectors:
            table.add_row(
                s.sector,
                fmt_weight(s.weight),
                Text(s.risk_level.value, style=risk_level_color(s.risk_level)),
            )

        self.console.print(table)

    def _render_tax(self, report: PortfolioReport) -> None:
        t = report.tax
        table = Table(title="Tax Summary", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Unrealized Gain", t.unrealized_gain_formatted)
        table.add_row("Est. Tax If Sold", fmt_money(t.estimated_tax))
        table.add_row("Effective Rate", fmt_weight(t.effective_rate))
        table.add_row("Harvest Savings", fmt_money(t.potential_savings))
        table.add_row("Loss Opportunities", str(t.total_opportunities))

        for o in t.opportunities[:5]:
            table.add_row(
                f"  {o.ticker} ({o.days_held}d)",
                Text(
                    f"{fmt_money(o.current_loss)} {o.recommendation.value}",
                    style=tax_recommendation_color(o.recommendation),
                ),
            )

        self.console.print(table)

    def _render_scenarios(self, report: PortfolioReport) -> None:
        a = report.analysis
        if not a or not a.scenario_analysis:
            return
        table = Table(title="Scenario Analysis", show_header=True)
        table.add_column("Scenario", style="cyan")
        table.add_column("Value", justify="right")
        table.add_column("Change", justify="right")
        table.add_column("Change %", justify="right")

        for s in a.scenario_analysis:
            style = "green" if s.change >= 0 else "red"
            table.add_row(
                s.name,
                fmt_money(s.portfolio_value),
                Text(fmt_money(s.change), style=style),
                Text(fmt_pct(s.change_percent, 1), style=style),
            )

        self.console.print(table)

    def _render_recommendations(self, report: PortfolioReport) -> None:
        a = report.analysis
        if not a or not a.recommendations:
            return
        table = Table(title="Recommendations", show_header=True)
        table.add_column("Urgency", justify="center")
        table.add_column("Type", style="cyan")
        table.add_column("Target")
        table.add_column("Conf.", justify="right")
        table.add_column("Action")

        for rec in a.recommendations:
            table.add_row(
                Text(rec.urgency.value, style=urgency_color(rec.urgency)),
                rec.type,
                rec.ticker,
                f"{rec.confidence}%",
                rec.action,
            )

        self.console.print(table)

    def render_dividends(self, d: DividendSummary) -> None:
        table = Table(title="Dividends", show_header=True)
        table.add_column("Ticker", style="cyan")
        table.add_column("Ex-Date")
        table.add_column("Pay Date")
        table.add_column("Amount", justify="right")
        table.add_column("Yield", justify="right")

        for ev in d.upcoming_events:
            table.add_row(
                ev.ticker,
                ev.ex_date.isoformat(),
                ev.pay_date.isoformat(),
                fmt_money(ev.amount),
                fmt_weight(ev.dividend_yield),
            )

        table.caption = (
            f"Annual income {fmt_money(d.annual_income)} · "
            f"yield {fmt_weight(d.portfolio_yield, 2)} · "
            f"yield on cost {fmt_weight(d.yield_on_cost, 2)}"
        )
        self.console.print(table)

    def render_earnings(self, e: EarningsSummary) -> None:
        table = Table(title="Earnings (next 30 days)", show_header=True)
        table.add_column("Ticker", style="cyan")
        table.add_column("Company")
        table.add_column("Date")
        table.add_column("Time")
        table.add_column("EPS Est.", justify="right")
        table.add_column("Beat Rate", justify="right")

        high_impact = {ev.ticker for ev in e.high_impact_events}
        for ev in e.this_month:
            name = ev.company_name + (" *" if ev.ticker in high_impact else "")
            table.add_row(
                ev.ticker,
                name,
                ev.report_date.isoformat(),
                report_time_label(ev.report_time),
                fmt_money(ev.eps_estimate),
                Text(
                    f"{ev.historical_beat_rate:.0f}%",
                    style=beat_rate_color(ev.historical_beat_rate),
                ),
            )

        table.caption = f"{e.total_upcoming} upcoming · * high impact this week"
        self.console.print(table)

    def render_performance(self, m: PerformanceMetrics) -> None:
        table = Table(title="Performance", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Total Return", fmt_money(m.total_return))
        table.add_row("Total Return %", fmt_pct(m.total_return_percent))
        table.add_row("Annualized", fmt_pct(m.annualized_return))
        best = m.best_day.date.isoformat() if m.best_day.date else "-"
        worst = m.worst_day.date.isoformat() if m.worst_day.date else "-"
        table.add_row(f"Best Day ({best})", fmt_pct(m.best_day.return_pct))
        table.add_row(f"Worst Day ({worst})", fmt_pct(m.worst_day.return_pct))
        table.add_row("Volatility (ann.)", fmt_weight(m.volatility))
        table.add_row("Alpha vs 10%", fmt_pct(m.alpha))

        self.console.print(table)

    def _render_verdict(self, report: PortfolioReport) -> None:
        a = report.analysis
        if not a:
            return
        color = health_color(a.overall_health)
        verdict = Text()
        verdict.append("\n  Health: ", style="bold")
        verdict.append(a.overall_health.value.upper(), style=color)
        verdict.append(f"  {score_bar(a.health_score)} {a.health_score:.0f}/100\n")
        for s in a.strengths:
            verdict.append(f"\n  + {s}", style="green")
        for w in a.weaknesses:
            verdict.append(f"\n  - {w}", style="red")
        verdict.append("\n")
        self.console.print(Panel(verdict, title="Portfolio Health", style=color))
