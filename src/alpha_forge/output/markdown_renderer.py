from __future__ import annotations

from pathlib import Path

from alpha_forge.models.calendar import DividendSummary, EarningsSummary
from alpha_forge.models.report import PortfolioReport
from alpha_forge.output.formatters import (
    fmt_large_number,
    fmt_money,
    fmt_number,
    fmt_pct,
    fmt_weight,
    report_time_label,
    score_bar,
)

CHART_LABELS = {
    "sectors": "Sector Concentration",
    "scenarios": "Scenario Analysis",
    "performance": "Portfolio vs Benchmark",
}


class MarkdownRenderer:
    def render(
        self,
        report: PortfolioReport,
        chart_paths: dict[str, Path] | None = None,
        charts_rel_dir: str = "charts",
    ) -> str:
        sections: list[str] = []
        sections.append(self._render_header(report))
        sections.append(self._render_positions(report))

        sections.append(self._render_risk(report))
        self._append_chart_embeds(sections, chart_paths, charts_rel_dir, ["sectors"])

        sections.append(self._render_tax(report))

        if report.analysis:
            sections.append(self._render_scenarios(report))
            self._append_chart_embeds(
                sections, chart_paths, charts_rel_dir, ["scenarios"]
            )
            sections.append(self._render_recommendations(report))

        if report.dividends and report.dividends.upcoming_events:
            sections.append(self._render_dividends(report.dividends))
        if report.earnings and report.earnings.this_month:
            sections.append(self._render_earnings(report.earnings))

        self._append_chart_embeds(
            sections, chart_paths, charts_rel_dir, ["performance"]
        )

        if report.analysis:
            sections.append(self._render_verdict(report))
        return "\n".join(s for s in sections if s)

    def _append_chart_embeds(
        self,
        sections: list[str],
        chart_paths: dict[str, Path] | None,
        charts_rel_dir: str,
        chart_names: list[str],
    ) -> None:
        if not chart_paths:
            return
        lines: list[str] = []
        for name in chart_names:
            if name in chart_paths:
                label = CHART_LABELS.get(name, name)
                filename = chart_paths[name].name
                lines.append(f"![{label}]({charts_rel_dir}/{filename})")
        if lines:
            sections.append("\n".join(lines) + "\n")

    def _render_header(self, report: PortfolioReport) -> str:
        pnl = report.total_value - report.total_cost
        return (
            f"# Portfolio Report: {report.as_of.isoformat()}\n\n"
            f"**Positions:** {len(report.positions)}  \n"
            f"**Total Value:** {fmt_money(report.total_value)}  \n"
            f"**Unrealized P&L:** {fmt_money(pnl)}\n"
        )

    def _render_positions(self, report: PortfolioReport) -> str:
        if not report.positions:
            return ""
        lines = ["## Positions\n"]
        lines.append("| Ticker | Sector | Shares | Avg Price | Price | Value | Weight |")
        lines.append("|--------|--------|-------:|----------:|------:|------:|-------:|")
        risks = report.risk.position_risks
        for i, p in enumerate(report.positions):
            weight = risks[i].weight if i < len(risks) else None
            price = fmt_money(p.current_price) if p.has_quote else "—"
            lines.append(
                f"| {p.ticker} | {p.sector} | {fmt_number(p.shares, 4)} |"
                f" {fmt_money(p.avg_price)} | {price} |"
                f" {fmt_money(p.market_value)} | {fmt_weight(weight)} |"
            )
        return "\n".join(lines) + "\n"

    def _render_risk(self, report: PortfolioReport) -> str:
        r = report.risk
        lines = ["## Risk\n"]
        lines.append("| Metric | Value | Metric | Value |")
        lines.append("|--------|------:|--------|------:|")
        lines.append(
            f"| Portfolio Beta | {fmt_number(r.portfolio_beta)} |"
            f" Volatility | {fmt_weight(r.portfolio_volatility)} |"
        )
        lines.append(
            f"| Sharpe Ratio | {fmt_number(r.sharpe_ratio)} |"
            f" Max Drawdown | {fmt_pct(r.max_drawdown, 1)} |"
        )
        lines.append(f"| VaR (95%) | {fmt_large_number(r.var_95)} | | |")

        if r.sector_concentration:
            lines.append("\n### Sector Concentration\n")
            lines.append("| Sector | Weight | Risk |")
            lines.append("|--------|-------:|:----:|")
            for s in r.sector_concentration:
                lines.append(
                    f"| {s.sector} | {fmt_weight(s.weight)} | {s.risk_level.value} |"
                )
        return "\n".join(lines) + "\n"

    def _render_tax(self, report: PortfolioReport) -> str:
        t = report.tax
        lines = ["## Tax\n"]
        lines.append("| Metric | Value |")
        lines.append("|--------|------:|")
        lines.append(f"| Unrealized Gain | {t.unrealized_gain_formatted} |")
        lines.append(f"| Est. Tax If Sold | {fmt_money(t.estimated_tax)} |")
        lines.append(f"| Effective Rate | {fmt_weight(t.effective_rate)} |")
        lines.append(f"| Harvest Savings | {fmt_money(t.potential_savings)} |")

        if t.opportunities:
            lines.append("\n### Tax-Loss Harvesting\n")
            lines.append("| Ticker | Loss | Days Held | Action | Reasoning |")
            lines.append("|--------|-----:|----------:|:------:|-----------|")
            for o in t.opportunities:
                lines.append(
                    f"| {o.ticker} | {fmt_money(o.current_loss)} | {o.days_held} |"
                    f" {o.recommendation.value} | {o.reasoning} |"
                )
        return "\n".join(lines) + "\n"

    def _render_scenarios(self, report: PortfolioReport) -> str:
        a = report.analysis
        if not a or not a.scenario_analysis:
            return ""
        lines = ["## Scenarios\n"]
        lines.append("| Scenario | Description | Value | Change |")
        lines.append("|----------|-------------|------:|-------:|")
        for s in a.scenario_analysis:
            lines.append(
                f"| {s.name} | {s.description} | {fmt_money(s.portfolio_value)} |"
                f" {fmt_pct(s.change_percent, 1)} |"
            )
        return "\n".join(lines) + "\n"

    def _render_recommendations(self, report: PortfolioReport) -> str:
        a = report.analysis
        if not a or not a.recommendations:
            return ""
        lines = ["## Recommendations\n"]
        for i, rec in enumerate(a.recommendations, start=1):
            lines.append(
                f"{i}. **[{rec.urgency.value.upper()}] {rec.type.upper()}"
                f" {rec.ticker}** ({rec.confidence}% confidence)  "
            )
            lines.append(f"   {rec.reasoning}  ")
            lines.append(f"   *{rec.action}*")
        return "\n".join(lines) + "\n"

    def _render_dividends(self, d: DividendSummary) -> str:
        lines = ["## Dividends\n"]
        lines.append(
            f"**Annual Income:** {fmt_money(d.annual_income)} | "
            f"**Yield:** {fmt_weight(d.portfolio_yield, 2)} | "
            f"**Yield on Cost:** {fmt_weight(d.yield_on_cost, 2)}\n"
        )
        lines.append("| Ticker | Ex-Date | Pay Date | Amount |")
        lines.append("|--------|---------|----------|-------:|")
        for ev in d.upcoming_events:
            lines.append(
                f"| {ev.ticker} | {ev.ex_date.isoformat()} |"
                f" {ev.pay_date.isoformat()} | {fmt_money(ev.amount)} |"
            )
        return "\n".join(lines) + "\n"

    def _render_earnings(self, e: EarningsSummary) -> str:
        lines = ["## Upcoming Earnings\n"]
        lines.append("| Date | Ticker | Company | Time | EPS Est. | Beat Rate |")
        lines.append("|------|--------|---------|------|---------:|----------:|")
        for ev in e.this_month:
            lines.append(
                f"| {ev.report_date.isoformat()} | {ev.ticker} | {ev.company_name} |"
                f" {report_time_label(ev.report_time)} | {fmt_money(ev.eps_estimate)} |"
                f" {ev.historical_beat_rate:.0f}% |"
            )
        return "\n".join(lines) + "\n"

    def _render_verdict(self, report: PortfolioReport) -> str:
        a = report.analysis
        if not a:
            return ""
        lines = ["## Portfolio Health\n"]
        lines.append(
            f"**Health:** {a.overall_health.value.upper()}  "
            f"{score_bar(a.health_score)} {a.health_score:.0f}/100\n"
        )
        for s in a.strengths:
            lines.append(f"- ✅ {s}")
        for w in a.weaknesses:
            lines.append(f"- ⚠️ {w}")
        return "\n".join(lines) + "\n"
