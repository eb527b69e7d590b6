from datetime import date
from pathlib import Path

from alpha_forge.cli import build_report
from alpha_forge.config import AnalysisConfig
from alpha_forge.models.position import Position
from alpha_forge.models.report import PortfolioReport
from alpha_forge.output.markdown_renderer import MarkdownRenderer


def _make_report() -> PortfolioReport:
    positions = [
        Position(
            ticker="AAPL",
            shares=100,
            avg_price=175.50,
            current_price=185.25,
            sector="Technology",
        ),
        Position(
            ticker="JNJ",
            shares=75,
            avg_price=155.00,
            current_price=150.00,
            sector="Healthcare",
        ),
        Position(ticker="XOM", shares=40, avg_price=100.00, sector="Energy"),
    ]
    return build_report(positions, AnalysisConfig(seed=42), date(2025, 1, 10))


class TestMarkdownRenderer:
    def test_render_contains_header(self):
        md = MarkdownRenderer().render(_make_report())
        assert "# Portfolio Report: 2025-01-10" in md
        assert "**Positions:** 3" in md

    def test_render_contains_sections(self):
        md = MarkdownRenderer().render(_make_report())
        assert "## Positions" in md
        assert "## Risk" in md
        assert "### Sector Concentration" in md
        assert "## Tax" in md
        assert "## Scenarios" in md
        assert "## Recommendations" in md
        assert "## Dividends" in md
        assert "## Upcoming Earnings" in md
        assert "## Portfolio Health" in md

    def test_render_positions_table(self):
        md = MarkdownRenderer().render(_make_report())
        assert "| AAPL | Technology |" in md
        # unquoted position shows a dash for price
        assert "| XOM | Energy | 40.0000 | $100.00 | — |" in md

    def test_render_tax_opportunity(self):
        md = MarkdownRenderer().render(_make_report())
        assert "### Tax-Loss Harvesting" in md
        assert "| JNJ | $375.00 |" in md

    def test_render_scenarios(self):
        md = MarkdownRenderer().render(_make_report())
        assert "| Bull Market |" in md
        assert "| AI/Tech Boom |" in md

    def test_render_with_charts(self):
        chart_paths = {
            "sectors": Path("/tmp/charts/sectors_2025-01-10.png"),
            "scenarios": Path("/tmp/charts/scenarios_2025-01-10.png"),
        }
        md = MarkdownRenderer().render(_make_report(), chart_paths=chart_paths)
        assert "![Sector Concentration](charts/sectors_2025-01-10.png)" in md
        assert "![Scenario Analysis](charts/scenarios_2025-01-10.png)" in md
        assert "Portfolio vs Benchmark" not in md

    def test_render_minimal(self):
        report = PortfolioReport(as_of=date(2025, 1, 10))
        md = MarkdownRenderer().render(report)
        assert "# Portfolio Report: 2025-01-10" in md
        assert "## Risk" in md
        assert "## Positions" not in md
        assert "## Recommendations" not in md
        assert "## Portfolio Health" not in md
