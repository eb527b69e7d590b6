import json
import sys

import pytest

from alpha_forge.cli import build_parser, main
from alpha_forge.data.position_store import load_history

RAW = [
    {"ticker": "AAPL", "shares": 100, "avgPrice": 175.5, "currentPrice": 185.25, "sector": "Technology"},
    {"ticker": "JNJ", "shares": 75, "avgPrice": 155, "currentPrice": 150, "sector": "Healthcare"},
]


@pytest.fixture
def positions_file(tmp_path):
    path = tmp_path / "positions.json"
    path.write_text(json.dumps({"positions": RAW}))
    return path


class TestParser:
    def test_analyze_args(self):
        args = build_parser().parse_args(
            ["analyze", "p.json", "--seed", "3", "--date", "2025-01-10"]
        )
        assert args.command == "analyze"
        assert args.seed == 3
        assert args.date.isoformat() == "2025-01-10"
        assert args.other_income == 100_000

    def test_bad_date(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["calendar", "p.json", "--date", "soon"])

    def test_advice_tolerance(self):
        args = build_parser().parse_args(
            ["advice", "p.json", "--risk-tolerance", "aggressive"]
        )
        assert args.risk_tolerance == "aggressive"


class TestMain:
    def test_bare_path_runs_analyze(self, monkeypatch, tmp_path, positions_file):
        out = tmp_path / "reports"
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "alpha-forge",
                str(positions_file),
                "--seed",
                "1",
                "--date",
                "2025-01-10",
                "--markdown",
                str(out),
            ],
        )
        main()
        report = out / "portfolio_2025-01-10.md"
        assert report.exists()
        assert "# Portfolio Report: 2025-01-10" in report.read_text()

    def test_snapshot(self, monkeypatch, tmp_path, positions_file):
        history = tmp_path / "history.json"
        monkeypatch.setattr(
            sys, "argv", ["alpha-forge", "snapshot", str(positions_file), str(history)]
        )
        main()
        snapshots = load_history(history)
        assert len(snapshots) == 1
        assert snapshots[0].total_value == pytest.approx(100 * 185.25 + 75 * 150)

    def test_missing_file_exits(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            sys, "argv", ["alpha-forge", "advice", str(tmp_path / "none.json")]
        )
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1
