import numpy as np
import pytest

from alpha_forge.analysis.risk import RiskAnalyzer
from alpha_forge.config import ReferenceData
from alpha_forge.models.common import RiskLevel
from alpha_forge.models.position import Position


def make_position(
    ticker: str,
    shares: float,
    avg_price: float,
    current_price: float = 0.0,
    sector: str = "Technology",
) -> Position:
    return Position(
        ticker=ticker,
        shares=shares,
        avg_price=avg_price,
        current_price=current_price,
        sector=sector,
    )


def mixed_portfolio() -> list[Position]:
    return [
        make_position("AAPL", 100, 175.50, 185.25, "Technology"),
        make_position("MSFT", 50, 380.00, 412.75, "Technology"),
        make_position("JNJ", 75, 155.00, 150.00, "Healthcare"),
        make_position("XOM", 40, 100.00, 0.0, "Energy"),
        make_position("ZZZZ", 10, 50.00, 55.00, "Industrials"),
    ]


class TestRiskAnalyzer:
    def test_empty_portfolio(self):
        metrics = RiskAnalyzer().analyze([])
        assert metrics.portfolio_beta == 0
        assert metrics.portfolio_volatility == 0
        assert metrics.sharpe_ratio == 0
        assert metrics.max_drawdown == 0
        assert metrics.var_95 == 0
        assert metrics.position_risks == []
        assert metrics.sector_concentration == []
        assert metrics.correlations.tickers == []
        assert metrics.correlations.matrix == []

    def test_single_position(self):
        positions = [make_position("AAPL", 100, 175.50, 185.25)]
        metrics = RiskAnalyzer().analyze(positions)

        assert len(metrics.sector_concentration) == 1
        sector = metrics.sector_concentration[0]
        assert sector.sector == "Technology"
        assert sector.weight == pytest.approx(100)
        assert sector.risk_level == RiskLevel.EXTREME
        assert metrics.portfolio_beta == pytest.approx(1.20)

    def test_derived_scalars(self):
        positions = [make_position("AAPL", 100, 175.50, 185.25)]
        metrics = RiskAnalyzer().analyze(positions)
        total = 100 * 185.25

        assert metrics.portfolio_volatility == pytest.approx(18.0)
        assert metrics.sharpe_ratio == pytest.approx((12.0 - 2.0) / 18.0)
        assert metrics.var_95 == pytest.approx(total * 0.18 * 1.65)
        assert metrics.max_drawdown == pytest.approx(-27.0)
        assert metrics.total_value == pytest.approx(total)

    def test_weights_sum_to_100(self):
        metrics = RiskAnalyzer().analyze(mixed_portfolio())
        assert sum(pr.weight for pr in metrics.position_risks) == pytest.approx(100)
        assert sum(s.weight for s in metrics.sector_concentration) == pytest.approx(
            100
        )

    def test_one_entry_per_position(self):
        positions = mixed_portfolio()
        metrics = RiskAnalyzer().analyze(positions)
        assert [pr.ticker for pr in metrics.position_risks] == [
            p.ticker for p in positions
        ]

    def test_unknown_ticker_uses_default_beta(self):
        metrics = RiskAnalyzer().analyze(mixed_portfolio())
        unknown = next(pr for pr in metrics.position_risks if pr.ticker == "ZZZZ")
        assert unknown.beta == 1.0
        assert unknown.volatility == 15.0

    def test_missing_quote_valued_at_cost(self):
        positions = [
            make_position("XOM", 10, 100.0, 0.0, "Energy"),
            make_position("CVX", 10, 100.0, 100.0, "Energy"),
        ]
        metrics = RiskAnalyzer().analyze(positions)
        assert metrics.total_value == pytest.approx(2000)
        assert metrics.position_risks[0].weight == pytest.approx(50)

    def test_sectors_sorted_descending(self):
        metrics = RiskAnalyzer().analyze(mixed_portfolio())
        weights = [s.weight for s in metrics.sector_concentration]
        assert weights == sorted(weights, reverse=True)
        assert metrics.sector_concentration[0].sector == "Technology"

    def test_duplicate_tickers_not_merged(self):
        positions = [
            make_position("AAPL", 10, 100.0, 100.0),
            make_position("AAPL", 10, 100.0, 100.0),
        ]
        metrics = RiskAnalyzer().analyze(positions)
        assert len(metrics.position_risks) == 2
        assert metrics.position_risks[0].weight == pytest.approx(50)

    def test_custom_reference_betas(self):
        reference = ReferenceData(betas={"AAPL": 0.5}, default_beta=2.0)
        positions = [
            make_position("AAPL", 10, 100.0, 100.0),
            make_position("MSFT", 10, 100.0, 100.0),
        ]
        metrics = RiskAnalyzer(reference=reference).analyze(positions)
        assert metrics.portfolio_beta == pytest.approx(1.25)

    def test_zero_total_sector_weights(self):
        positions = [make_position("AAPL", 10, 100.0, 100.0)]
        sectors = RiskAnalyzer.sector_concentration(positions, total=0)
        assert sectors[0].weight == 0
        assert sectors[0].risk_level == RiskLevel.LOW

    def test_input_not_mutated(self):
        positions = mixed_portfolio()
        before = [p.model_dump() for p in positions]
        RiskAnalyzer().analyze(positions)
        assert [p.model_dump() for p in positions] == before


class TestSectorRiskLevel:
    @pytest.mark.parametrize(
        "weight,expected",
        [
            (10, RiskLevel.LOW),
            (25, RiskLevel.LOW),
            (25.1, RiskLevel.MODERATE),
            (40, RiskLevel.MODERATE),
            (41, RiskLevel.HIGH),
            (60, RiskLevel.HIGH),
            (60.5, RiskLevel.EXTREME),
        ],
    )
    def test_thresholds(self, weight, expected):
        assert RiskLevel.from_weight(weight) == expected

    def test_monotonic_in_weight(self):
        ranks = [RiskLevel.from_weight(w).rank for w in np.linspace(0, 100, 401)]
        assert ranks == sorted(ranks)


class TestCorrelationMatrix:
    def test_seeded_results_repeat(self):
        positions = mixed_portfolio()
        a = RiskAnalyzer(rng=np.random.default_rng(7)).analyze(positions)
        b = RiskAnalyzer(rng=np.random.default_rng(7)).analyze(positions)
        assert a.correlations.matrix == b.correlations.matrix

    def test_shape_and_symmetry(self):
        positions = mixed_portfolio()
        corr = RiskAnalyzer(rng=np.random.default_rng(1)).analyze(positions)
        matrix = np.array(corr.correlations.matrix)

        assert corr.correlations.tickers == [p.ticker for p in positions]
        assert matrix.shape == (5, 5)
        assert np.allclose(np.diag(matrix), 1.0)
        assert np.allclose(matrix, matrix.T)

    def test_sector_ranges(self):
        positions = mixed_portfolio()
        analyzer = RiskAnalyzer(rng=np.random.default_rng(3))
        matrix = analyzer.correlation_matrix(positions).matrix

        for i, pi in enumerate(positions):
            for j, pj in enumerate(positions):
                if i == j:
                    continue
                if pi.sector == pj.sector:
                    assert 0.7 <= matrix[i][j] < 0.9
                else:
                    assert 0.3 <= matrix[i][j] < 0.6
