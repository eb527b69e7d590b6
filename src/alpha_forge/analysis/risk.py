import numpy as np

from alpha_forge.config import AnalysisConfig, ReferenceData
from alpha_forge.models.common import RiskLevel
from alpha_forge.models.position import Position, total_value
from alpha_forge.models.risk import (
    CorrelationMatrix,
    PositionRisk,
    RiskMetrics,
    SectorConcentration,
)

MARKET_RETURN = 10.0
VAR_95_Z = 1.65
DRAWDOWN_MULTIPLIER = 1.5

SAME_SECTOR_RANGE = (0.7, 0.9)
CROSS_SECTOR_RANGE = (0.3, 0.6)


class RiskAnalyzer:
    """Beta-driven risk estimates for a list of positions.

    Volatility, Sharpe, VaR and drawdown are all derived from a weighted
    portfolio beta rather than from price history. The correlation matrix is
    a sector-based placeholder drawn from ``rng``.
    """

    def __init__(
        self,
        reference: ReferenceData | None = None,
        config: AnalysisConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.reference = reference or ReferenceData()
        self.config = config or AnalysisConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

    def analyze(self, positions: list[Position]) -> RiskMetrics:
        if not positions:
            return RiskMetrics()

        total = total_value(positions)
        market_vol = self.config.market_volatility

        position_risks = [self._position_risk(p, total) for p in positions]

        portfolio_beta = sum(pr.contribution for pr in position_risks)
        portfolio_vol = portfolio_beta * market_vol

        estimated_return = portfolio_beta * MARKET_RETURN
        sharpe = (
            (estimated_return - self.config.risk_free_rate) / portfolio_vol
            if portfolio_vol > 0
            else 0.0
        )
        var_95 = total * (portfolio_vol / 100) * VAR_95_Z
        max_drawdown = -portfolio_vol * DRAWDOWN_MULTIPLIER

        return RiskMetrics(
            portfolio_beta=portfolio_beta,
            portfolio_volatility=portfolio_vol,
            sharpe_ratio=sharpe,
            max_drawdown=max_drawdown,
            var_95=var_95,
            total_value=total,
            position_risks=position_risks,
            sector_concentration=self.sector_concentration(positions, total),
            correlations=self.correlation_matrix(positions),
        )

    def _position_risk(self, position: Position, total: float) -> PositionRisk:
        weight = position.market_value / total * 100 if total > 0 else 0.0
        beta = self.reference.beta_for(position.ticker)
        return PositionRisk(
            ticker=position.ticker,
            weight=weight,
            beta=beta,
            volatility=beta * self.config.market_volatility,
            contribution=weight * beta / 100,
        )

    @staticmethod
    def sector_concentration(
        positions: list[Position], total: float | None = None
    ) -> list[SectorConcentration]:
        if total is None:
            total = total_value(positions)

        by_sector: dict[str, float] = {}
        for p in positions:
            by_sector[p.sector] = by_sector.get(p.sector, 0.0) + p.market_value

        result: list[SectorConcentration] = []
        for sector, value in by_sector.items():
            weight = value / total * 100 if total > 0 else 0.0
            result.append(
                SectorConcentration(
                    sector=sector,
                    weight=weight,
                    risk_level=RiskLevel.from_weight(weight),
                )
            )
        return sorted(result, key=lambda s: -s.weight)

    def correlation_matrix(self, positions: list[Position]) -> CorrelationMatrix:
        n = len(positions)
        matrix = np.eye(n)
        for i in range(n):
            for j in range(i + 1, n):
                same = positions[i].sector == positions[j].sector
                low, high = SAME_SECTOR_RANGE if same else CROSS_SECTOR_RANGE
                value = float(self.rng.uniform(low, high))
                matrix[i, j] = value
                matrix[j, i] = value

        return CorrelationMatrix(
            tickers=[p.ticker for p in positions],
            matrix=matrix.tolist(),
        )
