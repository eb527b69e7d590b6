from pydantic import BaseModel

from alpha_forge.models.common import RiskLevel


class PositionRisk(BaseModel):
    ticker: str
    weight: float
    beta: float
    volatility: float
    contribution: float


class SectorConcentration(BaseModel):
    sector: str
    weight: float
    risk_level: RiskLevel


class CorrelationMatrix(BaseModel):
    tickers: list[str] = []
    matrix: list[list[float]] = []


class RiskMetrics(BaseModel):
    portfolio_beta: float = 0.0
    portfolio_volatility: float = 0.0
    sharpe_ratio: float = 0.0
    max_drawdown: float = 0.0
    var_95: float = 0.0
    total_value: float = 0.0

    position_risks: list[PositionRisk] = []
    sector_concentration: list[SectorConcentration] = []
    correlations: CorrelationMatrix = CorrelationMatrix()
