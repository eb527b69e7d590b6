import datetime as dt

from pydantic import BaseModel

from alpha_forge.models.position import Position


class PortfolioSnapshot(BaseModel):
    timestamp: dt.datetime
    date: dt.date
    total_value: float
    total_cost: float
    positions: list[Position] = []


class DailyReturn(BaseModel):
    date: dt.date | None = None
    return_pct: float = 0.0


class PerformanceMetrics(BaseModel):
    total_return: float = 0.0
    total_return_percent: float = 0.0
    annualized_return: float = 0.0
    best_day: DailyReturn = DailyReturn()
    worst_day: DailyReturn = DailyReturn()
    volatility: float = 0.0
    alpha: float = 0.0
    beta: float = 1.0


class BenchmarkPoint(BaseModel):
    date: dt.date
    portfolio: float
    benchmark: float
