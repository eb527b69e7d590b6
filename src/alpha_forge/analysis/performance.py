from __future__ import annotations

import logging
from datetime import datetime

import numpy as np
import pandas as pd

from alpha_forge.models.performance import (
    BenchmarkPoint,
    DailyReturn,
    PerformanceMetrics,
    PortfolioSnapshot,
)
from alpha_forge.models.position import Position, total_cost, total_value

logger = logging.getLogger(__name__)

MAX_SNAPSHOTS = 90
TRADING_DAYS = 252
BENCHMARK_ANNUAL_RETURN = 0.10
SECONDS_PER_YEAR = 365 * 24 * 60 * 60


def take_snapshot(positions: list[Position], now: datetime | None = None) -> PortfolioSnapshot:
    now = now or datetime.now()
    return PortfolioSnapshot(
        timestamp=now,
        date=now.date(),
        total_value=total_value(positions),
        total_cost=total_cost(positions),
        positions=list(positions),
    )


def record_snapshot(
    history: list[PortfolioSnapshot],
    positions: list[Position],
    now: datetime | None = None,
) -> list[PortfolioSnapshot]:
    """Return a new history with today's snapshot added or replaced."""
    snapshot = take_snapshot(positions, now)
    updated = list(history)

    for i, existing in enumerate(updated):
        if existing.date == snapshot.date:
            updated[i] = snapshot
            break
    else:
        updated.append(snapshot)

    if len(updated) > MAX_SNAPSHOTS:
        dropped = len(updated) - MAX_SNAPSHOTS
        logger.debug("Dropping %d oldest snapshot(s)", dropped)
        updated = updated[dropped:]
    return updated


def performance_metrics(history: list[PortfolioSnapshot]) -> PerformanceMetrics:
    if len(history) < 2:
        return PerformanceMetrics()

    first, last = history[0], history[-1]
    total_return = last.total_value - first.total_cost
    total_return_pct = (
        total_return / first.total_cost * 100 if first.total_cost > 0 else 0.0
    )

    values = pd.Series(
        [s.total_value for s in history],
        index=[s.date for s in history],
        dtype=float,
    )
    returns = (values.pct_change() * 100).iloc[1:]
    returns = returns.replace([np.inf, -np.inf], np.nan).dropna()

    if returns.empty:
        best = worst = DailyReturn()
        volatility = 0.0
    else:
        best = DailyReturn(date=returns.idxmax(), return_pct=float(returns.max()))
        worst = DailyReturn(date=returns.idxmin(), return_pct=float(returns.min()))
        volatility = float(np.std(returns.to_numpy()) * np.sqrt(TRADING_DAYS))

    years = (last.timestamp - first.timestamp).total_seconds() / SECONDS_PER_YEAR
    annualized = 0.0
    if years > 0 and total_return_pct > -100:
        # snapshots minutes apart push the exponent out of float range
        with np.errstate(over="ignore"):
            growth = np.power(1 + total_return_pct / 100, 1 / years)
        if np.isfinite(growth):
            annualized = float((growth - 1) * 100)
        else:
            logger.debug("Annualized return overflowed over %.6f years", years)

    return PerformanceMetrics(
        total_return=total_return,
        total_return_percent=total_return_pct,
        annualized_return=annualized,
        best_day=best,
        worst_day=worst,
        volatility=volatility,
        alpha=total_return_pct - BENCHMARK_ANNUAL_RETURN * 100,
        beta=1.0,
    )


def benchmark_series(history: list[PortfolioSnapshot]) -> list[BenchmarkPoint]:
    """Portfolio value per snapshot against a linear 10%/year benchmark."""
    if not history:
        return []

    start = history[0]
    start_value = start.total_value or 100_000.0
    points: list[BenchmarkPoint] = []
    for s in history:
        elapsed = (s.timestamp - start.timestamp).total_seconds() / SECONDS_PER_YEAR
        points.append(
            BenchmarkPoint(
                date=s.date,
                portfolio=round(s.total_value),
                benchmark=round(
                    start_value * (1 + BENCHMARK_ANNUAL_RETURN * elapsed)
                ),
            )
        )
    return points
