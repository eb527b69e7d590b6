import numpy as np

from alpha_forge.config import AnalysisConfig
from alpha_forge.models.common import TaxRecommendation
from alpha_forge.models.position import Position
from alpha_forge.models.tax import (
    TaxEstimate,
    TaxLossOpportunity,
    TaxReport,
    TaxSummary,
    UnrealizedGain,
    UnrealizedGains,
)

TAX_RATE_SHORT = 0.37
TAX_RATE_LONG = 0.20
WASH_SALE_DAYS = 30

LARGE_LOSS = 10_000
MODERATE_LOSS = 3_000

# (income threshold, long-term rate), highest first
LONG_TERM_BRACKETS: list[tuple[float, float]] = [
    (500_000, 0.238),
    (200_000, 0.20),
    (40_000, 0.15),
]


def long_term_rate(total_income: float) -> float:
    for threshold, rate in LONG_TERM_BRACKETS:
        if total_income > threshold:
            return rate
    return 0.0


def format_signed_dollars(value: float) -> str:
    sign = "+" if value >= 0 else "-"
    return f"{sign}${abs(value):,.0f}"


class TaxAnalyzer:
    """Unrealized gain and tax-loss harvesting estimates.

    Purchase dates are not tracked, so every gain is treated as long-term
    and holding periods come from ``days_held`` overrides or ``rng``.
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        rng: np.random.Generator | None = None,
        days_held: dict[str, int] | None = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.days_held = {k.upper(): v for k, v in (days_held or {}).items()}

    def unrealized_gains(self, positions: list[Position]) -> UnrealizedGains:
        long_term: list[UnrealizedGain] = []
        total = 0.0
        for p in positions:
            if not p.has_quote:
                continue
            gain = (p.current_price - p.avg_price) * p.shares
            total += gain
            if gain != 0:
                long_term.append(
                    UnrealizedGain(ticker=p.ticker, gain=gain, shares=p.shares)
                )
        return UnrealizedGains(long_term=long_term, total_unrealized_gain=total)

    def find_loss_opportunities(
        self, positions: list[Position]
    ) -> list[TaxLossOpportunity]:
        opportunities: list[TaxLossOpportunity] = []
        for p in positions:
            if not p.has_quote:
                continue
            loss = (p.avg_price - p.current_price) * p.shares
            if loss <= 0:
                continue
            days = self._days_held(p.ticker)
            recommendation, reasoning = self._classify(loss, days)
            opportunities.append(
                TaxLossOpportunity(
                    ticker=p.ticker,
                    current_loss=loss,
                    days_held=days,
                    recommendation=recommendation,
                    reasoning=reasoning,
                )
            )
        return sorted(opportunities, key=lambda o: -o.current_loss)

    def _days_held(self, ticker: str) -> int:
        if ticker in self.days_held:
            return self.days_held[ticker]
        return int(self.rng.integers(30, 395))

    @staticmethod
    def _classify(loss: float, days: int) -> tuple[TaxRecommendation, str]:
        if days < WASH_SALE_DAYS:
            return (
                TaxRecommendation.AVOID,
                f"Wait {WASH_SALE_DAYS - days} more days to avoid wash sale rules",
            )
        if loss > LARGE_LOSS:
            return (
                TaxRecommendation.HARVEST,
                f"Significant loss of ${loss:.0f} can offset gains",
            )
        if loss > MODERATE_LOSS:
            return (
                TaxRecommendation.HARVEST,
                "Moderate loss worth harvesting for tax benefit",
            )
        return (
            TaxRecommendation.HOLD,
            "Loss too small to justify transaction costs",
        )

    def estimate(
        self,
        positions: list[Position],
        other_income: float | None = None,
        opportunities: list[TaxLossOpportunity] | None = None,
    ) -> TaxEstimate:
        if other_income is None:
            other_income = self.config.other_income
        gain = self.unrealized_gains(positions).total_unrealized_gain
        rate = long_term_rate(other_income + gain)

        if opportunities is None:
            opportunities = self.find_loss_opportunities(positions)
        harvestable = sum(
            o.current_loss
            for o in opportunities
            if o.recommendation == TaxRecommendation.HARVEST
        )

        return TaxEstimate(
            unrealized_gains=gain,
            estimated_tax_if_sold_now=gain * rate,
            effective_tax_rate=rate * 100,
            potential_savings=harvestable * rate,
        )

    def summarize(
        self, positions: list[Position], other_income: float | None = None
    ) -> TaxSummary:
        opportunities = self.find_loss_opportunities(positions)
        estimate = self.estimate(positions, other_income, opportunities)
        harvestable = [
            o for o in opportunities if o.recommendation == TaxRecommendation.HARVEST
        ]
        gain = estimate.unrealized_gains
        return TaxSummary(
            unrealized_gain=gain,
            unrealized_gain_formatted=format_signed_dollars(gain),
            estimated_tax=estimate.estimated_tax_if_sold_now,
            effective_rate=estimate.effective_tax_rate,
            potential_savings=estimate.potential_savings,
            harvestable_losses=harvestable,
            total_opportunities=len(opportunities),
            opportunities=opportunities,
        )

    def report(self, year: int, positions: list[Position]) -> TaxReport:
        gains = self.unrealized_gains(positions)

        st_gains = sum(g.gain for g in gains.short_term if g.gain > 0)
        st_losses = sum(-g.gain for g in gains.short_term if g.gain < 0)
        lt_gains = sum(g.gain for g in gains.long_term if g.gain > 0)
        lt_losses = sum(-g.gain for g in gains.long_term if g.gain < 0)

        net_short = st_gains - st_losses
        net_long = lt_gains - lt_losses

        return TaxReport(
            year=year,
            short_term_gains=st_gains,
            short_term_losses=st_losses,
            long_term_gains=lt_gains,
            long_term_losses=lt_losses,
            net_gain=net_short + net_long,
            estimated_tax=max(0.0, net_short) * TAX_RATE_SHORT
            + max(0.0, net_long) * TAX_RATE_LONG,
            tax_loss_opportunities=self.find_loss_opportunities(positions),
        )
