from alpha_forge.analysis.risk import RiskAnalyzer
from alpha_forge.models.advisory import (
    AlertRecommendation,
    PortfolioAnalysis,
    RebalanceRecommendation,
    Recommendation,
    ScenarioResult,
    SellRecommendation,
)
from alpha_forge.models.common import HealthRating, RiskTolerance, Urgency
from alpha_forge.models.position import Position, total_value

BASE_HEALTH = 70
STRENGTH_BONUS = 5
WEAKNESS_PENALTY = 8
BETA_PENALTY = 10

MIN_SECTORS = 3
MAX_SECTOR_WEIGHT = 50
MAX_POSITION_WEIGHT = 20
HIGH_BETA = 1.3
LOW_BETA = 0.8
TAKE_PROFIT_PCT = 50
STOP_LOSS_PCT = -30

TECH_SECTOR = "Technology"

# name, description, uniform market shock
MARKET_SCENARIOS: list[tuple[str, str, float]] = [
    ("Bull Market", "Market rallies 20% over next 12 months", 0.20),
    ("Bear Market", "Market declines 20% over next 12 months", -0.20),
    ("Recession", "Severe downturn, market drops 35%", -0.35),
]
TECH_BOOM_SHOCK = 0.40

TOLERANCE_GUIDANCE: dict[RiskTolerance, list[str]] = {
    RiskTolerance.CONSERVATIVE: [
        "Consider increasing bond/ETF allocation to 30-40%",
        "Focus on dividend-paying stocks",
        "Avoid high-beta (>1.5) positions",
    ],
    RiskTolerance.MODERATE: [
        "Maintain 60-70% stocks, 30-40% bonds/stable assets",
        "Diversify across 15-20 positions",
        "Rebalance quarterly",
    ],
    RiskTolerance.AGGRESSIVE: [
        "Growth stocks and emerging sectors",
        "Consider 10-15% in crypto/speculative",
        "High conviction concentrated bets OK",
    ],
}


def empty_analysis() -> PortfolioAnalysis:
    return PortfolioAnalysis(
        overall_health=HealthRating.CRITICAL,
        health_score=0,
        strengths=[],
        weaknesses=["Portfolio is empty"],
        recommendations=[
            AlertRecommendation(
                ticker="PORTFOLIO",
                confidence=100,
                reasoning=(
                    "No positions found. Start by adding stocks to your portfolio."
                ),
                action="Add at least 5-10 diversified positions",
                urgency=Urgency.HIGH,
            )
        ],
        scenario_analysis=[],
    )


class PortfolioAdvisor:
    """Rule-based portfolio review built on top of :class:`RiskAnalyzer`.

    Each rule may add a strength, a weakness and one or more recommendations.
    The health score starts at 70 and moves with the counts of each plus a
    beta penalty. Recommendations come back ordered by urgency, keeping rule
    order within a tier.
    """

    def __init__(self, risk_analyzer: RiskAnalyzer | None = None) -> None:
        self.risk_analyzer = risk_analyzer or RiskAnalyzer()

    def analyze(self, positions: list[Position]) -> PortfolioAnalysis:
        if not positions:
            return empty_analysis()

        risk = self.risk_analyzer.analyze(positions)
        recommendations: list[Recommendation] = []
        strengths: list[str] = []
        weaknesses: list[str] = []

        # Diversification
        sector_count = len(risk.sector_concentration)
        if sector_count < MIN_SECTORS:
            weaknesses.append("Poor sector diversification")
            recommendations.append(
                RebalanceRecommendation(
                    ticker="PORTFOLIO",
                    confidence=90,
                    reasoning=(
                        f"Only {sector_count} sectors represented. Consider adding "
                        "positions in Healthcare, Energy, or Consumer sectors."
                    ),
                    action="Add 2-3 positions in underrepresented sectors",
                    urgency=Urgency.HIGH,
                )
            )
        else:
            strengths.append("Good sector diversification")

        top = risk.sector_concentration[0] if risk.sector_concentration else None
        if top and top.weight > MAX_SECTOR_WEIGHT:
            weaknesses.append(
                f"Heavy concentration in {top.sector} ({top.weight:.1f}%)"
            )
            recommendations.append(
                RebalanceRecommendation(
                    ticker=top.sector,
                    confidence=85,
                    reasoning=(
                        f"{top.weight:.1f}% in one sector increases vulnerability "
                        "to sector-specific downturns."
                    ),
                    action=f"Reduce {top.sector} exposure to under 40%",
                    urgency=Urgency.MEDIUM,
                )
            )

        # Position sizing
        for pr in risk.position_risks:
            if pr.weight <= MAX_POSITION_WEIGHT:
                continue
            weaknesses.append(f"Oversized position: {pr.ticker} ({pr.weight:.1f}%)")
            recommendations.append(
                RebalanceRecommendation(
                    ticker=pr.ticker,
                    confidence=80,
                    reasoning=(
                        "Position exceeds 20% of portfolio. Consider trimming "
                        "to reduce concentration risk."
                    ),
                    action=f"Trim {pr.ticker} to 15% or less of portfolio",
                    urgency=Urgency.MEDIUM,
                )
            )

        # Market sensitivity
        beta = risk.portfolio_beta
        if beta > HIGH_BETA:
            weaknesses.append("High portfolio beta increases volatility")
            recommendations.append(
                RebalanceRecommendation(
                    ticker="PORTFOLIO",
                    confidence=75,
                    reasoning=(
                        f"Beta of {beta:.2f} means portfolio moves "
                        f"{beta * 100 - 100:.0f}% more than market."
                    ),
                    action=(
                        "Add low-beta defensive stocks (utilities, consumer staples)"
                    ),
                    urgency=Urgency.MEDIUM,
                )
            )
        elif beta < LOW_BETA:
            strengths.append("Defensive portfolio with low market correlation")

        # Per-position profit taking and stop losses
        for p in positions:
            if not p.has_quote or p.avg_price <= 0:
                continue
            pnl = (p.current_price - p.avg_price) / p.avg_price * 100
            if pnl > TAKE_PROFIT_PCT:
                recommendations.append(
                    SellRecommendation(
                        ticker=p.ticker,
                        confidence=70,
                        reasoning=(
                            f"Up {pnl:.1f}%. Consider taking partial profits "
                            "to lock in gains."
                        ),
                        action=f"Sell 25-50% of {p.ticker} position",
                        urgency=Urgency.LOW,
                    )
                )
            if pnl < STOP_LOSS_PCT:
                weaknesses.append(f"{p.ticker} showing significant losses")
                recommendations.append(
                    SellRecommendation(
                        ticker=p.ticker,
                        confidence=75,
                        reasoning=(
                            f"Down {abs(pnl):.1f}%. Consider cutting losses or "
                            "averaging down if thesis still valid."
                        ),
                        action=f"Review {p.ticker} thesis - hold or cut losses",
                        urgency=Urgency.HIGH,
                    )
                )

        score = health_score(len(strengths), len(weaknesses), beta)
        recommendations.sort(key=lambda r: r.urgency.rank)

        return PortfolioAnalysis(
            overall_health=HealthRating.from_score(score),
            health_score=score,
            strengths=strengths,
            weaknesses=weaknesses,
            recommendations=recommendations,
            scenario_analysis=run_scenarios(positions, risk.total_value),
        )

    def advice(
        self,
        positions: list[Position],
        risk_tolerance: RiskTolerance = RiskTolerance.MODERATE,
    ) -> str:
        analysis = self.analyze(positions)
        lines = [
            f"Portfolio Health: {analysis.overall_health.value.upper()} "
            f"({analysis.health_score:.0f}/100)",
            "",
        ]

        if analysis.strengths:
            lines.append("Strengths:")
            lines.extend(f"  - {s}" for s in analysis.strengths)
            lines.append("")

        if analysis.weaknesses:
            lines.append("Areas to Improve:")
            lines.extend(f"  - {w}" for w in analysis.weaknesses)
            lines.append("")

        lines.append("Top Recommendations:")
        for i, rec in enumerate(analysis.recommendations[:3], start=1):
            lines.append(
                f"{i}. [{rec.urgency.value.upper()}] {rec.type.upper()} {rec.ticker}"
            )
            lines.append(f"   {rec.reasoning}")
            lines.append(f"   -> {rec.action}")
            lines.append("")

        lines.append(f"For {risk_tolerance.value} investors:")
        lines.extend(f"  - {g}" for g in TOLERANCE_GUIDANCE[risk_tolerance])
        return "\n".join(lines) + "\n"


def health_score(strengths: int, weaknesses: int, beta: float) -> float:
    score = BASE_HEALTH
    score += strengths * STRENGTH_BONUS
    score -= weaknesses * WEAKNESS_PENALTY
    score -= (beta - 1) * BETA_PENALTY
    return max(0.0, min(100.0, score))


def run_scenarios(
    positions: list[Position], current_value: float | None = None
) -> list[ScenarioResult]:
    if current_value is None:
        current_value = total_value(positions)

    scenarios = [
        ScenarioResult(
            name=name,
            description=description,
            portfolio_value=current_value * (1 + shock),
            change=current_value * shock,
            change_percent=shock * 100,
        )
        for name, description, shock in MARKET_SCENARIOS
    ]

    tech_value = sum(p.market_value for p in positions if p.sector == TECH_SECTOR)
    tech_change = tech_value * TECH_BOOM_SHOCK
    scenarios.append(
        ScenarioResult(
            name="AI/Tech Boom",
            description="Technology sector surges 40%",
            portfolio_value=current_value + tech_change,
            change=tech_change,
            change_percent=tech_change / current_value * 100
            if current_value > 0
            else 0.0,
        )
    )
    return scenarios
