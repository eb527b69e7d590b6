from enum import StrEnum


class AssetType(StrEnum):
    STOCK = "stock"
    CRYPTO = "crypto"
    ETF = "etf"
    BOND = "bond"


class RiskLevel(StrEnum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    EXTREME = "extreme"

    @property
    def rank(self) -> int:
        order = [
            RiskLevel.LOW,
            RiskLevel.MODERATE,
            RiskLevel.HIGH,
            RiskLevel.EXTREME,
        ]
        return order.index(self)

    @staticmethod
    def from_weight(weight: float) -> "RiskLevel":
        if weight > 60:
            return RiskLevel.EXTREME
        if weight > 40:
            return RiskLevel.HIGH
        if weight > 25:
            return RiskLevel.MODERATE
        return RiskLevel.LOW


class Urgency(StrEnum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        mapping = {
            Urgency.CRITICAL: 0,
            Urgency.HIGH: 1,
            Urgency.MEDIUM: 2,
            Urgency.LOW: 3,
        }
        return mapping[self]


class HealthRating(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"

    @staticmethod
    def from_score(score: float) -> "HealthRating":
        if score >= 80:
            return HealthRating.EXCELLENT
        if score >= 65:
            return HealthRating.GOOD
        if score >= 50:
            return HealthRating.FAIR
        if score >= 30:
            return HealthRating.POOR
        return HealthRating.CRITICAL


class TaxRecommendation(StrEnum):
    HARVEST = "harvest"
    HOLD = "hold"
    AVOID = "avoid"


class RiskTolerance(StrEnum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"
