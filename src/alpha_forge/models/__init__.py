from alpha_forge.models.advisory import PortfolioAnalysis, Recommendation
from alpha_forge.models.common import (
    AssetType,
    HealthRating,
    RiskLevel,
    TaxRecommendation,
    Urgency,
)
from alpha_forge.models.position import Position
from alpha_forge.models.risk import RiskMetrics
from alpha_forge.models.tax import TaxSummary

__all__ = [
    "AssetType",
    "HealthRating",
    "PortfolioAnalysis",
    "Position",
    "Recommendation",
    "RiskLevel",
    "RiskMetrics",
    "TaxRecommendation",
    "TaxSummary",
    "Urgency",
]
