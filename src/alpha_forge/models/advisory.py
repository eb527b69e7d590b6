from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from alpha_forge.models.common import HealthRating, Urgency


class BaseRecommendation(BaseModel):
    ticker: str
    confidence: int = Field(ge=0, le=100)
    reasoning: str
    action: str
    urgency: Urgency


class BuyRecommendation(BaseRecommendation):
    type: Literal["buy"] = "buy"


class SellRecommendation(BaseRecommendation):
    type: Literal["sell"] = "sell"


class HoldRecommendation(BaseRecommendation):
    type: Literal["hold"] = "hold"


class RebalanceRecommendation(BaseRecommendation):
    type: Literal["rebalance"] = "rebalance"


class AlertRecommendation(BaseRecommendation):
    type: Literal["alert"] = "alert"


Recommendation = Annotated[
    Union[
        BuyRecommendation,
        SellRecommendation,
        HoldRecommendation,
        RebalanceRecommendation,
        AlertRecommendation,
    ],
    Field(discriminator="type"),
]


class ScenarioResult(BaseModel):
    name: str
    description: str
    portfolio_value: float
    change: float
    change_percent: float


class PortfolioAnalysis(BaseModel):
    overall_health: HealthRating
    health_score: float = Field(ge=0, le=100)
    strengths: list[str] = []
    weaknesses: list[str] = []
    recommendations: list[Recommendation] = []
    scenario_analysis: list[ScenarioResult] = []
