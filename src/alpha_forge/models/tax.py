from pydantic import BaseModel

from alpha_forge.models.common import TaxRecommendation


class UnrealizedGain(BaseModel):
    ticker: str
    gain: float
    shares: float


class UnrealizedGains(BaseModel):
    short_term: list[UnrealizedGain] = []
    long_term: list[UnrealizedGain] = []
    total_unrealized_gain: float = 0.0


class TaxLossOpportunity(BaseModel):
    ticker: str
    current_loss: float
    days_held: int
    recommendation: TaxRecommendation
    reasoning: str


class TaxEstimate(BaseModel):
    unrealized_gains: float = 0.0
    estimated_tax_if_sold_now: float = 0.0
    effective_tax_rate: float = 0.0
    potential_savings: float = 0.0


class TaxSummary(BaseModel):
    unrealized_gain: float = 0.0
    unrealized_gain_formatted: str = "+$0"
    estimated_tax: float = 0.0
    effective_rate: float = 0.0
    potential_savings: float = 0.0
    harvestable_losses: list[TaxLossOpportunity] = []
    total_opportunities: int = 0
    opportunities: list[TaxLossOpportunity] = []


class TaxReport(BaseModel):
    year: int
    short_term_gains: float = 0.0
    short_term_losses: float = 0.0
    long_term_gains: float = 0.0
    long_term_losses: float = 0.0
    net_gain: float = 0.0
    estimated_tax: float = 0.0
    tax_loss_opportunities: list[TaxLossOpportunity] = []
