from datetime import date

from pydantic import BaseModel

from alpha_forge.models.advisory import PortfolioAnalysis
from alpha_forge.models.calendar import DividendSummary, EarningsSummary
from alpha_forge.models.position import Position
from alpha_forge.models.risk import RiskMetrics
from alpha_forge.models.tax import TaxSummary


class PortfolioReport(BaseModel):
    as_of: date
    positions: list[Position] = []
    risk: RiskMetrics = RiskMetrics()
    tax: TaxSummary = TaxSummary()
    analysis: PortfolioAnalysis | None = None
    dividends: DividendSummary | None = None
    earnings: EarningsSummary | None = None

    @property
    def total_value(self) -> float:
        return self.risk.total_value

    @property
    def total_cost(self) -> float:
        return sum(p.cost_basis for p in self.positions)
