from datetime import date
from enum import StrEnum

from pydantic import BaseModel


class DividendFrequency(StrEnum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi-annual"
    ANNUAL = "annual"

    @property
    def payments_per_year(self) -> int:
        mapping = {
            DividendFrequency.MONTHLY: 12,
            DividendFrequency.QUARTERLY: 4,
            DividendFrequency.SEMI_ANNUAL: 2,
            DividendFrequency.ANNUAL: 1,
        }
        return mapping[self]

    @property
    def months(self) -> list[int]:
        """Calendar months (1-12) in which ex-dates fall."""
        if self is DividendFrequency.MONTHLY:
            return list(range(1, 13))
        if self is DividendFrequency.QUARTERLY:
            return [3, 6, 9, 12]
        if self is DividendFrequency.SEMI_ANNUAL:
            return [6, 12]
        return [12]


class ReportTime(StrEnum):
    BEFORE = "before"
    AFTER = "after"
    DURING = "during"


class DividendEvent(BaseModel):
    ticker: str
    ex_date: date
    pay_date: date
    amount: float
    dividend_yield: float
    frequency: DividendFrequency


class DividendSummary(BaseModel):
    annual_income: float = 0.0
    monthly_average: float = 0.0
    portfolio_yield: float = 0.0
    yield_on_cost: float = 0.0
    upcoming_events: list[DividendEvent] = []
    recent_payments: list[DividendEvent] = []


class EarningsEvent(BaseModel):
    ticker: str
    company_name: str
    report_date: date
    report_time: ReportTime
    eps_estimate: float = 0.0
    revenue_estimate: float = 0.0
    historical_beat_rate: float = 50.0


class EarningsSummary(BaseModel):
    this_week: list[EarningsEvent] = []
    next_week: list[EarningsEvent] = []
    this_month: list[EarningsEvent] = []
    total_upcoming: int = 0
    high_impact_events: list[EarningsEvent] = []
