from __future__ import annotations

import logging
from datetime import date, timedelta

from alpha_forge.analysis.dividends import ticker_hash
from alpha_forge.config import ReferenceData
from alpha_forge.models.calendar import EarningsEvent, EarningsSummary, ReportTime
from alpha_forge.models.position import Position

logger = logging.getLogger(__name__)

EARNINGS_WEEKS = list(range(1, 53, 3))
REPORT_TIMES = [ReportTime.BEFORE, ReportTime.AFTER, ReportTime.DURING]
HIGH_BEAT_RATE = 75


def next_report_date(ticker: str, today: date) -> tuple[date, ReportTime]:
    h = ticker_hash(ticker)
    current_week = (today - date(today.year, 1, 1)).days // 7

    upcoming = [w for w in EARNINGS_WEEKS if w > current_week]
    if upcoming:
        year, week = today.year, upcoming[0]
    else:
        year, week = today.year + 1, EARNINGS_WEEKS[0]

    report_date = date(year, 1, 1) + timedelta(days=(week - 1) * 7 + h % 5)
    return report_date, REPORT_TIMES[h % 3]


def _build_event(
    ticker: str, data: dict, today: date, fallback_name: str = ""
) -> EarningsEvent:
    report_date, report_time = next_report_date(ticker, today)
    return EarningsEvent(
        ticker=ticker,
        company_name=data.get("company_name") or fallback_name or ticker,
        report_date=report_date,
        report_time=report_time,
        eps_estimate=data.get("eps_estimate", 0.0),
        revenue_estimate=data.get("revenue_estimate", 0.0),
        historical_beat_rate=data.get("historical_beat_rate", 50.0),
    )


def earnings_calendar(
    positions: list[Position],
    today: date | None = None,
    reference: ReferenceData | None = None,
) -> EarningsSummary:
    today = today or date.today()
    reference = reference or ReferenceData()

    events: list[EarningsEvent] = []
    for p in positions:
        data = reference.earnings.get(p.ticker)
        if not data:
            logger.debug("No earnings reference data for %s", p.ticker)
            continue
        events.append(_build_event(p.ticker, data, today, p.name))

    events.sort(key=lambda e: e.report_date)

    one_week = today + timedelta(days=7)
    two_weeks = today + timedelta(days=14)
    one_month = today + timedelta(days=30)

    this_week = [e for e in events if e.report_date <= one_week]
    next_week = [e for e in events if one_week < e.report_date <= two_weeks]
    this_month = [e for e in events if e.report_date <= one_month]

    high_impact = [
        e
        for e in this_week
        if e.historical_beat_rate > HIGH_BEAT_RATE or e.ticker in reference.mega_caps
    ]

    return EarningsSummary(
        this_week=this_week,
        next_week=next_week,
        this_month=this_month,
        total_upcoming=len(events),
        high_impact_events=high_impact,
    )


def next_earnings_date(
    ticker: str,
    today: date | None = None,
    reference: ReferenceData | None = None,
) -> EarningsEvent | None:
    reference = reference or ReferenceData()
    ticker = ticker.upper()
    data = reference.earnings.get(ticker)
    if not data:
        return None
    return _build_event(ticker, data, today or date.today())
