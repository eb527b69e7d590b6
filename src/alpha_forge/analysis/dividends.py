from __future__ import annotations

import calendar
import logging
from datetime import date, timedelta

from alpha_forge.config import ReferenceData
from alpha_forge.models.calendar import (
    DividendEvent,
    DividendFrequency,
    DividendSummary,
)
from alpha_forge.models.position import Position

logger = logging.getLogger(__name__)

PAY_DATE_LAG_DAYS = 21
MAX_UPCOMING = 10
MAX_RECENT = 5
CALENDAR_OCCURRENCES = 2


def ticker_hash(ticker: str) -> int:
    return sum(ord(c) for c in ticker)


def add_months(d: date, months: int) -> date:
    """Shift ``d`` by whole months, clamping to the last day of the month."""
    index = d.month - 1 + months
    year = d.year + index // 12
    month = index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _frequency(data: dict) -> DividendFrequency:
    try:
        return DividendFrequency(data.get("frequency", "quarterly"))
    except ValueError:
        logger.debug("Unknown dividend frequency %r", data.get("frequency"))
        return DividendFrequency.QUARTERLY


def next_dividend_dates(
    ticker: str, frequency: DividendFrequency, today: date
) -> tuple[date, date]:
    """Return the next (ex_date, pay_date) strictly after ``today``."""
    base_day = ticker_hash(ticker) % 28 + 1
    months = frequency.months

    ex_date = None
    for month in months:
        candidate = date(today.year, month, base_day)
        if candidate > today:
            ex_date = candidate
            break
    if ex_date is None:
        ex_date = date(today.year + 1, months[0], base_day)

    return ex_date, ex_date + timedelta(days=PAY_DATE_LAG_DAYS)


def _event(
    ticker: str,
    ex_date: date,
    pay_date: date,
    data: dict,
    frequency: DividendFrequency,
) -> DividendEvent:
    return DividendEvent(
        ticker=ticker,
        ex_date=ex_date,
        pay_date=pay_date,
        amount=data.get("amount", 0.0),
        dividend_yield=data.get("yield", 0.0),
        frequency=frequency,
    )


def dividend_summary(
    positions: list[Position],
    today: date | None = None,
    reference: ReferenceData | None = None,
) -> DividendSummary:
    today = today or date.today()
    reference = reference or ReferenceData()

    annual_income = 0.0
    total_cost = 0.0
    total_value = 0.0
    upcoming: list[DividendEvent] = []
    recent: list[DividendEvent] = []

    for p in positions:
        data = reference.dividends.get(p.ticker)
        if not data:
            continue

        total_value += p.market_value
        total_cost += p.cost_basis

        frequency = _frequency(data)
        per_year = frequency.payments_per_year
        annual_income += data.get("amount", 0.0) * per_year * p.shares

        ex_date, pay_date = next_dividend_dates(p.ticker, frequency, today)
        upcoming.append(_event(p.ticker, ex_date, pay_date, data, frequency))

        step = -(12 // per_year)
        prev_pay = add_months(pay_date, step)
        if prev_pay < today:
            prev_ex = add_months(ex_date, step)
            recent.append(_event(p.ticker, prev_ex, prev_pay, data, frequency))

    upcoming.sort(key=lambda e: e.ex_date)
    recent.sort(key=lambda e: e.pay_date, reverse=True)

    return DividendSummary(
        annual_income=annual_income,
        monthly_average=annual_income / 12,
        portfolio_yield=annual_income / total_value * 100 if total_value > 0 else 0.0,
        yield_on_cost=annual_income / total_cost * 100 if total_cost > 0 else 0.0,
        upcoming_events=upcoming[:MAX_UPCOMING],
        recent_payments=recent[:MAX_RECENT],
    )


def dividend_calendar(
    positions: list[Position],
    today: date | None = None,
    reference: ReferenceData | None = None,
) -> list[DividendEvent]:
    today = today or date.today()
    reference = reference or ReferenceData()

    events: list[DividendEvent] = []
    for p in positions:
        data = reference.dividends.get(p.ticker)
        if not data:
            continue
        frequency = _frequency(data)
        ex_date, pay_date = next_dividend_dates(p.ticker, frequency, today)
        step = 12 // frequency.payments_per_year
        for i in range(CALENDAR_OCCURRENCES):
            events.append(
                _event(
                    p.ticker,
                    add_months(ex_date, step * i),
                    add_months(pay_date, step * i),
                    data,
                    frequency,
                )
            )

    return sorted(events, key=lambda e: e.ex_date)
