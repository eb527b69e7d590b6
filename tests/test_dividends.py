from datetime import date

import pytest

from alpha_forge.analysis.dividends import (
    add_months,
    dividend_calendar,
    dividend_summary,
    next_dividend_dates,
    ticker_hash,
)
from alpha_forge.config import ReferenceData
from alpha_forge.models.calendar import DividendFrequency
from alpha_forge.models.position import Position

TODAY = date(2025, 1, 10)


def make_position(ticker: str, shares: float = 100, avg: float = 150.0, cur: float = 200.0):
    return Position(ticker=ticker, shares=shares, avg_price=avg, current_price=cur)


class TestDateHelpers:
    def test_ticker_hash(self):
        assert ticker_hash("AAPL") == 286

    def test_add_months_clamps(self):
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_add_months_crosses_year(self):
        assert add_months(date(2025, 3, 28), -3) == date(2024, 12, 28)
        assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)

    def test_next_dates_quarterly(self):
        ex, pay = next_dividend_dates("AAPL", DividendFrequency.QUARTERLY, TODAY)
        assert ex == date(2025, 3, 7)
        assert pay == date(2025, 3, 28)

    def test_next_dates_roll_over_year(self):
        ex, _ = next_dividend_dates(
            "AAPL", DividendFrequency.QUARTERLY, date(2025, 12, 20)
        )
        assert ex == date(2026, 3, 7)

    def test_ex_date_strictly_after_today(self):
        ex, _ = next_dividend_dates("AAPL", DividendFrequency.QUARTERLY, date(2025, 3, 7))
        assert ex == date(2025, 6, 7)

    @pytest.mark.parametrize(
        "frequency,expected",
        [
            (DividendFrequency.MONTHLY, date(2025, 2, 7)),
            (DividendFrequency.SEMI_ANNUAL, date(2025, 6, 7)),
            (DividendFrequency.ANNUAL, date(2025, 12, 7)),
        ],
    )
    def test_other_frequencies(self, frequency, expected):
        ex, _ = next_dividend_dates("AAPL", frequency, TODAY)
        assert ex == expected


class TestDividendSummary:
    def test_single_payer(self):
        summary = dividend_summary([make_position("AAPL")], TODAY)

        assert summary.annual_income == pytest.approx(100)
        assert summary.monthly_average == pytest.approx(100 / 12)
        assert summary.portfolio_yield == pytest.approx(0.5)
        assert summary.yield_on_cost == pytest.approx(100 / 15_000 * 100)

        assert len(summary.upcoming_events) == 1
        event = summary.upcoming_events[0]
        assert event.ex_date == date(2025, 3, 7)
        assert event.pay_date == date(2025, 3, 28)
        assert event.dividend_yield == 0.5

        assert len(summary.recent_payments) == 1
        recent = summary.recent_payments[0]
        assert recent.ex_date == date(2024, 12, 7)
        assert recent.pay_date == date(2024, 12, 28)

    def test_non_payers_ignored(self):
        summary = dividend_summary([make_position("TSLA")], TODAY)
        assert summary.annual_income == 0
        assert summary.portfolio_yield == 0
        assert summary.yield_on_cost == 0
        assert summary.upcoming_events == []

    def test_upcoming_sorted(self):
        positions = [make_position(t) for t in ("JNJ", "AAPL", "KO", "XOM", "JPM")]
        summary = dividend_summary(positions, TODAY)
        dates = [e.ex_date for e in summary.upcoming_events]
        assert dates == sorted(dates)
        assert all(d > TODAY for d in dates)

    def test_custom_reference(self):
        reference = ReferenceData(
            dividends={"ABC": {"amount": 1.0, "frequency": "monthly", "yield": 6.0}}
        )
        summary = dividend_summary([make_position("ABC", 10)], TODAY, reference)
        assert summary.annual_income == pytest.approx(120)
        assert summary.upcoming_events[0].frequency == DividendFrequency.MONTHLY

    def test_unknown_frequency_treated_as_quarterly(self):
        reference = ReferenceData(
            dividends={"ABC": {"amount": 1.0, "frequency": "weekly", "yield": 1.0}}
        )
        summary = dividend_summary([make_position("ABC", 10)], TODAY, reference)
        assert summary.annual_income == pytest.approx(40)


class TestDividendCalendar:
    def test_two_occurrences(self):
        events = dividend_calendar([make_position("AAPL")], TODAY)
        assert [e.ex_date for e in events] == [date(2025, 3, 7), date(2025, 6, 7)]
        assert [e.pay_date for e in events] == [date(2025, 3, 28), date(2025, 6, 28)]

    def test_sorted_across_tickers(self):
        positions = [make_position(t) for t in ("KO", "AAPL", "JNJ")]
        events = dividend_calendar(positions, TODAY)
        assert len(events) == 6
        dates = [e.ex_date for e in events]
        assert dates == sorted(dates)
