import pytest
from pydantic import TypeAdapter, ValidationError

from alpha_forge.models.advisory import (
    AlertRecommendation,
    BuyRecommendation,
    PortfolioAnalysis,
    Recommendation,
)
from alpha_forge.models.calendar import DividendFrequency
from alpha_forge.models.common import HealthRating, Urgency
from alpha_forge.models.position import Position, total_cost, total_value


class TestPosition:
    def test_camel_case_aliases(self):
        p = Position.model_validate(
            {"ticker": "aapl", "shares": 10, "avgPrice": 100, "currentPrice": 120}
        )
        assert p.ticker == "AAPL"
        assert p.avg_price == 100
        assert p.current_price == 120

    def test_snake_case_names(self):
        p = Position(ticker="MSFT", shares=5, avg_price=300.0)
        assert p.current_price == 0
        assert p.sector == "Unknown"

    def test_quote_fallback(self):
        p = Position(ticker="XOM", shares=10, avg_price=100.0)
        assert not p.has_quote
        assert p.market_value == 1000
        assert p.cost_basis == 1000

    def test_quoted_value(self):
        p = Position(ticker="XOM", shares=10, avg_price=100.0, current_price=110.0)
        assert p.has_quote
        assert p.market_value == 1100

    @pytest.mark.parametrize(
        "fields",
        [
            {"shares": -10, "avg_price": 100.0},
            {"shares": 0, "avg_price": 100.0},
            {"shares": 10, "avg_price": -5.0},
            {"shares": 10, "avg_price": 0.0},
            {"shares": 10, "avg_price": 100.0, "current_price": -1.0},
        ],
    )
    def test_impossible_values_rejected(self, fields):
        with pytest.raises(ValidationError):
            Position(ticker="X", **fields)

    def test_frozen(self):
        p = Position(ticker="XOM", shares=10, avg_price=100.0)
        with pytest.raises(ValidationError):
            p.shares = 20

    def test_totals(self):
        positions = [
            Position(ticker="A", shares=10, avg_price=10.0, current_price=20.0),
            Position(ticker="B", shares=5, avg_price=10.0),
        ]
        assert total_value(positions) == 250
        assert total_cost(positions) == 150


class TestEnums:
    def test_urgency_rank(self):
        ranks = [u.rank for u in (Urgency.CRITICAL, Urgency.HIGH, Urgency.MEDIUM, Urgency.LOW)]
        assert ranks == [0, 1, 2, 3]

    @pytest.mark.parametrize(
        "score,expected",
        [
            (95, HealthRating.EXCELLENT),
            (80, HealthRating.EXCELLENT),
            (70, HealthRating.GOOD),
            (50, HealthRating.FAIR),
            (44, HealthRating.POOR),
            (10, HealthRating.CRITICAL),
        ],
    )
    def test_health_from_score(self, score, expected):
        assert HealthRating.from_score(score) == expected

    def test_dividend_frequency(self):
        assert DividendFrequency.QUARTERLY.payments_per_year == 4
        assert DividendFrequency.SEMI_ANNUAL.months == [6, 12]
        assert len(DividendFrequency.MONTHLY.months) == 12


class TestRecommendation:
    def test_discriminated_parse(self):
        adapter = TypeAdapter(Recommendation)
        rec = adapter.validate_python(
            {
                "type": "buy",
                "ticker": "AAPL",
                "confidence": 60,
                "reasoning": "cheap",
                "action": "Buy 10 shares",
                "urgency": "low",
            }
        )
        assert isinstance(rec, BuyRecommendation)

    def test_unknown_type_rejected(self):
        adapter = TypeAdapter(Recommendation)
        with pytest.raises(ValidationError):
            adapter.validate_python(
                {
                    "type": "short",
                    "ticker": "AAPL",
                    "confidence": 60,
                    "reasoning": "",
                    "action": "",
                    "urgency": "low",
                }
            )

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            AlertRecommendation(
                ticker="X", confidence=101, reasoning="", action="", urgency=Urgency.LOW
            )

    def test_health_score_bounds(self):
        with pytest.raises(ValidationError):
            PortfolioAnalysis(overall_health=HealthRating.GOOD, health_score=120)
