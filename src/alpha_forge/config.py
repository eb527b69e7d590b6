from pydantic import BaseModel, Field

BETA_MAP: dict[str, float] = {
    "AAPL": 1.20,
    "MSFT": 0.90,
    "NVDA": 1.75,
    "TSLA": 2.00,
    "AMZN": 1.15,
    "GOOGL": 1.05,
    "META": 1.35,
    "NFLX": 1.25,
    "AMD": 1.85,
    "INTC": 0.85,
    "CRM": 1.10,
    "ORCL": 0.95,
    "JPM": 1.15,
    "BAC": 1.30,
    "V": 0.95,
    "MA": 0.90,
    "JNJ": 0.60,
    "PFE": 0.65,
    "UNH": 0.80,
    "XOM": 0.90,
    "CVX": 0.85,
    "KO": 0.55,
    "WMT": 0.45,
    "DIS": 1.10,
    "NKE": 0.85,
    "BTC": 1.50,
    "ETH": 1.60,
    "SPY": 1.00,
    "VOO": 1.00,
    "QQQ": 1.15,
}

DIVIDEND_DATA: dict[str, dict] = {
    "AAPL": {"amount": 0.25, "frequency": "quarterly", "yield": 0.5},
    "MSFT": {"amount": 0.75, "frequency": "quarterly", "yield": 0.7},
    "JNJ": {"amount": 1.24, "frequency": "quarterly", "yield": 2.9},
    "KO": {"amount": 0.48, "frequency": "quarterly", "yield": 3.1},
    "WMT": {"amount": 0.83, "frequency": "quarterly", "yield": 1.4},
    "XOM": {"amount": 0.95, "frequency": "quarterly", "yield": 3.2},
    "CVX": {"amount": 1.63, "frequency": "quarterly", "yield": 4.1},
    "JPM": {"amount": 1.25, "frequency": "quarterly", "yield": 2.4},
    "BAC": {"amount": 0.26, "frequency": "quarterly", "yield": 2.5},
    "V": {"amount": 0.62, "frequency": "quarterly", "yield": 0.7},
    "MA": {"amount": 0.66, "frequency": "quarterly", "yield": 0.5},
    "PFE": {"amount": 0.42, "frequency": "quarterly", "yield": 5.9},
    "T": {"amount": 0.28, "frequency": "quarterly", "yield": 6.5},
    "VZ": {"amount": 0.67, "frequency": "quarterly", "yield": 6.8},
    "SPY": {"amount": 1.58, "frequency": "quarterly", "yield": 1.3},
    "VOO": {"amount": 1.54, "frequency": "quarterly", "yield": 1.3},
    "QQQ": {"amount": 0.54, "frequency": "quarterly", "yield": 0.6},
    "SCHD": {"amount": 0.65, "frequency": "quarterly", "yield": 3.4},
    "VYM": {"amount": 0.85, "frequency": "quarterly", "yield": 2.9},
}

EARNINGS_DATA: dict[str, dict] = {
    "AAPL": {"company_name": "Apple Inc.", "eps_estimate": 2.10, "revenue_estimate": 119e9, "historical_beat_rate": 72},
    "MSFT": {"company_name": "Microsoft Corp.", "eps_estimate": 3.15, "revenue_estimate": 66e9, "historical_beat_rate": 78},
    "NVDA": {"company_name": "NVIDIA Corp.", "eps_estimate": 4.55, "revenue_estimate": 28e9, "historical_beat_rate": 85},
    "TSLA": {"company_name": "Tesla Inc.", "eps_estimate": 0.85, "revenue_estimate": 26e9, "historical_beat_rate": 55},
    "AMZN": {"company_name": "Amazon.com Inc.", "eps_estimate": 1.45, "revenue_estimate": 166e9, "historical_beat_rate": 65},
    "GOOGL": {"company_name": "Alphabet Inc.", "eps_estimate": 1.85, "revenue_estimate": 86e9, "historical_beat_rate": 70},
    "META": {"company_name": "Meta Platforms", "eps_estimate": 5.25, "revenue_estimate": 46e9, "historical_beat_rate": 68},
    "NFLX": {"company_name": "Netflix Inc.", "eps_estimate": 4.75, "revenue_estimate": 10e9, "historical_beat_rate": 62},
    "AMD": {"company_name": "Advanced Micro Devices", "eps_estimate": 0.95, "revenue_estimate": 7.5e9, "historical_beat_rate": 75},
    "INTC": {"company_name": "Intel Corp.", "eps_estimate": 0.12, "revenue_estimate": 14e9, "historical_beat_rate": 45},
    "CRM": {"company_name": "Salesforce Inc.", "eps_estimate": 2.65, "revenue_estimate": 9.8e9, "historical_beat_rate": 73},
    "ORCL": {"company_name": "Oracle Corp.", "eps_estimate": 1.45, "revenue_estimate": 14.5e9, "historical_beat_rate": 68},
    "JPM": {"company_name": "JPMorgan Chase", "eps_estimate": 4.85, "revenue_estimate": 43e9, "historical_beat_rate": 80},
    "BAC": {"company_name": "Bank of America", "eps_estimate": 0.82, "revenue_estimate": 25.5e9, "historical_beat_rate": 75},
    "V": {"company_name": "Visa Inc.", "eps_estimate": 2.65, "revenue_estimate": 9.5e9, "historical_beat_rate": 82},
    "MA": {"company_name": "Mastercard Inc.", "eps_estimate": 3.45, "revenue_estimate": 7.2e9, "historical_beat_rate": 85},
    "JNJ": {"company_name": "Johnson & Johnson", "eps_estimate": 2.75, "revenue_estimate": 22e9, "historical_beat_rate": 70},
    "PFE": {"company_name": "Pfizer Inc.", "eps_estimate": 0.65, "revenue_estimate": 15e9, "historical_beat_rate": 60},
    "XOM": {"company_name": "Exxon Mobil", "eps_estimate": 2.15, "revenue_estimate": 95e9, "historical_beat_rate": 72},
    "CVX": {"company_name": "Chevron Corp.", "eps_estimate": 3.25, "revenue_estimate": 52e9, "historical_beat_rate": 74},
    "KO": {"company_name": "Coca-Cola", "eps_estimate": 0.72, "revenue_estimate": 11.5e9, "historical_beat_rate": 78},
    "WMT": {"company_name": "Walmart Inc.", "eps_estimate": 1.65, "revenue_estimate": 176e9, "historical_beat_rate": 71},
    "DIS": {"company_name": "Walt Disney", "eps_estimate": 1.25, "revenue_estimate": 24.5e9, "historical_beat_rate": 58},
    "NKE": {"company_name": "Nike Inc.", "eps_estimate": 0.85, "revenue_estimate": 13e9, "historical_beat_rate": 76},
    "UBER": {"company_name": "Uber Technologies", "eps_estimate": 0.45, "revenue_estimate": 11.5e9, "historical_beat_rate": 48},
    "ABNB": {"company_name": "Airbnb Inc.", "eps_estimate": 1.15, "revenue_estimate": 2.8e9, "historical_beat_rate": 55},
}

MEGA_CAP_TICKERS: tuple[str, ...] = (
    "AAPL",
    "MSFT",
    "NVDA",
    "TSLA",
    "AMZN",
    "GOOGL",
    "META",
)


class ReferenceData(BaseModel):
    """Static lookup tables the engines read from.

    Passed into each analyzer so tests can swap in their own tables.
    """

    betas: dict[str, float] = Field(default_factory=lambda: BETA_MAP.copy())
    default_beta: float = 1.0
    dividends: dict[str, dict] = Field(default_factory=lambda: DIVIDEND_DATA.copy())
    earnings: dict[str, dict] = Field(default_factory=lambda: EARNINGS_DATA.copy())
    mega_caps: tuple[str, ...] = MEGA_CAP_TICKERS

    def beta_for(self, ticker: str) -> float:
        return self.betas.get(ticker.upper(), self.default_beta)


class AnalysisConfig(BaseModel):
    other_income: float = 100_000.0
    risk_free_rate: float = 2.0
    market_volatility: float = 15.0
    seed: int | None = None
