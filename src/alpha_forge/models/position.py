from pydantic import BaseModel, ConfigDict, Field, field_validator

from alpha_forge.models.common import AssetType


class Position(BaseModel):
    """A single holding as supplied by the position store.

    ``current_price`` of ``0`` means no live quote has arrived yet; valuation
    then falls back to ``avg_price``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    ticker: str
    shares: float = Field(gt=0)
    avg_price: float = Field(gt=0, alias="avgPrice")
    current_price: float = Field(default=0.0, ge=0, alias="currentPrice")
    sector: str = "Unknown"
    type: AssetType = AssetType.STOCK
    name: str = ""

    @field_validator("ticker")
    @classmethod
    def _upper_ticker(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def has_quote(self) -> bool:
        return self.current_price > 0

    @property
    def effective_price(self) -> float:
        return self.current_price if self.has_quote else self.avg_price

    @property
    def market_value(self) -> float:
        return self.shares * self.effective_price

    @property
    def cost_basis(self) -> float:
        return self.shares * self.avg_price


def total_value(positions: list[Position]) -> float:
    return sum(p.market_value for p in positions)


def total_cost(positions: list[Position]) -> float:
    return sum(p.cost_basis for p in positions)
