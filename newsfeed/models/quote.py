"""Stock ticker models for the side panel."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StockQuote(BaseModel):
    """Latest price and day-over-day change for one symbol.

    Serialised with camelCase ``changePercent`` to match the frontend.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str
    price: float
    change: float
    change_percent: float = Field(alias="changePercent")
    currency: str = "USD"
    timestamp: str
    error: str | None = None


class PriceHistory(BaseModel):
    """Daily closing prices for one symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    currency: str = "USD"
    timestamps: list[int] = Field(default_factory=list, description="Unix seconds.")
    closes: list[float | None] = Field(default_factory=list)
