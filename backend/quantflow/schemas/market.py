"""
CONTRACT 1: Series Source

Input: SeriesRequest
Output: SymbolSeries

The simulated market produces one OHLCV bar per trading day, oldest first.
Validation here is the Series Source's job: bars reaching the Indicator
Engine already have positive prices and strictly increasing dates.
"""

import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class TimeRange(str, Enum):
    M1 = "1M"
    M6 = "6M"
    Y1 = "1Y"
    Y2 = "2Y"

    @property
    def bars(self) -> int:
        """Trailing trading-day bars shown for this range."""
        return TIME_RANGE_BARS[self]


TIME_RANGE_BARS = {
    TimeRange.M1: 21,
    TimeRange.M6: 126,
    TimeRange.Y1: 252,
    TimeRange.Y2: 504,
}


# =============================================================================
# INPUT: SeriesRequest
# =============================================================================


class SeriesRequest(BaseModel):
    """
    Request for a simulated daily series.
    Sent by: API endpoints
    Received by: Market Data Service
    """

    ticker: str = Field(..., min_length=1, description="Ticker symbol (e.g. 'AAPL')")
    days: Optional[int] = Field(
        default=None,
        ge=1,
        le=5000,
        description="Calendar days of history (defaults to settings.history_days)",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Random seed for a reproducible series",
    )


# =============================================================================
# OUTPUT: SymbolSeries
# =============================================================================


class Bar(BaseModel):
    """Single trading-day candle."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    open: float = Field(..., gt=0)
    high: float = Field(..., gt=0)
    low: float = Field(..., gt=0)
    close: float = Field(..., gt=0)
    volume: int = Field(..., ge=0)


class SymbolSeries(BaseModel):
    """Complete daily series for a single ticker."""

    model_config = ConfigDict(frozen=True)

    ticker: str
    bars: list[Bar]

    @model_validator(mode="after")
    def _dates_strictly_increasing(self) -> "SymbolSeries":
        for prev, curr in zip(self.bars, self.bars[1:]):
            if curr.date <= prev.date:
                raise ValueError(f"Bar dates must be strictly increasing ({prev.date} -> {curr.date})")
        return self

    @property
    def current_price(self) -> Optional[float]:
        return self.bars[-1].close if self.bars else None
