"""
Market Data Service Implementation

Serves simulated daily series. Every request regenerates from scratch;
nothing is cached between requests.
"""

import logging
from typing import Optional

from quantflow.core.config import settings
from quantflow.schemas.market import SeriesRequest, SymbolSeries
from quantflow.services.base import ValidationError
from quantflow.services.market_data.interface import MarketDataServiceInterface
from quantflow.services.market_data.simulator import generate_stock_series

logger = logging.getLogger(__name__)

MAX_TICKER_LENGTH = 12


def normalize_ticker(ticker: str) -> str:
    return ticker.strip().upper()


class MarketDataService(MarketDataServiceInterface):
    """Series Source backed by the random-walk simulator."""

    def __init__(self, default_days: Optional[int] = None, default_seed: Optional[int] = None):
        self._default_days = default_days or settings.history_days
        self._default_seed = default_seed if default_seed is not None else settings.market_data_seed

    @property
    def name(self) -> str:
        return "MarketDataService"

    async def validate_input(self, input_data: SeriesRequest) -> SeriesRequest:
        ticker = normalize_ticker(input_data.ticker)
        if not ticker:
            raise ValidationError(self.name, "Ticker must not be empty")
        if len(ticker) > MAX_TICKER_LENGTH:
            raise ValidationError(self.name, f"Ticker longer than {MAX_TICKER_LENGTH} characters: {ticker!r}")
        if not ticker.replace(".", "").replace("-", "").isalnum():
            raise ValidationError(self.name, f"Invalid ticker: {input_data.ticker!r}")
        return input_data.model_copy(update={"ticker": ticker})

    async def execute(self, input_data: SeriesRequest) -> SymbolSeries:
        """Generate the daily series for one ticker."""
        request = await self.validate_input(input_data)
        days = request.days or self._default_days
        seed = request.seed if request.seed is not None else self._default_seed

        bars = generate_stock_series(request.ticker, days=days, seed=seed)
        logger.debug(f"Generated {len(bars)} bars for {request.ticker} (days={days}, seed={seed})")

        return SymbolSeries(ticker=request.ticker, bars=bars)


# Singleton instance
_service_instance: Optional[MarketDataService] = None


def get_market_data_service() -> MarketDataService:
    """Get or create market data service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = MarketDataService()
    return _service_instance
