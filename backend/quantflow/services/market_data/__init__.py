"""
Market Data Service (Series Source)

CONTRACT:
    Input:  SeriesRequest
    Output: SymbolSeries

RESPONSIBILITIES:
    - Simulate a daily OHLCV random walk per ticker
    - Skip weekends
    - Reject malformed tickers before any computation

NO LLM INVOLVEMENT - Pure data generation.
"""

from quantflow.services.market_data.interface import MarketDataServiceInterface
from quantflow.services.market_data.service import (
    MarketDataService,
    get_market_data_service,
    normalize_ticker,
)
from quantflow.services.market_data.simulator import generate_stock_series, get_base_price

__all__ = [
    "MarketDataServiceInterface",
    "MarketDataService",
    "get_market_data_service",
    "normalize_ticker",
    "generate_stock_series",
    "get_base_price",
]
