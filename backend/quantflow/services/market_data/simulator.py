"""
Simulated Market Data

Random walk with a trend bias that occasionally reverses. Weekends are
skipped, so dates are trading days only (no holiday calendar).
"""

import random
from datetime import date, timedelta
from typing import Optional

from quantflow.schemas.market import Bar


# Base prices for common tickers
TICKER_BASE_PRICES = {
    "AAPL": 175.0,
    "TSLA": 220.0,
    "NVDA": 450.0,
}
DEFAULT_BASE_PRICE = 150.0

TREND_BIAS = 0.0005  # Slight upward drift per bar
DAILY_VOLATILITY = 0.02  # 2% daily move range
REVERSAL_PROBABILITY = 0.02
WICK_RANGE = 0.01  # High/low extend up to 1% past the body
VOLUME_MIN = 5_000_000
VOLUME_SPAN = 10_000_000


def get_base_price(ticker: str) -> float:
    """Get starting price for a ticker."""
    return TICKER_BASE_PRICES.get(ticker, DEFAULT_BASE_PRICE)


def generate_stock_series(
    ticker: str,
    days: int = 730,
    seed: Optional[int] = None,
    end: Optional[date] = None,
) -> list[Bar]:
    """
    Generate a daily OHLCV series covering the ``days`` calendar days ending on ``end``.

    Each call uses its own RNG, so concurrent requests never share state.
    Same ticker + seed + end gives the same series.
    """
    rng = random.Random(seed)
    if end is None:
        end = date.today()
    start = end - timedelta(days=days)

    price = get_base_price(ticker)
    trend = TREND_BIAS
    bars: list[Bar] = []

    for offset in range(1, days + 1):
        day = start + timedelta(days=offset)

        # Skip weekends
        if day.weekday() >= 5:
            continue

        # Random market shock
        if rng.random() > 1 - REVERSAL_PROBABILITY:
            trend = -trend

        change_percent = (rng.random() - 0.5) * DAILY_VOLATILITY * 2 + trend
        open_price = price
        close_price = price + price * change_percent
        high_price = max(open_price, close_price) * (1 + rng.random() * WICK_RANGE)
        low_price = min(open_price, close_price) * (1 - rng.random() * WICK_RANGE)

        bars.append(
            Bar(
                date=day,
                open=round(open_price, 2),
                high=round(high_price, 2),
                low=round(low_price, 2),
                close=round(close_price, 2),
                volume=int(rng.random() * VOLUME_SPAN) + VOLUME_MIN,
            )
        )

        price = close_price

    return bars
