"""Shared fixtures: analyzed-bar factory, seeded series and stub LLM pieces."""

from datetime import date, timedelta
from typing import Optional

import pytest

from quantflow.schemas.indicators import AnalyzedBar, MACDData
from quantflow.schemas.chat import ChatContext
from quantflow.services.market_data import generate_stock_series


def make_bar(
    close: float = 100.0,
    sma50: Optional[float] = None,
    sma200: Optional[float] = None,
    rsi: Optional[float] = None,
    histogram: Optional[float] = None,
    volatility: Optional[float] = None,
    day: date = date(2024, 1, 2),
) -> AnalyzedBar:
    """Build an AnalyzedBar with just the fields the decision rules read."""
    macd = None
    if histogram is not None:
        macd = MACDData(macd_line=histogram, signal_line=0.0, histogram=histogram)
    return AnalyzedBar(
        date=day,
        open=close,
        high=close,
        low=close,
        close=close,
        volume=1_000_000,
        sma50=sma50,
        sma200=sma200,
        rsi=rsi,
        macd=macd,
        volatility=volatility,
    )


def make_pair(prev_histogram: Optional[float] = None, **latest) -> list[AnalyzedBar]:
    """Previous bar (MACD only) followed by the latest bar."""
    prev = make_bar(histogram=prev_histogram, day=date(2024, 1, 1))
    return [prev, make_bar(day=date(2024, 1, 2), **latest)]


@pytest.fixture
def seeded_bars():
    """Two years of AAPL bars ending on a fixed date."""
    return generate_stock_series("AAPL", days=730, seed=42, end=date(2024, 6, 28))


@pytest.fixture
def chat_context() -> ChatContext:
    return ChatContext(
        ticker="AAPL",
        current_price=123.45,
        recommendation="BUY",
        confidence=75,
        risk_level="LOW",
    )


def business_days(start: date, count: int) -> list[date]:
    days = []
    current = start
    while len(days) < count:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days
