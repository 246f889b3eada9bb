"""Tests for the Decision Engine scoring rules."""

from datetime import date

import pytest

from quantflow.schemas.decision import Direction, FactorImpact, RiskLevel
from quantflow.services.decision import (
    DecisionService,
    build_chat_context,
    insufficient_data,
    recommend,
    score_to_confidence,
)
from quantflow.services.indicators import compute_indicators
from quantflow.services.market_data import generate_stock_series

from conftest import make_bar, make_pair


# =============================================================================
# INSUFFICIENT DATA
# =============================================================================


def test_insufficient_data_verdict():
    rec = insufficient_data()
    assert rec.direction == Direction.HOLD
    assert rec.confidence == 0
    assert rec.risk_level == RiskLevel.HIGH
    assert rec.factors == []
    assert rec.summary == "Insufficient data to generate a recommendation."


@pytest.mark.parametrize("count", [0, 1])
def test_fewer_than_two_bars(count):
    bars = [make_bar(close=110, sma50=105, sma200=100, rsi=50, histogram=0.5, volatility=0.1)][:count]
    assert recommend(bars) == insufficient_data()


@pytest.mark.parametrize("missing", ["sma50", "sma200", "rsi", "histogram", "volatility"])
def test_any_missing_indicator_gives_insufficient_data(missing):
    latest = dict(close=110, sma50=105, sma200=100, rsi=50, histogram=0.5, volatility=0.1)
    latest[missing] = None
    assert recommend(make_pair(prev_histogram=0.3, **latest)) == insufficient_data()


def test_short_simulated_history_is_insufficient():
    bars = generate_stock_series("AAPL", days=100, seed=42, end=date(2024, 6, 28))
    assert recommend(compute_indicators(bars)) == insufficient_data()


# =============================================================================
# SCORING
# =============================================================================


def test_strong_uptrend_is_buy():
    series = make_pair(prev_histogram=0.3, close=110, sma50=105, sma200=100, rsi=50, histogram=0.5, volatility=0.15)
    rec = recommend(series)

    # +20 trend, +10 golden cross, +5 positive MACD, +10 low volatility
    assert rec.direction == Direction.BUY
    assert rec.confidence == 75
    assert rec.risk_level == RiskLevel.LOW
    assert [f.name for f in rec.factors] == ["Long-term Trend", "Golden Cross", "RSI", "Volatility"]
    assert rec.factors[2].impact == FactorImpact.NEUTRAL
    assert rec.factors[2].description == "RSI is neutral at 50.0."
    assert rec.summary == (
        "Based on our quantitative model, we recommend a BUY. "
        "The primary drivers are Long-term Trend and Golden Cross. "
        "Risk is assessed as LOW."
    )


def test_overbought_downtrend_is_sell_with_capped_confidence():
    series = make_pair(prev_histogram=-0.2, close=90, sma50=95, sma200=100, rsi=80, histogram=-0.5, volatility=0.5)
    rec = recommend(series)

    # -20 trend, -20 RSI, -5 MACD, -15 high volatility
    assert rec.direction == Direction.SELL
    assert rec.confidence == 99
    assert rec.risk_level == RiskLevel.HIGH
    assert [f.impact for f in rec.factors] == [FactorImpact.NEGATIVE] * 3
    assert "The primary drivers are Long-term Trend and RSI." in rec.summary


def test_hold_gets_confidence_floor():
    series = make_pair(prev_histogram=0.0, close=110, sma50=105, sma200=100, rsi=75, histogram=0.0, volatility=0.3)
    rec = recommend(series)

    # +20 +10 -20 = 10, which maps to 17 before the floor
    assert rec.direction == Direction.HOLD
    assert rec.confidence == 40
    assert rec.risk_level == RiskLevel.MEDIUM
    assert rec.factors[-1].impact == FactorImpact.NEUTRAL


@pytest.mark.parametrize("prev_histogram", [-0.2, 0.0])
def test_macd_bullish_crossover(prev_histogram):
    series = make_pair(
        prev_histogram=prev_histogram, close=110, sma50=95, sma200=100, rsi=50, histogram=0.3, volatility=0.3
    )
    rec = recommend(series)

    # +20 trend, +15 crossover
    assert rec.direction == Direction.BUY
    assert rec.confidence == 58
    macd = [f for f in rec.factors if f.name == "MACD"]
    assert len(macd) == 1
    assert macd[0].impact == FactorImpact.POSITIVE


def test_no_crossover_without_previous_macd():
    series = make_pair(prev_histogram=None, close=110, sma50=95, sma200=100, rsi=50, histogram=0.3, volatility=0.3)
    rec = recommend(series)

    # +20 trend, +5 positive histogram; 25 is not above the BUY threshold
    assert rec.direction == Direction.HOLD
    assert rec.confidence == 42
    assert "MACD" not in [f.name for f in rec.factors]


def test_price_equal_to_sma200_counts_as_bearish():
    series = make_pair(prev_histogram=0.0, close=100, sma50=95, sma200=100, rsi=50, histogram=0.0, volatility=0.3)
    rec = recommend(series)
    assert rec.factors[0].impact == FactorImpact.NEGATIVE


@pytest.mark.parametrize("volatility", [0.20, 0.40])
def test_volatility_thresholds_are_exclusive(volatility):
    series = make_pair(close=110, sma50=95, sma200=100, rsi=50, histogram=0.0, volatility=volatility)
    assert recommend(series).risk_level == RiskLevel.MEDIUM


@pytest.mark.parametrize("rsi", [30.0, 70.0])
def test_rsi_thresholds_are_exclusive(rsi):
    series = make_pair(close=110, sma50=95, sma200=100, rsi=rsi, histogram=0.0, volatility=0.3)
    rsi_factor = [f for f in recommend(series).factors if f.name == "RSI"][0]
    assert rsi_factor.impact == FactorImpact.NEUTRAL


def test_oversold_rsi_adds_positive_factor():
    series = make_pair(close=110, sma50=105, sma200=100, rsi=25, histogram=0.0, volatility=0.3)
    rec = recommend(series)
    # +20 +10 +20 = 50
    assert rec.direction == Direction.BUY
    assert rec.confidence == 83


def test_single_driver_summary():
    series = make_pair(close=90, sma50=95, sma200=100, rsi=50, histogram=0.0, volatility=0.3)
    rec = recommend(series)

    assert rec.direction == Direction.HOLD
    assert rec.confidence == 40
    assert rec.summary == (
        "Based on our quantitative model, we recommend a HOLD. "
        "The primary driver is Long-term Trend. "
        "Risk is assessed as MEDIUM."
    )


@pytest.mark.parametrize(
    "score,expected",
    [(0, 0), (1, 2), (30, 50), (45, 75), (-45, 75), (59, 98), (60, 99), (-100, 99)],
)
def test_score_to_confidence(score, expected):
    assert score_to_confidence(score) == expected


# =============================================================================
# PROPERTIES
# =============================================================================


def test_recommend_is_pure(seeded_bars):
    analyzed = compute_indicators(seeded_bars)
    before = [a.model_dump() for a in analyzed]

    first = recommend(analyzed)
    second = recommend(analyzed)

    assert first == second
    assert [a.model_dump() for a in analyzed] == before


def test_simulated_series_gives_valid_verdict(seeded_bars):
    rec = recommend(compute_indicators(seeded_bars))

    assert rec.direction in set(Direction)
    assert 0 <= rec.confidence <= 99
    assert rec.factors
    if rec.direction == Direction.HOLD:
        assert rec.confidence >= 40


def test_build_chat_context(seeded_bars):
    analyzed = compute_indicators(seeded_bars)
    rec = recommend(analyzed)

    context = build_chat_context("AAPL", analyzed, rec)

    assert context.ticker == "AAPL"
    assert context.current_price == analyzed[-1].close
    assert context.recommendation == rec.direction.value
    assert context.confidence == rec.confidence
    assert context.risk_level == rec.risk_level.value


def test_build_chat_context_empty_series():
    assert build_chat_context("AAPL", [], insufficient_data()) is None


@pytest.mark.asyncio
async def test_decision_service_execute():
    series = make_pair(prev_histogram=0.3, close=110, sma50=105, sma200=100, rsi=50, histogram=0.5, volatility=0.15)
    rec = await DecisionService().execute(series)
    assert rec.direction == Direction.BUY
