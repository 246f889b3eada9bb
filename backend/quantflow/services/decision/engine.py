"""
Decision Engine

Folds the latest bar's indicators into a scored BUY / SELL / HOLD verdict.
PURE PYTHON - No LLM involvement.
All rules are deterministic and auditable.
"""

import math
from typing import Optional, Sequence

from quantflow.schemas.indicators import AnalyzedBar
from quantflow.schemas.decision import (
    Direction,
    Factor,
    FactorImpact,
    Recommendation,
    RiskLevel,
)
from quantflow.schemas.chat import ChatContext


# Score thresholds
BUY_THRESHOLD = 25
SELL_THRESHOLD = -25
CONFIDENCE_SCALE = 60  # |score| of 60 maps to 100% before the cap
MAX_CONFIDENCE = 99
MIN_HOLD_CONFIDENCE = 40

# Indicator thresholds
RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70
LOW_VOLATILITY = 0.20
HIGH_VOLATILITY = 0.40

INSUFFICIENT_DATA_SUMMARY = "Insufficient data to generate a recommendation."


def insufficient_data() -> Recommendation:
    """Canonical verdict when required indicators are undefined."""
    return Recommendation(
        direction=Direction.HOLD,
        confidence=0,
        risk_level=RiskLevel.HIGH,
        factors=[],
        summary=INSUFFICIENT_DATA_SUMMARY,
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_to_confidence(score: int) -> int:
    """Map an absolute score to a 0-99 confidence."""
    return min(_round_half_up(abs(score) / CONFIDENCE_SCALE * 100), MAX_CONFIDENCE)


def _build_summary(direction: Direction, factors: list[Factor], risk_level: RiskLevel) -> str:
    drivers = [f.name for f in factors if f.impact != FactorImpact.NEUTRAL][:2]
    if len(drivers) == 2:
        drivers_text = f"The primary drivers are {drivers[0]} and {drivers[1]}."
    elif drivers:
        drivers_text = f"The primary driver is {drivers[0]}."
    else:
        drivers_text = "No single factor dominates."
    return (
        f"Based on our quantitative model, we recommend a {direction.value}. "
        f"{drivers_text} Risk is assessed as {risk_level.value}."
    )


def recommend(series: Sequence[AnalyzedBar]) -> Recommendation:
    """
    Score the latest bar of an analyzed series.

    Needs at least two bars and defined SMA50, SMA200, RSI, MACD and
    volatility on the latest one; otherwise returns the insufficient-data
    verdict. The previous bar is only consulted for the MACD crossover.
    """
    if len(series) < 2:
        return insufficient_data()

    latest = series[-1].indicators
    prev = series[-2].indicators
    price = series[-1].close

    if (
        latest.sma50 is None
        or latest.sma200 is None
        or latest.rsi is None
        or latest.macd is None
        or latest.volatility is None
    ):
        return insufficient_data()

    score = 0
    factors: list[Factor] = []

    # =========================================================================
    # 1. TREND
    # =========================================================================

    if price > latest.sma200:
        score += 20
        factors.append(
            Factor(
                name="Long-term Trend",
                impact=FactorImpact.POSITIVE,
                description="Price is above the 200-day Moving Average, indicating a bullish long-term trend.",
            )
        )
    else:
        score -= 20
        factors.append(
            Factor(
                name="Long-term Trend",
                impact=FactorImpact.NEGATIVE,
                description="Price is below the 200-day Moving Average, indicating a bearish trend.",
            )
        )

    if latest.sma50 > latest.sma200:
        score += 10
        factors.append(
            Factor(
                name="Golden Cross",
                impact=FactorImpact.POSITIVE,
                description="50-day SMA is above 200-day SMA.",
            )
        )

    # =========================================================================
    # 2. MOMENTUM
    # =========================================================================

    if latest.rsi < RSI_OVERSOLD:
        score += 20
        factors.append(
            Factor(
                name="RSI",
                impact=FactorImpact.POSITIVE,
                description="RSI indicates oversold conditions (potential bounce).",
            )
        )
    elif latest.rsi > RSI_OVERBOUGHT:
        score -= 20
        factors.append(
            Factor(
                name="RSI",
                impact=FactorImpact.NEGATIVE,
                description="RSI indicates overbought conditions (potential pullback).",
            )
        )
    else:
        factors.append(
            Factor(
                name="RSI",
                impact=FactorImpact.NEUTRAL,
                description=f"RSI is neutral at {latest.rsi:.1f}.",
            )
        )

    histogram = latest.macd.histogram
    if histogram > 0 and prev.macd is not None and prev.macd.histogram <= 0:
        score += 15
        factors.append(
            Factor(
                name="MACD",
                impact=FactorImpact.POSITIVE,
                description="MACD Histogram just turned positive (Bullish Crossover).",
            )
        )
    elif histogram > 0:
        score += 5
    elif histogram < 0:
        score -= 5

    # =========================================================================
    # 3. VOLATILITY / RISK
    # =========================================================================

    risk_level = RiskLevel.MEDIUM
    if latest.volatility < LOW_VOLATILITY:
        risk_level = RiskLevel.LOW
        score += 10
        factors.append(
            Factor(
                name="Volatility",
                impact=FactorImpact.POSITIVE,
                description="Market volatility is low, suggesting stable conditions.",
            )
        )
    elif latest.volatility > HIGH_VOLATILITY:
        risk_level = RiskLevel.HIGH
        score -= 15
        factors.append(
            Factor(
                name="Volatility",
                impact=FactorImpact.NEGATIVE,
                description="High volatility detected. Risk is elevated.",
            )
        )
    else:
        factors.append(
            Factor(
                name="Volatility",
                impact=FactorImpact.NEUTRAL,
                description="Volatility is within normal bounds.",
            )
        )

    # =========================================================================
    # FINAL DECISION
    # =========================================================================

    confidence = score_to_confidence(score)
    if score > BUY_THRESHOLD:
        direction = Direction.BUY
    elif score < SELL_THRESHOLD:
        direction = Direction.SELL
    else:
        direction = Direction.HOLD
        confidence = max(confidence, MIN_HOLD_CONFIDENCE)

    return Recommendation(
        direction=direction,
        confidence=confidence,
        risk_level=risk_level,
        factors=factors,
        summary=_build_summary(direction, factors, risk_level),
    )


def build_chat_context(
    ticker: str,
    series: Sequence[AnalyzedBar],
    recommendation: Recommendation,
) -> Optional[ChatContext]:
    """Narrow context handed to the analyst. None for an empty series."""
    if not series:
        return None
    return ChatContext(
        ticker=ticker,
        current_price=series[-1].close,
        recommendation=recommendation.direction.value,
        confidence=recommendation.confidence,
        risk_level=recommendation.risk_level.value,
    )
