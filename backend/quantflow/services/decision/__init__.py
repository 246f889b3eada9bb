"""
Decision Engine Service

CONTRACT:
    Input:  list[AnalyzedBar]
    Output: Recommendation

SCORING (latest bar, previous bar for MACD crossover only):
    - Trend: close vs SMA200 (+/-20), golden cross SMA50 > SMA200 (+10)
    - RSI: < 30 (+20), > 70 (-20)
    - MACD histogram: bullish crossover (+15), positive (+5), negative (-5)
    - Volatility: < 0.20 (+10, LOW risk), > 0.40 (-15, HIGH risk)

PURE PYTHON - No LLM involvement.
"""

from quantflow.services.decision.interface import DecisionServiceInterface
from quantflow.services.decision.engine import (
    recommend,
    insufficient_data,
    score_to_confidence,
    build_chat_context,
)
from quantflow.services.decision.service import DecisionService, get_decision_service

__all__ = [
    "DecisionServiceInterface",
    "recommend",
    "insufficient_data",
    "score_to_confidence",
    "build_chat_context",
    "DecisionService",
    "get_decision_service",
]
