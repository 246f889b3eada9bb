"""
QuantFlow Data Contracts

Pydantic schemas passed between services.

Flow:
    SeriesRequest -> [Market Data] -> SymbolSeries
    SymbolSeries -> [Indicator Engine] -> list[AnalyzedBar]
    list[AnalyzedBar] -> [Decision Engine] -> Recommendation
    Recommendation -> ChatContext -> [Analyst] -> ChatMessage
"""

from quantflow.schemas.market import (
    TimeRange,
    SeriesRequest,
    Bar,
    SymbolSeries,
)
from quantflow.schemas.indicators import (
    MACDData,
    IndicatorSet,
    AnalyzedBar,
)
from quantflow.schemas.decision import (
    Direction,
    RiskLevel,
    FactorImpact,
    Factor,
    Recommendation,
)
from quantflow.schemas.chat import (
    ChatRole,
    ChatMessage,
    ChatContext,
    ChatRequest,
    ChatResponse,
    MoodImageRequest,
    MoodImageResponse,
)
from quantflow.schemas.analysis import PriceChange, AnalysisResponse

__all__ = [
    # Market
    "TimeRange",
    "SeriesRequest",
    "Bar",
    "SymbolSeries",
    # Indicators
    "MACDData",
    "IndicatorSet",
    "AnalyzedBar",
    # Decision
    "Direction",
    "RiskLevel",
    "FactorImpact",
    "Factor",
    "Recommendation",
    # Chat
    "ChatRole",
    "ChatMessage",
    "ChatContext",
    "ChatRequest",
    "ChatResponse",
    "MoodImageRequest",
    "MoodImageResponse",
    # Analysis
    "PriceChange",
    "AnalysisResponse",
]
