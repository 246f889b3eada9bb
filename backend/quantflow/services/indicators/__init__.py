"""
Indicator Engine Service

CONTRACT:
    Input:  SymbolSeries (daily OHLCV bars)
    Output: list[AnalyzedBar]

RESPONSIBILITIES:
    - SMA 20 / 50 / 200
    - RSI 14 (window re-scan, no Wilder smoothing)
    - MACD 12 / 26 / 9 (first-value seeded EMAs)
    - Annualized 20-bar volatility of log returns

PURE PYTHON - No LLM involvement.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from quantflow.services.indicators.interface import IndicatorServiceInterface
from quantflow.services.indicators.service import (
    IndicatorService,
    compute_indicators,
    get_indicator_service,
)

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "compute_indicators",
    "get_indicator_service",
]
