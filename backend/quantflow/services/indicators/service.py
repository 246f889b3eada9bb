"""
Indicator Engine Service Implementation

Derives per-bar indicators from a daily series.
NO LLM INVOLVEMENT - Pure Python/NumPy calculations.
"""

import logging
from typing import Optional, Sequence
import numpy as np

from quantflow.schemas.market import Bar, SymbolSeries
from quantflow.schemas.indicators import AnalyzedBar, MACDData
from quantflow.services.indicators.interface import IndicatorServiceInterface
from quantflow.services.indicators.calculations import (
    sma,
    rsi,
    macd,
    volatility,
    to_optional,
)

logger = logging.getLogger(__name__)

SMA_WINDOWS = (20, 50, 200)
RSI_WINDOW = 14
MACD_PERIODS = (12, 26, 9)
VOLATILITY_WINDOW = 20


def _closes(bars: Sequence[Bar]) -> np.ndarray:
    """Convert bars to a float close-price array."""
    return np.array([b.close for b in bars], dtype=float)


def _macd_at(
    i: int, macd_line: np.ndarray, signal_line: np.ndarray, histogram: np.ndarray
) -> Optional[MACDData]:
    line = to_optional(macd_line[i])
    signal = to_optional(signal_line[i])
    hist = to_optional(histogram[i])
    if line is None or signal is None or hist is None:
        return None
    return MACDData(macd_line=line, signal_line=signal, histogram=hist)


def compute_indicators(bars: Sequence[Bar]) -> list[AnalyzedBar]:
    """
    Attach indicators to every bar.

    Returns one AnalyzedBar per input bar, in input order. Indicators without
    enough history (or with a degenerate price in their window) are None.
    """
    if not bars:
        return []

    closes = _closes(bars)
    sma20, sma50, sma200 = (sma(closes, w) for w in SMA_WINDOWS)
    rsi_arr = rsi(closes, RSI_WINDOW)
    macd_line, signal_line, histogram = macd(closes, *MACD_PERIODS)
    vol_arr = volatility(closes, VOLATILITY_WINDOW)

    # Bars were validated by the Series Source; skip re-validation so a
    # degenerate price still yields a bar with undefined indicators.
    analyzed = []
    for i, bar in enumerate(bars):
        analyzed.append(
            AnalyzedBar.model_construct(
                date=bar.date,
                open=bar.open,
                high=bar.high,
                low=bar.low,
                close=bar.close,
                volume=bar.volume,
                sma20=to_optional(sma20[i]),
                sma50=to_optional(sma50[i]),
                sma200=to_optional(sma200[i]),
                rsi=to_optional(rsi_arr[i]),
                macd=_macd_at(i, macd_line, signal_line, histogram),
                volatility=to_optional(vol_arr[i]),
            )
        )
    return analyzed


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    All calculations are deterministic and reproducible.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: SymbolSeries) -> list[AnalyzedBar]:
        """Calculate indicators for one series."""
        analyzed = compute_indicators(input_data.bars)
        logger.debug(f"Computed indicators for {input_data.ticker}: {len(analyzed)} bars")
        return analyzed


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
