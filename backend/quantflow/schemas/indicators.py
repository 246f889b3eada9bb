"""
CONTRACT 2: Indicator Engine

Input: list[Bar] (from SymbolSeries)
Output: list[AnalyzedBar], positionally aligned with the input

None marks an indicator that is undefined for a bar (insufficient history
or a degenerate price). It is never replaced with zero.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from quantflow.schemas.market import Bar


class MACDData(BaseModel):
    """MACD triple for one bar."""

    model_config = ConfigDict(frozen=True)

    macd_line: float
    signal_line: float
    histogram: float


class IndicatorSet(BaseModel):
    """Derived indicators for one bar."""

    model_config = ConfigDict(frozen=True)

    sma20: Optional[float] = None
    sma50: Optional[float] = None
    sma200: Optional[float] = None
    rsi: Optional[float] = Field(default=None, ge=0, le=100)
    macd: Optional[MACDData] = None
    volatility: Optional[float] = Field(default=None, ge=0, description="Annualized std of log returns")


class AnalyzedBar(Bar, IndicatorSet):
    """A bar with its indicators attached (flat, for charting)."""

    @property
    def indicators(self) -> IndicatorSet:
        return IndicatorSet(
            sma20=self.sma20,
            sma50=self.sma50,
            sma200=self.sma200,
            rsi=self.rsi,
            macd=self.macd,
            volatility=self.volatility,
        )
