"""
Analysis response returned to the dashboard.

Combines the Indicator Engine series (trimmed to the view range) with the
Decision Engine verdict computed over the full history.
"""

from typing import Optional
from pydantic import BaseModel, Field

from quantflow.schemas.market import TimeRange
from quantflow.schemas.indicators import AnalyzedBar
from quantflow.schemas.decision import Recommendation
from quantflow.schemas.chat import ChatContext


class PriceChange(BaseModel):
    """Latest close versus the previous close."""

    current: float
    previous: Optional[float] = None
    change: Optional[float] = None
    change_percent: Optional[float] = None


class AnalysisResponse(BaseModel):
    ticker: str
    time_range: TimeRange
    total_bars: int = Field(..., ge=0, description="Bars analyzed (full history)")
    price: Optional[PriceChange] = None
    series: list[AnalyzedBar] = Field(..., description="Trailing bars for the view range, oldest first")
    recommendation: Recommendation
    context: Optional[ChatContext] = None
