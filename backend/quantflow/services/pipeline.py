"""
Analysis Pipeline

Series Source -> Indicator Engine -> Decision Engine, run from scratch for
every request.
"""

from dataclasses import dataclass
from typing import Optional

from quantflow.schemas.market import SeriesRequest, SymbolSeries, TimeRange
from quantflow.schemas.indicators import AnalyzedBar
from quantflow.schemas.decision import Recommendation
from quantflow.schemas.chat import ChatContext
from quantflow.schemas.analysis import AnalysisResponse, PriceChange
from quantflow.services.market_data import get_market_data_service
from quantflow.services.indicators import get_indicator_service
from quantflow.services.decision import get_decision_service, build_chat_context


@dataclass
class AnalysisResult:
    """Everything one analysis run produces."""

    series: SymbolSeries
    analyzed: list[AnalyzedBar]
    recommendation: Recommendation

    @property
    def ticker(self) -> str:
        return self.series.ticker

    @property
    def context(self) -> Optional[ChatContext]:
        return build_chat_context(self.ticker, self.analyzed, self.recommendation)

    def price_change(self) -> Optional[PriceChange]:
        if not self.analyzed:
            return None
        current = self.analyzed[-1].close
        if len(self.analyzed) < 2:
            return PriceChange(current=current)
        previous = self.analyzed[-2].close
        change = current - previous
        return PriceChange(
            current=current,
            previous=previous,
            change=round(change, 2),
            change_percent=round(change / previous * 100, 2),
        )

    def to_response(self, time_range: TimeRange) -> AnalysisResponse:
        """Trim the analyzed series to the view range; the verdict uses full history."""
        return AnalysisResponse(
            ticker=self.ticker,
            time_range=time_range,
            total_bars=len(self.analyzed),
            price=self.price_change(),
            series=self.analyzed[-time_range.bars :],
            recommendation=self.recommendation,
            context=self.context,
        )


async def analyze_ticker(
    ticker: str,
    days: Optional[int] = None,
    seed: Optional[int] = None,
) -> AnalysisResult:
    """Generate, analyze and score one ticker."""
    series = await get_market_data_service().execute(
        SeriesRequest(ticker=ticker, days=days, seed=seed)
    )
    analyzed = await get_indicator_service().execute(series)
    recommendation = await get_decision_service().execute(analyzed)
    return AnalysisResult(series=series, analyzed=analyzed, recommendation=recommendation)
