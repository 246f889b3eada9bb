"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from quantflow.services.base import BaseService
from quantflow.schemas.market import SymbolSeries
from quantflow.schemas.indicators import AnalyzedBar


class IndicatorServiceInterface(BaseService[SymbolSeries, list[AnalyzedBar]]):
    """
    Indicator Engine Service Contract.

    INPUT: SymbolSeries
        - bars: Daily OHLCV bars, oldest first

    OUTPUT: list[AnalyzedBar]
        - Same length and order as the input bars
        - sma20/sma50/sma200, rsi, macd, volatility per bar (None = undefined)
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: SymbolSeries) -> list[AnalyzedBar]:
        """Calculate indicators for every bar in the series."""
        pass
