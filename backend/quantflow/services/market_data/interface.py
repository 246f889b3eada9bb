"""
Market Data Service Interface

Defines the contract for the Series Source.
"""

from abc import abstractmethod

from quantflow.services.base import BaseService
from quantflow.schemas.market import SeriesRequest, SymbolSeries


class MarketDataServiceInterface(BaseService[SeriesRequest, SymbolSeries]):
    """
    Market Data Service Contract.

    INPUT: SeriesRequest
        - ticker: Symbol to simulate
        - days: Calendar days of history
        - seed: Optional seed for a reproducible walk

    OUTPUT: SymbolSeries
        - bars: One Bar per trading day, oldest first, dates strictly increasing
    """

    @property
    def name(self) -> str:
        return "MarketDataService"

    @abstractmethod
    async def execute(self, input_data: SeriesRequest) -> SymbolSeries:
        """Generate a daily series for the requested ticker."""
        pass
