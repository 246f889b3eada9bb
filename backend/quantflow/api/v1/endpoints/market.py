"""
Market Data API Endpoints

Raw simulated daily series.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from quantflow.schemas.market import SeriesRequest, SymbolSeries
from quantflow.services.base import ServiceError
from quantflow.services.market_data import get_market_data_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{ticker}/series", response_model=SymbolSeries)
async def get_series(
    ticker: str,
    days: Optional[int] = Query(default=None, ge=1, le=5000, description="Calendar days of history"),
    seed: Optional[int] = Query(default=None, description="Seed for a reproducible series"),
):
    """
    Get the simulated daily OHLCV series for a ticker.

    Weekends are skipped; bars are oldest first.
    """
    service = get_market_data_service()
    try:
        return await service.execute(SeriesRequest(ticker=ticker, days=days, seed=seed))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
