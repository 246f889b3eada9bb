"""
Analysis API Endpoints

Indicator series plus the scored recommendation for the dashboard.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from quantflow.core.config import settings
from quantflow.schemas.market import TimeRange
from quantflow.schemas.decision import Recommendation
from quantflow.schemas.analysis import AnalysisResponse
from quantflow.services.base import ServiceError
from quantflow.services.pipeline import analyze_ticker

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{ticker}", response_model=AnalysisResponse)
async def get_analysis(
    ticker: str,
    time_range: TimeRange = Query(default=TimeRange(settings.default_time_range), alias="range"),
    days: Optional[int] = Query(default=None, ge=1, le=5000),
    seed: Optional[int] = Query(default=None),
):
    """
    Get complete analysis for a ticker.

    Returns:
        - Analyzed bars (SMA 20/50/200, RSI, MACD, volatility) for the view range
        - Recommendation computed over the full history
        - Latest price change
        - Context object used by the AI analyst
    """
    try:
        result = await analyze_ticker(ticker, days=days, seed=seed)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    logger.info(
        f"Analysis for {result.ticker}: {result.recommendation.direction.value} "
        f"({result.recommendation.confidence}%, risk {result.recommendation.risk_level.value})"
    )
    return result.to_response(time_range)


@router.get("/{ticker}/recommendation", response_model=Recommendation)
async def get_recommendation(
    ticker: str,
    days: Optional[int] = Query(default=None, ge=1, le=5000),
    seed: Optional[int] = Query(default=None),
):
    """Get only the verdict for a ticker."""
    try:
        result = await analyze_ticker(ticker, days=days, seed=seed)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return result.recommendation
