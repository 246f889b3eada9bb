"""
Chat API Endpoints

Conversational analyst and market mood image.
The client owns the transcript and sends the full history each time; a
stale reply is simply ignored on the client side.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from quantflow.schemas.chat import (
    ChatContext,
    ChatRequest,
    ChatResponse,
    MoodImageRequest,
    MoodImageResponse,
)
from quantflow.services.base import ServiceError
from quantflow.services.pipeline import analyze_ticker
from quantflow.services.llm import (
    AnalystInput,
    MoodImageInput,
    get_analyst_service,
    get_mood_image_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _context_for(ticker: str, days: Optional[int], seed: Optional[int]) -> ChatContext:
    """Recompute the verdict the dashboard shows and return its chat context."""
    try:
        result = await analyze_ticker(ticker, days=days, seed=seed)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    context = result.context
    if context is None:
        raise HTTPException(status_code=404, detail=f"No data for {ticker}")
    return context


@router.post("/{ticker}", response_model=ChatResponse)
async def chat_with_analyst(
    ticker: str,
    request: ChatRequest,
    days: Optional[int] = Query(default=None, ge=1, le=5000),
    seed: Optional[int] = Query(default=None),
):
    """
    Ask the AI analyst about a ticker.

    The analyst sees only ticker, price, recommendation, confidence and
    risk level; it never receives the raw series. Pass the same ``days``
    and ``seed`` used for the analysis so both describe the same series.
    """
    context = await _context_for(ticker, days, seed)
    analyst = get_analyst_service()

    try:
        reply = await analyst.execute(AnalystInput(messages=request.messages, context=context))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return ChatResponse(message=reply, context=context)


@router.post("/{ticker}/mood-image", response_model=MoodImageResponse)
async def generate_mood_image(
    ticker: str,
    request: MoodImageRequest,
    days: Optional[int] = Query(default=None, ge=1, le=5000),
    seed: Optional[int] = Query(default=None),
):
    """Generate an abstract image of the current market sentiment."""
    context = await _context_for(ticker, days, seed)
    service = get_mood_image_service()

    try:
        image = await service.execute(MoodImageInput(context=context, size=request.size))
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return MoodImageResponse(ticker=context.ticker, size=request.size, image=image, context=context)
