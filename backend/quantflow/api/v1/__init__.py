"""
API v1 Router

All API endpoints for the frontend.
"""

from fastapi import APIRouter

from quantflow.api.v1.endpoints import market, analysis, chat

router = APIRouter()

# Include all endpoint routers
router.include_router(market.router, prefix="/market", tags=["Market Data"])
router.include_router(analysis.router, prefix="/analysis", tags=["Analysis"])
router.include_router(chat.router, prefix="/chat", tags=["AI Analyst"])
