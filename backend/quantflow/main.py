"""
QuantFlow Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quantflow.core.config import settings
from quantflow.core.logging_config import setup_logging
from quantflow.api.v1 import router as api_v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    from quantflow.services.llm import get_llm_client
    provider = get_llm_client().get_active_provider()
    if provider:
        logger.info(f"AI analyst provider: {provider.value}")
    else:
        logger.info("AI analyst disabled (no LLM API keys)")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    QuantFlow Simulated-Market Analytics API

    ## Architecture
    - **Series Source**: Simulated daily OHLCV random walk per ticker
    - **Indicator Engine**: SMA 20/50/200, RSI, MACD, volatility (pure Python/NumPy)
    - **Decision Engine**: Scored BUY / SELL / HOLD with factor trail
    - **AI Analyst**: LLM chat grounded on the verdict

    ## Core Principles
    - Every request recomputes the full chain; nothing is persisted
    - Insufficient data is a zero-confidence HOLD, never an error
    - Not a trading system
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow both frontend ports
cors_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "QuantFlow Backend API",
        "docs": "/docs",
        "health": "/health",
    }
