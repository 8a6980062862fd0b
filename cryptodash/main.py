"""
CryptoDash Indicator Engine - FastAPI Application

Main entry point for the engine API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cryptodash.core.config import settings
from cryptodash.api.v1 import router as api_v1_router
from cryptodash.services.indicators import get_indicator_service

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from settings."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Timeframes: {', '.join(settings.timeframes)}")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    CryptoDash Indicator Engine API

    ## Architecture
    - **Series Primitives**: SMA and EMA (first-close seed)
    - **Oscillators**: Wilder RSI, Stochastic RSI
    - **Trend/Volatility**: MACD, Bollinger Bands
    - **Cross Detector**: golden/death crosses with next-cross estimate
    - **Levels & Alerts**: closest MA/BB level, threshold alerts

    Candles are supplied by the caller; the engine performs no market-data I/O.
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
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
        "status": "healthy" if await get_indicator_service().health_check() else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "CryptoDash Indicator Engine API",
        "docs": "/docs",
        "health": "/health",
    }
