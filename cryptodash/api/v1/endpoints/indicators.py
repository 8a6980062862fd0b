"""
Indicator API Endpoints

Endpoints exposing the indicator engine. Callers post candles they already
fetched; nothing here talks to an exchange.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Path, Query
from pydantic import BaseModel, Field

from cryptodash.schemas.market import Candle, DashboardSnapshot, SeriesPoint
from cryptodash.schemas.indicators import (
    BandPoint,
    ClosestLevel,
    CrossResult,
    DashboardAnalysis,
    HourlyPerformance,
    MACDPoint,
    RSIPoint,
    StochRSIPoint,
)
from cryptodash.services.base import ServiceError
from cryptodash.services.formatting import (
    format_symbol_price,
    get_precision_cache,
    significant_decimals,
)
from cryptodash.services.indicators import (
    calculate_bollinger_bands,
    calculate_ema,
    calculate_hourly_performance,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic_rsi,
    detect_crosses,
    find_closest_level,
    get_fear_greed_classification,
    get_indicator_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class CrossRequest(BaseModel):
    """Short and long MA series to compare."""
    short_series: list[SeriesPoint]
    long_series: list[SeriesPoint]


class ClosestLevelRequest(BaseModel):
    """Current price plus named levels."""
    price: Optional[float] = Field(default=None, gt=0)
    levels: dict[str, Optional[float]] = Field(default_factory=dict)


class PrecisionResponse(BaseModel):
    """Display precision for a symbol."""
    symbol: str
    decimals: int
    observed: bool
    formatted: Optional[str] = None


class FearGreedResponse(BaseModel):
    value: float
    classification: str


@router.post("/analyze", response_model=DashboardAnalysis)
async def analyze_snapshot(snapshot: DashboardSnapshot):
    """
    Run the full engine for one symbol.

    Returns:
        - Moving averages, Bollinger Bands, RSI, StochRSI, MACD per timeframe
        - Golden/death crosses and next-cross estimate
        - Closest MA/BB levels
        - Technical alerts and Fear & Greed classification
    """
    service = get_indicator_service()
    try:
        return await service.execute(snapshot)
    except ServiceError as e:
        logger.warning(f"Rejected snapshot for {snapshot.symbol}: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/sma", response_model=list[SeriesPoint])
async def sma_series(
    candles: list[Candle] = Body(...),
    period: int = Query(default=20, ge=1, le=500),
):
    """Simple moving average of closes."""
    return calculate_sma(candles, period)


@router.post("/ema", response_model=list[SeriesPoint])
async def ema_series(
    candles: list[Candle] = Body(...),
    period: int = Query(default=20, ge=1, le=500),
):
    """Exponential moving average (first-close seed)."""
    return calculate_ema(candles, period)


@router.post("/rsi", response_model=list[RSIPoint])
async def rsi_series(
    candles: list[Candle] = Body(...),
    period: int = Query(default=14, ge=1, le=100),
):
    """Wilder-smoothed RSI."""
    return calculate_rsi(candles, period)


@router.post("/stoch-rsi", response_model=list[StochRSIPoint])
async def stoch_rsi_series(
    candles: list[Candle] = Body(...),
    rsi_period: int = Query(default=14, ge=1, le=100),
    stoch_period: int = Query(default=14, ge=1, le=100),
    k_smooth: int = Query(default=3, ge=1, le=20),
    d_smooth: int = Query(default=3, ge=1, le=20),
):
    """Stochastic RSI with %K and %D."""
    return calculate_stochastic_rsi(candles, rsi_period, stoch_period, k_smooth, d_smooth)


@router.post("/macd", response_model=list[MACDPoint])
async def macd_series(
    candles: list[Candle] = Body(...),
    fast: int = Query(default=12, ge=1, le=100),
    slow: int = Query(default=26, ge=1, le=200),
    signal: int = Query(default=9, ge=1, le=50),
):
    """MACD line, signal line and histogram."""
    return calculate_macd(candles, fast, slow, signal)


@router.post("/bollinger", response_model=list[BandPoint])
async def bollinger_series(
    candles: list[Candle] = Body(...),
    period: int = Query(default=20, ge=1, le=500),
    std_dev: float = Query(default=2.0, gt=0, le=5.0),
):
    """Bollinger Bands (population standard deviation)."""
    return calculate_bollinger_bands(candles, period, std_dev)


@router.post("/crosses", response_model=CrossResult)
async def crosses(request: CrossRequest):
    """Golden/death crosses between two MA series."""
    return detect_crosses(request.short_series, request.long_series)


@router.post("/closest-level", response_model=ClosestLevel)
async def closest_level(request: ClosestLevelRequest):
    """Nearest named level to the price."""
    return find_closest_level(request.price, request.levels)


@router.post("/hourly-performance", response_model=list[HourlyPerformance])
async def hourly_performance(
    candles: list[Candle] = Body(...),
    count: int = Query(default=5, ge=1, le=48),
):
    """Open-to-close change of the most recent hourly candles."""
    return calculate_hourly_performance(candles, count)


@router.get("/fear-greed/{value}", response_model=FearGreedResponse)
async def fear_greed(value: float = Path(..., ge=0, le=100)):
    """Classify a Fear & Greed index value."""
    return FearGreedResponse(value=value, classification=get_fear_greed_classification(value))


@router.get("/precision/{symbol}", response_model=PrecisionResponse)
async def get_precision(symbol: str):
    """Display decimals for a symbol."""
    symbol = symbol.upper().strip()
    cache = get_precision_cache()
    return PrecisionResponse(symbol=symbol, decimals=cache.get(symbol), observed=symbol in cache)


@router.post("/precision/{symbol}", response_model=PrecisionResponse)
async def observe_precision(
    symbol: str,
    price: str = Query(..., description="Price exactly as streamed, e.g. '0.00001230'"),
):
    """Record a streamed price and return the (never decreasing) precision."""
    symbol = symbol.upper().strip()
    if significant_decimals(price) is None:
        raise HTTPException(status_code=400, detail=f"Invalid price for {symbol}: {price}")

    cache = get_precision_cache()
    decimals = cache.observe(symbol, price)

    return PrecisionResponse(
        symbol=symbol,
        decimals=decimals,
        observed=True,
        formatted=format_symbol_price(float(price), symbol, cache),
    )
