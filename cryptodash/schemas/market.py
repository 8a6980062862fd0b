"""
CONTRACT 1: Market Data

Input consumed by the indicator engine. Collaborators (REST pollers, kline
WebSocket handlers, the Fear & Greed fetcher) normalise raw exchange data
into these models before calling the engine.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    H1 = "1h"
    H4 = "4h"
    DAILY = "daily"


# =============================================================================
# CANDLES
# =============================================================================


class Candle(BaseModel):
    """Single OHLCV candle keyed by its open time in epoch milliseconds."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    time: int = Field(..., description="Candle open time (ms since epoch)")
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(default=0.0, ge=0)


class SeriesPoint(BaseModel):
    """One indicator value keyed to a candle's time."""

    time: int
    value: float


# =============================================================================
# INPUT: DashboardSnapshot
# =============================================================================


class DashboardSnapshot(BaseModel):
    """
    Everything the engine needs for one refresh cycle of one symbol.
    Sent by: dashboard state orchestration
    Received by: Indicator Service
    """

    symbol: str = Field(..., min_length=1, description="Trading pair, e.g. BTCUSDT")
    current_price: Optional[float] = Field(
        default=None,
        gt=0,
        allow_inf_nan=False,
        description="Latest ticker price; falls back to the last close",
    )
    fear_greed_index: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Market sentiment index (alternative.me scale)",
    )
    candles: dict[str, list[Candle]] = Field(
        ...,
        description="Candles per timeframe label ('1h', '4h', 'daily'), ascending by time",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "symbol": "BTCUSDT",
                "current_price": 67012.5,
                "fear_greed_index": 18,
                "candles": {
                    "1h": [
                        {
                            "time": 1717200000000,
                            "open": 67000.0,
                            "high": 67120.0,
                            "low": 66950.0,
                            "close": 67010.0,
                            "volume": 812.4,
                        }
                    ]
                },
            }
        }
    )
