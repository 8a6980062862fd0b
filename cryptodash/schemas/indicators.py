"""
CONTRACT 2: Indicator Engine Output

Input: DashboardSnapshot (candles per timeframe)
Output: DashboardAnalysis

Every value here is recomputed on each refresh and replaces the previous one.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from cryptodash.schemas.market import Candle, SeriesPoint


# =============================================================================
# ENUMS
# =============================================================================


class CrossType(str, Enum):
    GOLDEN = "golden"
    DEATH = "death"


class AlertType(str, Enum):
    CROSS = "cross"
    STOCH_RSI = "stochRSI"
    MACD = "macd"
    FEAR_GREED = "fearGreed"


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AlertCondition(str, Enum):
    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"
    EXTREME_FEAR = "extreme_fear"
    EXTREME_GREED = "extreme_greed"


# =============================================================================
# SERIES POINTS
# =============================================================================


class BandPoint(BaseModel):
    """Bollinger Bands value for one candle."""

    time: int
    middle: float
    upper: float
    lower: float


class MACDPoint(BaseModel):
    """MACD line, signal line and histogram for one candle."""

    time: int
    macd: float
    signal: float
    histogram: float


class RSIPoint(Candle):
    """Source candle plus its RSI value."""

    rsi: float = Field(..., ge=0, le=100)


class StochRSIPoint(RSIPoint):
    """RSI point plus raw, %K and %D Stochastic RSI values."""

    raw_stoch_rsi: float = Field(..., ge=0, le=100)
    stoch_rsi: float = Field(..., ge=0, le=100, description="%K (smoothed)")
    stoch_rsi_d: float = Field(..., ge=0, le=100, description="%D (double-smoothed)")


# =============================================================================
# CROSSES
# =============================================================================


class CrossEvent(BaseModel):
    """Short MA crossing the long MA."""

    time: int
    type: CrossType
    short_value: float
    long_value: float


class NextCrossEstimate(BaseModel):
    """Linear extrapolation of the next crossover."""

    estimated_time: int
    type: CrossType
    days_until: float = Field(..., ge=0)


class CrossResult(BaseModel):
    """Golden/death cross history between two moving averages."""

    last_golden_cross: Optional[CrossEvent] = None
    last_death_cross: Optional[CrossEvent] = None
    next_cross_estimate: Optional[NextCrossEstimate] = None
    all_crosses: list[CrossEvent] = Field(default_factory=list)


# =============================================================================
# LEVELS
# =============================================================================


class LevelDistance(BaseModel):
    """Distance from price to a level, as an absolute percentage of price."""

    percentage: float = Field(..., ge=0)
    is_above: bool = Field(..., description="Level sits above the current price")


class ClosestLevel(BaseModel):
    """Nearest named level to the current price."""

    level: Optional[float] = None
    name: Optional[str] = None
    distance: Optional[LevelDistance] = None


class TechnicalLevels(BaseModel):
    """Latest MA and Bollinger levels for one timeframe."""

    ma: dict[str, float] = Field(default_factory=dict)
    bb: dict[str, float] = Field(default_factory=dict)


# =============================================================================
# ALERTS
# =============================================================================


class Alert(BaseModel):
    """
    Threshold-triggered alert.

    Per-type fields:
      cross      -> cross_type, timestamp, days_ago | days_until
      stochRSI   -> value, condition
      macd       -> value, condition
      fearGreed  -> value, condition (no timeframe)
    """

    type: AlertType
    severity: AlertSeverity
    symbol: str
    timeframe: Optional[str] = None
    message: str
    timestamp: Optional[int] = None
    cross_type: Optional[CrossType] = None
    days_ago: Optional[int] = None
    days_until: Optional[int] = None
    value: Optional[float] = None
    condition: Optional[AlertCondition] = None


# =============================================================================
# PRICE PERFORMANCE
# =============================================================================


class HourlyPerformance(BaseModel):
    """Open-to-close change of one hourly candle."""

    hour: int = Field(..., ge=0, le=23)
    formatted_hour: str
    percent_change: float


class HourProgress(HourlyPerformance):
    """Change since the current hour opened."""

    minutes_into_hour: int = Field(..., ge=0, le=59)


# =============================================================================
# OUTPUT: DashboardAnalysis
# =============================================================================


class TimeframeAnalysis(BaseModel):
    """All indicator output for one timeframe."""

    timeframe: str
    candle_count: int
    moving_averages: dict[int, list[SeriesPoint]] = Field(default_factory=dict)
    bollinger_bands: list[BandPoint] = Field(default_factory=list)
    rsi: list[RSIPoint] = Field(default_factory=list)
    stoch_rsi: list[StochRSIPoint] = Field(default_factory=list)
    macd: list[MACDPoint] = Field(default_factory=list)
    crosses: CrossResult = Field(default_factory=CrossResult)
    closest_ma: ClosestLevel = Field(default_factory=ClosestLevel)
    closest_bb: ClosestLevel = Field(default_factory=ClosestLevel)


class DashboardAnalysis(BaseModel):
    """
    Complete engine output for a symbol.
    Returned by: Indicator Service
    Consumed by: charts, indicator cards, notification widgets
    """

    symbol: str
    generated_at: datetime
    current_price: Optional[float] = None
    price_decimals: int
    timeframes: dict[str, TimeframeAnalysis] = Field(default_factory=dict)
    technical_levels: dict[str, TechnicalLevels] = Field(default_factory=dict)
    fear_greed_index: Optional[float] = None
    fear_greed_classification: Optional[str] = None
    alerts: list[Alert] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
