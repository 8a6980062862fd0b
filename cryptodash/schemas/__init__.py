"""
CryptoDash Schema Contracts

Authoritative interfaces between the indicator engine and its collaborators.
"""

from cryptodash.schemas.market import (
    Timeframe,
    Candle,
    SeriesPoint,
    DashboardSnapshot,
)
from cryptodash.schemas.indicators import (
    CrossType,
    AlertType,
    AlertSeverity,
    AlertCondition,
    BandPoint,
    MACDPoint,
    RSIPoint,
    StochRSIPoint,
    CrossEvent,
    NextCrossEstimate,
    CrossResult,
    LevelDistance,
    ClosestLevel,
    TechnicalLevels,
    Alert,
    HourlyPerformance,
    HourProgress,
    TimeframeAnalysis,
    DashboardAnalysis,
)

__all__ = [
    # Market
    "Timeframe",
    "Candle",
    "SeriesPoint",
    "DashboardSnapshot",
    # Indicators
    "CrossType",
    "AlertType",
    "AlertSeverity",
    "AlertCondition",
    "BandPoint",
    "MACDPoint",
    "RSIPoint",
    "StochRSIPoint",
    "CrossEvent",
    "NextCrossEstimate",
    "CrossResult",
    "LevelDistance",
    "ClosestLevel",
    "TechnicalLevels",
    "Alert",
    "HourlyPerformance",
    "HourProgress",
    "TimeframeAnalysis",
    "DashboardAnalysis",
]
