"""
Indicator Engine Service

CONTRACT:
    Input:  DashboardSnapshot (candles per timeframe)
    Output: DashboardAnalysis

RESPONSIBILITIES:
    - Moving averages (SMA, EMA) and Bollinger Bands
    - RSI, Stochastic RSI and MACD
    - Golden/death cross detection and next-cross extrapolation
    - Closest MA/BB levels and threshold alerts

Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from cryptodash.services.indicators.interface import IndicatorServiceInterface
from cryptodash.services.indicators.service import (
    IndicatorService,
    get_indicator_service,
    normalize_candles,
)
from cryptodash.services.indicators.series import (
    calculate_sma,
    calculate_ema,
    calculate_all_mas,
    calculate_rsi,
    calculate_stochastic_rsi,
    calculate_macd,
    calculate_bollinger_bands,
)
from cryptodash.services.indicators.crosses import detect_crosses
from cryptodash.services.indicators.levels import (
    calculate_distance_to_level,
    find_closest_level,
    find_closest_ma,
    find_closest_bb,
    get_all_technical_levels,
)
from cryptodash.services.indicators.alerts import (
    generate_technical_alerts,
    get_fear_greed_classification,
    is_cross_in_alert_range,
)
from cryptodash.services.indicators.performance import (
    calculate_hourly_performance,
    calculate_hour_progress,
)

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
    "normalize_candles",
    "calculate_sma",
    "calculate_ema",
    "calculate_all_mas",
    "calculate_rsi",
    "calculate_stochastic_rsi",
    "calculate_macd",
    "calculate_bollinger_bands",
    "detect_crosses",
    "calculate_distance_to_level",
    "find_closest_level",
    "find_closest_ma",
    "find_closest_bb",
    "get_all_technical_levels",
    "generate_technical_alerts",
    "get_fear_greed_classification",
    "is_cross_in_alert_range",
    "calculate_hourly_performance",
    "calculate_hour_progress",
]
