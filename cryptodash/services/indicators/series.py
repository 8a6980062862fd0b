"""
Candle-level indicator series.

Wraps the NumPy kernels in calculations.py and keys every value back to the
candle it belongs to. Insufficient input always yields an empty list.
"""

import logging
from typing import Iterable, Sequence

import numpy as np

from cryptodash.schemas.market import Candle, SeriesPoint
from cryptodash.schemas.indicators import BandPoint, MACDPoint, RSIPoint, StochRSIPoint
from cryptodash.services.indicators import calculations

logger = logging.getLogger(__name__)

DEFAULT_MA_PERIODS = (9, 21, 55, 100, 200)


def _closes(candles: Sequence[Candle]) -> np.ndarray:
    """Convert candle closes to a numpy array."""
    return np.array([c.close for c in candles], dtype=float)


def _to_series(candles: Sequence[Candle], values: np.ndarray) -> list[SeriesPoint]:
    """Key values to the trailing candles (values align to the end of candles)."""
    offset = len(candles) - len(values)
    return [
        SeriesPoint(time=candles[offset + j].time, value=float(v))
        for j, v in enumerate(values)
    ]


# =============================================================================
# SERIES PRIMITIVES
# =============================================================================


def calculate_sma(candles: Sequence[Candle], period: int) -> list[SeriesPoint]:
    """Simple moving average of closes; first point at candles[period - 1]."""
    if len(candles) < period:
        return []
    return _to_series(candles, calculations.sma(_closes(candles), period))


def calculate_ema(candles: Sequence[Candle], period: int) -> list[SeriesPoint]:
    """EMA of closes seeded with candles[0].close; one point per candle."""
    if len(candles) < period:
        return []
    return _to_series(candles, calculations.ema(_closes(candles), period))


def calculate_all_mas(
    candles: Sequence[Candle], periods: Iterable[int] = DEFAULT_MA_PERIODS
) -> dict[int, list[SeriesPoint]]:
    """SMA series for every period the candle count can satisfy."""
    return {
        period: calculate_sma(candles, period)
        for period in periods
        if len(candles) >= period
    }


# =============================================================================
# OSCILLATORS
# =============================================================================


def calculate_rsi(candles: Sequence[Candle], period: int = 14) -> list[RSIPoint]:
    """RSI points aligned to candles[period:]."""
    if len(candles) < period + 1:
        logger.debug(f"RSI: need {period + 1} data points, have {len(candles)}")
        return []

    values = calculations.rsi(_closes(candles), period)
    return [
        RSIPoint(**candles[period + j].model_dump(), rsi=float(v))
        for j, v in enumerate(values)
    ]


def calculate_stochastic_rsi(
    candles: Sequence[Candle],
    rsi_period: int = 14,
    stoch_period: int = 14,
    k_smooth: int = 3,
    d_smooth: int = 3,
) -> list[StochRSIPoint]:
    """
    Stochastic RSI with %K (SMA of raw) and %D (SMA of %K).

    Needs rsi_period + stoch_period + max(k_smooth, d_smooth) candles.
    """
    min_points = rsi_period + stoch_period + max(k_smooth, d_smooth)
    if len(candles) < min_points:
        logger.debug(f"StochRSI: need {min_points} data points, have {len(candles)}")
        return []

    rsi_points = calculate_rsi(candles, rsi_period)
    rsi_values = np.array([p.rsi for p in rsi_points], dtype=float)
    raw, k, d = calculations.stochastic_rsi(rsi_values, stoch_period, k_smooth, d_smooth)

    offset = len(rsi_points) - len(d)
    result = [
        StochRSIPoint(
            **rsi_points[offset + j].model_dump(),
            raw_stoch_rsi=float(raw[j]),
            stoch_rsi=float(k[j]),
            stoch_rsi_d=float(d[j]),
        )
        for j in range(len(d))
    ]

    logger.debug(f"StochRSI: generated {len(result)} points from {len(candles)} candles")
    return result


# =============================================================================
# TREND / VOLATILITY
# =============================================================================


def calculate_macd(
    candles: Sequence[Candle],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> list[MACDPoint]:
    """MACD line, signal and histogram, keyed by candle time."""
    min_points = max(fast_period, slow_period) + signal_period
    if len(candles) < min_points:
        logger.debug(f"MACD: need {min_points} data points, have {len(candles)}")
        return []

    fast = calculate_ema(candles, fast_period)
    slow_by_time = {p.time: p.value for p in calculate_ema(candles, slow_period)}

    # Keep only timestamps present in both EMAs
    aligned = [(p.time, p.value, slow_by_time[p.time]) for p in fast if p.time in slow_by_time]
    if len(aligned) < signal_period:
        return []

    times = [t for t, _, _ in aligned]
    macd_line, signal_line, histogram = calculations.macd(
        np.array([f for _, f, _ in aligned], dtype=float),
        np.array([s for _, _, s in aligned], dtype=float),
        signal_period,
    )

    return [
        MACDPoint(
            time=times[j],
            macd=float(macd_line[j]),
            signal=float(signal_line[j]),
            histogram=float(histogram[j]),
        )
        for j in range(len(macd_line))
    ]


def calculate_bollinger_bands(
    candles: Sequence[Candle], period: int = 20, std_dev: float = 2.0
) -> list[BandPoint]:
    """Bollinger Bands (SMA ± std_dev · population σ)."""
    if len(candles) < period:
        return []

    upper, middle, lower = calculations.bollinger_bands(_closes(candles), period, std_dev)
    offset = len(candles) - len(middle)
    return [
        BandPoint(
            time=candles[offset + j].time,
            middle=float(middle[j]),
            upper=float(upper[j]),
            lower=float(lower[j]),
        )
        for j in range(len(middle))
    ]
