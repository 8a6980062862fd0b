"""
Technical Alerts

Threshold rules over cross, StochRSI, MACD and Fear & Greed data.
Rules are evaluated independently; a timeframe may yield zero or several alerts.
"""

import logging
import math
import time
from typing import Iterable, Mapping, Optional, Sequence

from cryptodash.core.config import Settings, settings
from cryptodash.schemas.indicators import (
    Alert,
    AlertCondition,
    AlertSeverity,
    AlertType,
    CrossEvent,
    CrossResult,
    CrossType,
    MACDPoint,
    StochRSIPoint,
)

logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


def _round_half_up(days: float) -> int:
    """Round to whole days with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(days + 0.5)


def get_fear_greed_classification(value: float) -> str:
    """Label for a Fear & Greed index value (alternative.me bands)."""
    if value <= 20:
        return "Extreme Fear"
    if value <= 40:
        return "Fear"
    if value <= 60:
        return "Neutral"
    if value <= 80:
        return "Greed"
    return "Extreme Greed"


def is_cross_in_alert_range(
    cross_time: Optional[int],
    max_days: Optional[float] = None,
    now: Optional[int] = None,
) -> bool:
    """True when cross_time lies within max_days of now (either side)."""
    if not cross_time:
        return False
    max_days = settings.cross_alert_days if max_days is None else max_days
    now = _now_ms() if now is None else now
    return abs(now - cross_time) / MS_PER_DAY <= max_days


def _cross_alerts(
    symbol: str,
    timeframe: str,
    cross: CrossResult,
    now: int,
    max_days: float,
) -> list[Alert]:
    tf_label = timeframe.upper()
    alerts = []

    past: list[CrossEvent] = [
        c for c in (cross.last_golden_cross, cross.last_death_cross) if c is not None
    ]
    for event in past:
        if not is_cross_in_alert_range(event.time, max_days, now):
            continue
        days_ago = _round_half_up((now - event.time) / MS_PER_DAY)
        when = "today" if days_ago == 0 else f"{days_ago} days ago"
        name = "Golden" if event.type == CrossType.GOLDEN else "Death"
        alerts.append(
            Alert(
                type=AlertType.CROSS,
                severity=AlertSeverity.HIGH,
                symbol=symbol,
                timeframe=timeframe,
                message=f"{name} Cross {when} ({tf_label})",
                cross_type=event.type,
                timestamp=event.time,
                days_ago=days_ago,
            )
        )

    estimate = cross.next_cross_estimate
    if estimate is not None and estimate.days_until <= max_days:
        days_until = _round_half_up(estimate.days_until)
        name = "Golden" if estimate.type == CrossType.GOLDEN else "Death"
        alerts.append(
            Alert(
                type=AlertType.CROSS,
                severity=AlertSeverity.MEDIUM,
                symbol=symbol,
                timeframe=timeframe,
                message=f"{name} Cross in {days_until} days ({tf_label})",
                cross_type=estimate.type,
                timestamp=estimate.estimated_time,
                days_until=days_until,
            )
        )

    return alerts


def _stoch_rsi_alert(
    symbol: str,
    timeframe: str,
    points: Sequence[StochRSIPoint],
    overbought: float,
    oversold: float,
) -> Optional[Alert]:
    stoch_rsi = points[-1].stoch_rsi
    tf_label = timeframe.upper()

    if stoch_rsi >= overbought:
        condition, label = AlertCondition.OVERBOUGHT, "Overbought"
    elif stoch_rsi <= oversold:
        condition, label = AlertCondition.OVERSOLD, "Oversold"
    else:
        return None

    return Alert(
        type=AlertType.STOCH_RSI,
        severity=AlertSeverity.MEDIUM,
        symbol=symbol,
        timeframe=timeframe,
        message=f"StochRSI {label} ({stoch_rsi:.1f}) - {tf_label}",
        value=stoch_rsi,
        condition=condition,
    )


def _macd_alert(
    symbol: str,
    timeframe: str,
    points: Sequence[MACDPoint],
    lookback: int,
    band: float,
) -> Optional[Alert]:
    """Flag a histogram sitting in the top/bottom band of its recent range."""
    histogram = points[-1].histogram
    recent = [p.histogram for p in points[-lookback:]]
    highest = max(recent)
    lowest = min(recent)
    histogram_range = highest - lowest

    if histogram_range <= 0:
        return None

    if histogram >= highest - histogram_range * band:
        condition = AlertCondition.OVERBOUGHT
    elif histogram <= lowest + histogram_range * band:
        condition = AlertCondition.OVERSOLD
    else:
        return None

    return Alert(
        type=AlertType.MACD,
        severity=AlertSeverity.LOW,
        symbol=symbol,
        timeframe=timeframe,
        message=f"MACD potentially {condition.value} - {timeframe.upper()}",
        value=histogram,
        condition=condition,
    )


def _fear_greed_alert(
    symbol: str, value: float, fear: float, greed: float
) -> Optional[Alert]:
    if value <= fear:
        condition, label = AlertCondition.EXTREME_FEAR, "Extreme Fear"
    elif value >= greed:
        condition, label = AlertCondition.EXTREME_GREED, "Extreme Greed"
    else:
        return None

    return Alert(
        type=AlertType.FEAR_GREED,
        severity=AlertSeverity.HIGH,
        symbol=symbol,
        message=f"{label} - Fear & Greed Index: {value:g}",
        value=value,
        condition=condition,
    )


def generate_technical_alerts(
    symbol: str,
    stoch_rsi_data: Optional[Mapping[str, Sequence[StochRSIPoint]]] = None,
    macd_data: Optional[Mapping[str, Sequence[MACDPoint]]] = None,
    cross_data: Optional[Mapping[str, CrossResult]] = None,
    fear_greed_index: Optional[float] = None,
    timeframes: Optional[Iterable[str]] = None,
    now: Optional[int] = None,
    config: Optional[Settings] = None,
) -> list[Alert]:
    """
    Generate alerts for one symbol across timeframes.

    Args:
        symbol: Trading pair the data belongs to
        stoch_rsi_data: StochRSI series per timeframe
        macd_data: MACD series per timeframe
        cross_data: Cross detection result per timeframe
        fear_greed_index: Market sentiment index, None when unavailable
        timeframes: Timeframes to evaluate (default: settings.timeframes)
        now: Reference time in ms (default: current time)
        config: Threshold source (default: application settings)

    Returns:
        Alerts ordered by timeframe, then cross/StochRSI/MACD, then sentiment last
    """
    cfg = config or settings
    stoch_rsi_data = stoch_rsi_data or {}
    macd_data = macd_data or {}
    cross_data = cross_data or {}
    timeframes = list(cfg.timeframes if timeframes is None else timeframes)
    now = _now_ms() if now is None else now

    alerts: list[Alert] = []

    for timeframe in timeframes:
        cross = cross_data.get(timeframe)
        if cross is not None:
            alerts.extend(
                _cross_alerts(symbol, timeframe, cross, now, cfg.cross_alert_days)
            )

        stoch_points = stoch_rsi_data.get(timeframe)
        if stoch_points:
            alert = _stoch_rsi_alert(
                symbol,
                timeframe,
                stoch_points,
                cfg.stoch_rsi_overbought,
                cfg.stoch_rsi_oversold,
            )
            if alert:
                alerts.append(alert)

        macd_points = macd_data.get(timeframe)
        if macd_points:
            alert = _macd_alert(
                symbol,
                timeframe,
                macd_points,
                cfg.macd_histogram_lookback,
                cfg.macd_extreme_band,
            )
            if alert:
                alerts.append(alert)

    if fear_greed_index is not None:
        alert = _fear_greed_alert(
            symbol,
            fear_greed_index,
            cfg.extreme_fear_threshold,
            cfg.extreme_greed_threshold,
        )
        if alert:
            alerts.append(alert)

    if alerts:
        logger.info(f"{symbol}: {len(alerts)} technical alerts")

    return alerts
