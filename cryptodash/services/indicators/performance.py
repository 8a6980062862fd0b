"""
Hourly price performance.

Open-to-close change of recent hourly candles and progress of the hour in
flight, labelled in the dashboard's display timezone.
"""

from datetime import datetime
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from cryptodash.core.config import settings
from cryptodash.schemas.market import Candle
from cryptodash.schemas.indicators import HourlyPerformance, HourProgress


def _zone(tz: Optional[str]) -> ZoneInfo:
    return ZoneInfo(tz or settings.display_timezone)


def _percent_change(start: float, end: float) -> float:
    if not start:
        return 0.0
    return ((end - start) / start) * 100


def calculate_hourly_performance(
    candles: Sequence[Candle], count: int = 5, tz: Optional[str] = None
) -> list[HourlyPerformance]:
    """Percent change of the last `count` hourly candles, most recent first."""
    if count < 1:
        return []
    zone = _zone(tz)

    result = []
    for candle in reversed(candles[-count:]):
        hour = datetime.fromtimestamp(candle.time / 1000, tz=zone).hour
        result.append(
            HourlyPerformance(
                hour=hour,
                formatted_hour=f"{hour:02d}:00",
                percent_change=_percent_change(candle.open, candle.close),
            )
        )
    return result


def calculate_hour_progress(
    hour_open: float,
    current_price: float,
    now: Optional[datetime] = None,
    tz: Optional[str] = None,
) -> HourProgress:
    """Change from the current hour's open price to the live price."""
    zone = _zone(tz)
    now = datetime.now(zone) if now is None else now.astimezone(zone)

    return HourProgress(
        hour=now.hour,
        formatted_hour=f"{now.hour:02d}:00",
        minutes_into_hour=now.minute,
        percent_change=_percent_change(hour_open, current_price),
    )
