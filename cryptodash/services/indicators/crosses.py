"""
Golden/Death Cross Detection

Finds every crossover between a short and a long moving average and
linearly extrapolates when the next one should happen.
"""

import logging
from typing import Optional, Sequence

from cryptodash.core.config import settings
from cryptodash.schemas.market import SeriesPoint
from cryptodash.schemas.indicators import (
    CrossEvent,
    CrossResult,
    CrossType,
    NextCrossEstimate,
)

logger = logging.getLogger(__name__)

# Number of trailing points used to estimate each MA's slope
TREND_WINDOW = 5

MS_PER_DAY = 24 * 60 * 60 * 1000


def _sign(diff: float, scale: float, epsilon: float) -> int:
    """Sign of diff, or 0 when it is within epsilon of the operands' magnitude."""
    if abs(diff) <= epsilon * scale:
        return 0
    return 1 if diff > 0 else -1


def _estimate_next_cross(
    short_series: Sequence[SeriesPoint],
    long_series: Sequence[SeriesPoint],
    current_diff: float,
    epsilon: float,
) -> Optional[NextCrossEstimate]:
    """
    Extrapolate the next cross from the slopes of the last TREND_WINDOW points.

    Only converging MAs (slope difference opposite in sign to the current
    difference) produce an estimate.
    """
    if len(short_series) < TREND_WINDOW or len(long_series) < TREND_WINDOW:
        return None

    short_trend = short_series[-1].value - short_series[-TREND_WINDOW].value
    long_trend = long_series[-1].value - long_series[-TREND_WINDOW].value
    trend_diff = short_trend - long_trend

    scale = max(
        abs(short_series[-1].value),
        abs(short_series[-TREND_WINDOW].value),
        abs(long_series[-1].value),
        abs(long_series[-TREND_WINDOW].value),
    )
    trend_sign = _sign(trend_diff, scale, epsilon)
    diff_sign = _sign(current_diff, scale, epsilon)

    if trend_sign == 0 or diff_sign == 0 or trend_sign == diff_sign:
        return None

    days_until = abs(current_diff / trend_diff) * TREND_WINDOW
    return NextCrossEstimate(
        estimated_time=short_series[-1].time + int(days_until * MS_PER_DAY),
        type=CrossType.DEATH if current_diff > 0 else CrossType.GOLDEN,
        days_until=days_until,
    )


def detect_crosses(
    short_series: Sequence[SeriesPoint],
    long_series: Sequence[SeriesPoint],
    epsilon: Optional[float] = None,
) -> CrossResult:
    """
    Detect golden (short rises above long) and death (short falls below long)
    crosses between two time-aligned series.

    Points inside the epsilon band count as touching: they neither start nor
    complete a crossover, so rounding noise around equality is ignored.
    """
    if not short_series or not long_series or len(short_series) < 2 or len(long_series) < 2:
        return CrossResult()

    epsilon = settings.sign_epsilon if epsilon is None else epsilon
    long_by_time = {p.time: p.value for p in long_series}
    first_long_time = long_series[0].time

    crosses: list[CrossEvent] = []
    last_golden: Optional[CrossEvent] = None
    last_death: Optional[CrossEvent] = None
    prev_sign = 0
    current_diff: Optional[float] = None

    for point in short_series:
        if point.time < first_long_time:
            continue

        long_value = long_by_time.get(point.time)
        if long_value is None:
            continue

        current_diff = point.value - long_value
        sign = _sign(current_diff, max(abs(point.value), abs(long_value)), epsilon)
        if sign == 0:
            continue

        if prev_sign != 0 and sign != prev_sign:
            event = CrossEvent(
                time=point.time,
                type=CrossType.GOLDEN if sign > 0 else CrossType.DEATH,
                short_value=point.value,
                long_value=long_value,
            )
            crosses.append(event)
            if event.type == CrossType.GOLDEN:
                last_golden = event
            else:
                last_death = event

        prev_sign = sign

    next_cross = None
    if current_diff is not None:
        next_cross = _estimate_next_cross(short_series, long_series, current_diff, epsilon)

    if crosses:
        logger.debug(f"Detected {len(crosses)} crosses, last {crosses[-1].type.value}")

    return CrossResult(
        last_golden_cross=last_golden,
        last_death_cross=last_death,
        next_cross_estimate=next_cross,
        all_crosses=crosses,
    )
