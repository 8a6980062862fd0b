"""
Support/Resistance Levels

Distance from the current price to moving-average and Bollinger levels.
"""

from typing import Iterable, Mapping, Optional, Sequence

from cryptodash.core.config import settings
from cryptodash.schemas.market import SeriesPoint
from cryptodash.schemas.indicators import (
    BandPoint,
    ClosestLevel,
    LevelDistance,
    TechnicalLevels,
)


def calculate_distance_to_level(current_price: float, level: float) -> LevelDistance:
    """Absolute percentage distance from price to level, and which side it is on."""
    if not current_price or level is None:
        return LevelDistance(percentage=0.0, is_above=True)

    distance = level - current_price
    return LevelDistance(
        percentage=abs((distance / current_price) * 100),
        is_above=distance > 0,
    )


def find_closest_level(
    current_price: Optional[float], levels: Optional[Mapping[str, Optional[float]]]
) -> ClosestLevel:
    """
    Find the named level nearest to the current price.

    Missing price, empty levels or only-None levels give an all-null result.
    """
    if not levels or not current_price:
        return ClosestLevel()

    closest_name: Optional[str] = None
    closest_level: Optional[float] = None
    closest_distance = float("inf")

    for name, level in levels.items():
        if level is None:
            continue
        distance = abs(current_price - level)
        if distance < closest_distance:
            closest_distance = distance
            closest_level = level
            closest_name = name

    if closest_level is None:
        return ClosestLevel()

    return ClosestLevel(
        level=closest_level,
        name=closest_name,
        distance=calculate_distance_to_level(current_price, closest_level),
    )


def latest_ma_levels(ma_data: Mapping[int, Sequence[SeriesPoint]]) -> dict[str, float]:
    """Latest value of each MA series, named MA<period>."""
    return {
        f"MA{period}": series[-1].value
        for period, series in ma_data.items()
        if series
    }


def latest_band_levels(bb_data: Sequence[BandPoint], suffix: str = "") -> dict[str, float]:
    """Latest upper/middle/lower band values."""
    if not bb_data:
        return {}
    latest = bb_data[-1]
    return {
        f"Upper{suffix}": latest.upper,
        f"Middle{suffix}": latest.middle,
        f"Lower{suffix}": latest.lower,
    }


def find_closest_ma(
    current_price: Optional[float], ma_data: Mapping[int, Sequence[SeriesPoint]]
) -> ClosestLevel:
    """Closest of the latest MA values."""
    return find_closest_level(current_price, latest_ma_levels(ma_data))


def find_closest_bb(
    current_price: Optional[float], bb_data: Sequence[BandPoint]
) -> ClosestLevel:
    """Closest of the latest upper/middle/lower bands."""
    return find_closest_level(current_price, latest_band_levels(bb_data, " Band"))


def get_all_technical_levels(
    ma_data: Mapping[str, Mapping[int, Sequence[SeriesPoint]]],
    bb_data: Mapping[str, Sequence[BandPoint]],
    timeframes: Optional[Iterable[str]] = None,
) -> dict[str, TechnicalLevels]:
    """
    Latest MA and band levels per timeframe.

    Every configured timeframe is always present (empty when it has no data);
    extra timeframes found in the inputs follow in input order.
    """
    configured = settings.timeframes if timeframes is None else timeframes
    result: dict[str, TechnicalLevels] = {}
    for timeframe in dict.fromkeys([*configured, *ma_data.keys(), *bb_data.keys()]):
        result[timeframe] = TechnicalLevels(
            ma=latest_ma_levels(ma_data.get(timeframe) or {}),
            bb=latest_band_levels(bb_data.get(timeframe) or []),
        )
    return result
