"""Tests for technical alert rules and the Fear & Greed classification."""

import pytest

from cryptodash.core.config import Settings
from cryptodash.schemas.indicators import (
    AlertCondition,
    AlertSeverity,
    AlertType,
    CrossEvent,
    CrossResult,
    CrossType,
    MACDPoint,
    NextCrossEstimate,
    StochRSIPoint,
)
from cryptodash.services.indicators import (
    generate_technical_alerts,
    get_fear_greed_classification,
    is_cross_in_alert_range,
)

from conftest import DAY_MS, HOUR_MS, START_MS

NOW = START_MS + 30 * DAY_MS


def _stoch_point(k: float) -> StochRSIPoint:
    return StochRSIPoint(
        time=NOW,
        open=1.0,
        high=1.0,
        low=1.0,
        close=1.0,
        rsi=50.0,
        raw_stoch_rsi=k,
        stoch_rsi=k,
        stoch_rsi_d=k,
    )


def _macd_points(histograms):
    return [
        MACDPoint(time=NOW + i, macd=h, signal=0.0, histogram=h)
        for i, h in enumerate(histograms)
    ]


def _cross(days_ago: float, cross_type=CrossType.GOLDEN) -> CrossEvent:
    return CrossEvent(
        time=int(NOW - days_ago * DAY_MS),
        type=cross_type,
        short_value=1.0,
        long_value=1.0,
    )


# -----------------------------------------------------------------------------
# Fear & Greed
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "value, label",
    [
        (0, "Extreme Fear"),
        (20, "Extreme Fear"),
        (21, "Fear"),
        (40, "Fear"),
        (50, "Neutral"),
        (61, "Greed"),
        (80, "Greed"),
        (81, "Extreme Greed"),
        (100, "Extreme Greed"),
    ],
)
def test_fear_greed_classification(value, label):
    assert get_fear_greed_classification(value) == label


def test_extreme_fear_alert():
    alerts = generate_technical_alerts("BTCUSDT", fear_greed_index=15, now=NOW)

    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.type == AlertType.FEAR_GREED
    assert alert.severity == AlertSeverity.HIGH
    assert alert.condition == AlertCondition.EXTREME_FEAR
    assert alert.timeframe is None
    assert alert.message == "Extreme Fear - Fear & Greed Index: 15"


def test_extreme_greed_alert():
    alerts = generate_technical_alerts("BTCUSDT", fear_greed_index=90, now=NOW)
    assert [a.condition for a in alerts] == [AlertCondition.EXTREME_GREED]


@pytest.mark.parametrize("value", [21, 50, 84])
def test_neutral_sentiment_has_no_alert(value):
    assert generate_technical_alerts("BTCUSDT", fear_greed_index=value, now=NOW) == []


def test_no_inputs_no_alerts():
    assert generate_technical_alerts("BTCUSDT", now=NOW) == []


# -----------------------------------------------------------------------------
# StochRSI
# -----------------------------------------------------------------------------


def test_stoch_rsi_overbought():
    alerts = generate_technical_alerts(
        "ETHUSDT", stoch_rsi_data={"1h": [_stoch_point(10.0), _stoch_point(85.0)]}, now=NOW
    )

    assert len(alerts) == 1
    assert alerts[0].type == AlertType.STOCH_RSI
    assert alerts[0].severity == AlertSeverity.MEDIUM
    assert alerts[0].condition == AlertCondition.OVERBOUGHT
    assert alerts[0].value == 85.0
    assert alerts[0].message == "StochRSI Overbought (85.0) - 1H"


def test_stoch_rsi_oversold_boundary():
    alerts = generate_technical_alerts(
        "ETHUSDT", stoch_rsi_data={"4h": [_stoch_point(20.0)]}, now=NOW
    )
    assert alerts[0].condition == AlertCondition.OVERSOLD
    assert alerts[0].timeframe == "4h"


def test_stoch_rsi_mid_range_no_alert():
    alerts = generate_technical_alerts(
        "ETHUSDT", stoch_rsi_data={"1h": [_stoch_point(50.0)]}, now=NOW
    )
    assert alerts == []


# -----------------------------------------------------------------------------
# MACD
# -----------------------------------------------------------------------------


def test_macd_histogram_at_top_of_range():
    alerts = generate_technical_alerts(
        "SOLUSDT", macd_data={"4h": _macd_points(range(10))}, now=NOW
    )

    assert len(alerts) == 1
    assert alerts[0].type == AlertType.MACD
    assert alerts[0].severity == AlertSeverity.LOW
    assert alerts[0].condition == AlertCondition.OVERBOUGHT
    assert alerts[0].message == "MACD potentially overbought - 4H"


def test_macd_histogram_at_bottom_of_range():
    alerts = generate_technical_alerts(
        "SOLUSDT", macd_data={"1h": _macd_points(range(10, 0, -1))}, now=NOW
    )
    assert alerts[0].condition == AlertCondition.OVERSOLD


def test_macd_only_last_ten_histograms_count():
    # The early spike falls outside the lookback window
    histograms = [100.0] + [float(i) for i in range(10)]
    alerts = generate_technical_alerts(
        "SOLUSDT", macd_data={"1h": _macd_points(histograms)}, now=NOW
    )
    assert alerts[0].condition == AlertCondition.OVERBOUGHT


@pytest.mark.parametrize(
    "histograms",
    [
        [0.5] * 10,
        [0.0, 10.0, 5.0],
    ],
)
def test_macd_no_alert(histograms):
    alerts = generate_technical_alerts(
        "SOLUSDT", macd_data={"1h": _macd_points(histograms)}, now=NOW
    )
    assert alerts == []


# -----------------------------------------------------------------------------
# Crosses
# -----------------------------------------------------------------------------


def test_recent_cross_alert():
    cross = CrossResult(last_golden_cross=_cross(2))
    alerts = generate_technical_alerts("BTCUSDT", cross_data={"daily": cross}, now=NOW)

    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.type == AlertType.CROSS
    assert alert.severity == AlertSeverity.HIGH
    assert alert.cross_type == CrossType.GOLDEN
    assert alert.days_ago == 2
    assert alert.timestamp == NOW - 2 * DAY_MS
    assert alert.message == "Golden Cross 2 days ago (DAILY)"


def test_cross_today():
    cross = CrossResult(last_death_cross=_cross(3 * HOUR_MS / DAY_MS, CrossType.DEATH))
    alerts = generate_technical_alerts("BTCUSDT", cross_data={"1h": cross}, now=NOW)
    assert alerts[0].message == "Death Cross today (1H)"


def test_old_cross_has_no_alert():
    cross = CrossResult(last_golden_cross=_cross(10), last_death_cross=_cross(6, CrossType.DEATH))
    assert generate_technical_alerts("BTCUSDT", cross_data={"1h": cross}, now=NOW) == []


def test_upcoming_cross_alert():
    estimate = NextCrossEstimate(
        estimated_time=NOW + int(3.4 * DAY_MS), type=CrossType.DEATH, days_until=3.4
    )
    alerts = generate_technical_alerts(
        "BTCUSDT", cross_data={"1h": CrossResult(next_cross_estimate=estimate)}, now=NOW
    )

    assert len(alerts) == 1
    assert alerts[0].severity == AlertSeverity.MEDIUM
    assert alerts[0].days_until == 3
    assert alerts[0].message == "Death Cross in 3 days (1H)"


def test_half_days_round_up():
    estimate = NextCrossEstimate(
        estimated_time=NOW + int(2.5 * DAY_MS), type=CrossType.GOLDEN, days_until=2.5
    )
    cross = CrossResult(last_golden_cross=_cross(2.5), next_cross_estimate=estimate)
    alerts = generate_technical_alerts("BTCUSDT", cross_data={"1h": cross}, now=NOW)

    assert [a.message for a in alerts] == [
        "Golden Cross 3 days ago (1H)",
        "Golden Cross in 3 days (1H)",
    ]
    assert alerts[0].days_ago == 3
    assert alerts[1].days_until == 3


def test_distant_estimate_has_no_alert():
    estimate = NextCrossEstimate(estimated_time=NOW, type=CrossType.GOLDEN, days_until=12.0)
    alerts = generate_technical_alerts(
        "BTCUSDT", cross_data={"1h": CrossResult(next_cross_estimate=estimate)}, now=NOW
    )
    assert alerts == []


def test_cross_alert_range():
    assert is_cross_in_alert_range(NOW - 5 * DAY_MS, now=NOW)
    assert is_cross_in_alert_range(NOW + 2 * DAY_MS, now=NOW)
    assert not is_cross_in_alert_range(NOW - 5 * DAY_MS - 1, now=NOW)
    assert not is_cross_in_alert_range(None, now=NOW)


# -----------------------------------------------------------------------------
# Ordering and configuration
# -----------------------------------------------------------------------------


def test_alerts_ordered_by_timeframe_then_sentiment():
    alerts = generate_technical_alerts(
        "BTCUSDT",
        stoch_rsi_data={"daily": [_stoch_point(90.0)], "1h": [_stoch_point(5.0)]},
        cross_data={"1h": CrossResult(last_golden_cross=_cross(1))},
        fear_greed_index=10,
        now=NOW,
    )

    assert [(a.type, a.timeframe) for a in alerts] == [
        (AlertType.CROSS, "1h"),
        (AlertType.STOCH_RSI, "1h"),
        (AlertType.STOCH_RSI, "daily"),
        (AlertType.FEAR_GREED, None),
    ]


def test_unlisted_timeframes_are_ignored():
    alerts = generate_technical_alerts(
        "BTCUSDT",
        stoch_rsi_data={"15m": [_stoch_point(90.0)]},
        timeframes=["1h"],
        now=NOW,
    )
    assert alerts == []


def test_thresholds_come_from_config():
    config = Settings(stoch_rsi_overbought=95.0, extreme_fear_threshold=10.0)
    alerts = generate_technical_alerts(
        "BTCUSDT",
        stoch_rsi_data={"1h": [_stoch_point(90.0)]},
        fear_greed_index=15,
        now=NOW,
        config=config,
    )
    assert alerts == []
