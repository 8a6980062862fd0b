"""Shared synthetic candle fixtures."""

import numpy as np
import pytest

from cryptodash.schemas.market import Candle, SeriesPoint

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS
START_MS = 1_717_200_000_000  # 2024-06-01 00:00 UTC


def _make_candles(closes, start=START_MS, step=HOUR_MS, opens=None):
    candles = []
    for i, close in enumerate(closes):
        if opens is not None:
            open_ = opens[i]
        else:
            open_ = closes[i - 1] if i else close
        candles.append(
            Candle(
                time=start + i * step,
                open=float(open_),
                high=float(max(open_, close)),
                low=float(min(open_, close)),
                close=float(close),
                volume=1.0,
            )
        )
    return candles


def _make_series(values, start=START_MS, step=DAY_MS):
    return [SeriesPoint(time=start + i * step, value=float(v)) for i, v in enumerate(values)]


@pytest.fixture
def make_candles():
    """Factory: closes -> ascending candles one `step` apart."""
    return _make_candles


@pytest.fixture
def make_series():
    """Factory: values -> daily SeriesPoint list."""
    return _make_series


@pytest.fixture
def ramp_candles():
    """250 hourly candles rising linearly from 100 to 150."""
    return _make_candles(np.linspace(100.0, 150.0, 250))


@pytest.fixture
def wave_candles():
    """120 hourly candles oscillating around 100."""
    closes = [100.0 + 10.0 * np.sin(i / 3.0) + 0.05 * i for i in range(120)]
    return _make_candles(closes)
