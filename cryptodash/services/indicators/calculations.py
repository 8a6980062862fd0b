"""
Technical Indicator Calculations

NumPy kernels behind the candle-level indicator functions.
Each kernel takes plain float arrays and returns only the valid (post warm-up)
values, so callers never have to filter NaN padding.
All math is deterministic; formulas follow the charting-platform conventions.
"""

import numpy as np

# Substituted for a zero average loss so RS stays finite
RSI_LOSS_FLOOR = 1e-4

EMPTY = np.array([], dtype=float)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """
    Simple Moving Average.

    Returns len(data) - period + 1 values; result[j] is the mean of
    data[j : j + period].
    """
    if period < 1 or len(data) < period:
        return EMPTY.copy()

    result = np.empty(len(data) - period + 1)
    for i in range(period - 1, len(data)):
        result[i - period + 1] = np.mean(data[i - period + 1 : i + 1])
    return result


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average seeded with the first value.

    The seed is data[0] rather than the SMA of the first window, which is
    what TradingView and Binance charts do. Output has one value per input.
    """
    if period < 1 or len(data) < period:
        return EMPTY.copy()

    alpha = 2 / (period + 1)
    result = np.empty(len(data))
    result[0] = data[0]

    for i in range(1, len(data)):
        result[i] = alpha * data[i] + (1 - alpha) * result[i - 1]

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    rs = avg_gain / (RSI_LOSS_FLOOR if avg_loss == 0 else avg_loss)
    return 100 - (100 / (1 + rs))


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """
    Relative Strength Index with Wilder smoothing.

    Returns len(closes) - period values; result[j] belongs to closes[period + j].
    """
    if period < 1 or len(closes) < period + 1:
        return EMPTY.copy()

    deltas = np.diff(closes)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average is a simple mean over the first `period` deltas
    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))

    result = np.empty(len(closes) - period)
    result[0] = _rsi_from_averages(avg_gain, avg_loss)

    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i - period + 1] = _rsi_from_averages(avg_gain, avg_loss)

    return result


def stochastic_rsi(
    rsi_values: np.ndarray,
    stoch_period: int = 14,
    k_smooth: int = 3,
    d_smooth: int = 3,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Stochastic oscillator applied to RSI values.

    Returns: (raw, k, d), trimmed to the same length and aligned to the
    end of rsi_values.
    """
    if min(stoch_period, k_smooth, d_smooth) < 1 or len(rsi_values) < stoch_period:
        return EMPTY.copy(), EMPTY.copy(), EMPTY.copy()

    raw = np.empty(len(rsi_values) - stoch_period + 1)
    for i in range(stoch_period - 1, len(rsi_values)):
        window = rsi_values[i - stoch_period + 1 : i + 1]
        lowest = np.min(window)
        highest = np.max(window)

        if highest - lowest == 0:
            raw[i - stoch_period + 1] = 0.0
        else:
            raw[i - stoch_period + 1] = (rsi_values[i] - lowest) / (highest - lowest) * 100

    k = sma(raw, k_smooth)
    d = sma(k, d_smooth)

    if len(d) == 0:
        return EMPTY.copy(), EMPTY.copy(), EMPTY.copy()

    n = len(d)
    return raw[-n:], k[-n:], d


def macd(
    fast_ema: np.ndarray,
    slow_ema: np.ndarray,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence) from two aligned EMAs.

    The signal line is an EMA of the MACD line treated as a close series.

    Returns: (macd_line, signal_line, histogram)
    """
    macd_line = fast_ema - slow_ema

    if signal_period < 1 or len(macd_line) < signal_period:
        return EMPTY.copy(), EMPTY.copy(), EMPTY.copy()

    signal_line = ema(macd_line, signal_period)
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands using the population standard deviation.

    Returns: (upper, middle, lower)
    """
    middle = sma(closes, period)
    if len(middle) == 0:
        return EMPTY.copy(), EMPTY.copy(), EMPTY.copy()

    std = np.empty(len(middle))
    for i in range(period - 1, len(closes)):
        window = closes[i - period + 1 : i + 1]
        std[i - period + 1] = np.sqrt(np.mean((window - middle[i - period + 1]) ** 2))

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)

    return upper, middle, lower
