"""
Technical Indicator Calculations

Pure NumPy implementations over close-price arrays.
NO LLM INVOLVEMENT - All math is deterministic.

Every function returns an array the same length as its input, with NaN
where the indicator is undefined. EMA is seeded with the first close rather
than a leading SMA, and RSI re-scans its trailing window at every bar
instead of carrying Wilder smoothing state. The decision thresholds are tuned
against exactly these conventions.
"""

import numpy as np
from typing import Optional


TRADING_DAYS_PER_YEAR = 252


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(closes: np.ndarray, window: int) -> np.ndarray:
    """Simple Moving Average. NaN for the first ``window - 1`` bars."""
    if window <= 0:
        raise ValueError("window must be > 0")

    result = np.full(len(closes), np.nan)
    for i in range(window - 1, len(closes)):
        result[i] = np.mean(closes[i - window + 1 : i + 1])
    return result


def ema(values: np.ndarray, window: int) -> np.ndarray:
    """
    Exponential Moving Average seeded with the first value.

    ema[0] = values[0]; ema[i] = values[i] * k + ema[i-1] * (1 - k), k = 2 / (window + 1).
    Defined from index 0.
    """
    if window <= 0:
        raise ValueError("window must be > 0")

    result = np.full(len(values), np.nan)
    if len(values) == 0:
        return result

    k = 2 / (window + 1)
    result[0] = values[0]
    for i in range(1, len(values)):
        result[i] = values[i] * k + result[i - 1] * (1 - k)
    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, window: int = 14) -> np.ndarray:
    """
    Relative Strength Index from a simple average of gains/losses.

    At each i >= window, averages the ``window`` price changes ending at i.
    NaN before that. Zero average loss gives 100.
    """
    if window <= 0:
        raise ValueError("window must be > 0")

    result = np.full(len(closes), np.nan)
    if len(closes) <= window:
        return result

    deltas = np.diff(closes)  # deltas[j - 1] = closes[j] - closes[j - 1]
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    for i in range(window, len(closes)):
        avg_gain = np.sum(gains[i - window : i]) / window
        avg_loss = np.sum(losses[i - window : i]) / window

        if avg_loss == 0:
            result[i] = 100.0
        else:
            rs = avg_gain / avg_loss
            result[i] = 100.0 - (100.0 / (1.0 + rs))

    return result


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    Both EMAs exist from the first bar, so all three series are defined
    from index 0 for non-empty input.

    Returns: (macd_line, signal_line, histogram)
    """
    fast_ema = ema(closes, fast_period)
    slow_ema = ema(closes, slow_period)

    macd_line = fast_ema - slow_ema

    # Signal line is EMA of MACD line
    signal_line = ema(macd_line, signal_period)

    # Histogram
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def volatility(closes: np.ndarray, window: int = 20) -> np.ndarray:
    """
    Annualized historical volatility.

    At each i >= window: population std of the ``window`` log returns over
    closes[i - window .. i], times sqrt(252). NaN before that, and NaN for
    any window containing a non-positive close.
    """
    if window <= 0:
        raise ValueError("window must be > 0")

    result = np.full(len(closes), np.nan)
    if len(closes) <= window:
        return result

    with np.errstate(divide="ignore", invalid="ignore"):
        log_returns = np.diff(np.log(closes))
    annualize = np.sqrt(TRADING_DAYS_PER_YEAR)

    for i in range(window, len(closes)):
        window_closes = closes[i - window : i + 1]
        if np.any(window_closes <= 0):
            continue
        returns = log_returns[i - window : i]
        result[i] = np.std(returns) * annualize

    return result


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def to_optional(value: float) -> Optional[float]:
    """Map NaN/inf to None so irregular values never leak downstream."""
    value = float(value)
    return value if np.isfinite(value) else None

