"""Technical indicators for signal synthesis.

All functions are total: short or empty input degrades to a documented
neutral value instead of raising. Arithmetic runs in NumPy float64 and
results are returned as Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

import numpy as np

NEUTRAL_RSI = Decimal("50")
MAX_RSI = Decimal("100")

FIBONACCI_RATIOS: dict[str, Decimal] = {
    "23.6": Decimal("0.236"),
    "38.2": Decimal("0.382"),
    "50.0": Decimal("0.5"),
    "61.8": Decimal("0.618"),
}


@dataclass(frozen=True)
class MACD:
    """Latest MACD line, signal line and histogram."""

    macd: Decimal
    signal: Decimal
    histogram: Decimal


@dataclass(frozen=True)
class BollingerBands:
    """Latest Bollinger bands around an SMA midline."""

    upper: Decimal
    middle: Decimal
    lower: Decimal


def _to_array(values: Sequence[Decimal]) -> np.ndarray:
    return np.array([float(v) for v in values], dtype=np.float64)


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(float(value)))


def _last_or_zero(values: Sequence[Decimal]) -> Decimal:
    if len(values) == 0:
        return Decimal("0")
    last = values[-1]
    return last if isinstance(last, Decimal) else Decimal(str(last))


def sma(values: Sequence[Decimal], period: int) -> Decimal:
    """
    Simple moving average of the last ``period`` values.

    Returns the last value when fewer than ``period`` values exist
    (0 for an empty sequence).
    """
    if len(values) < period or period <= 0:
        return _last_or_zero(values)

    arr = _to_array(values[-period:])
    return _to_decimal(np.mean(arr))


def ema_series(values: Sequence[Decimal], period: int) -> list[Decimal]:
    """
    Exponential moving average curve seeded with the first value.

    ema[i] = values[i] * k + ema[i-1] * (1 - k), k = 2 / (period + 1)
    """
    if len(values) == 0:
        return []

    arr = _to_array(values)
    multiplier = 2.0 / (period + 1)

    result = np.empty_like(arr)
    result[0] = arr[0]
    for i in range(1, len(arr)):
        result[i] = arr[i] * multiplier + result[i - 1] * (1 - multiplier)

    return [_to_decimal(v) for v in result]


def ema(values: Sequence[Decimal], period: int) -> Decimal:
    """Final value of the EMA curve (0 for an empty sequence)."""
    curve = ema_series(values, period)
    return curve[-1] if curve else Decimal("0")


def rsi(values: Sequence[Decimal], period: int = 14) -> Decimal:
    """
    Relative Strength Index over the last ``period`` deltas.

    Simple averages (not Wilder smoothing):
    avg_gain = sum(gains) / period, avg_loss = sum(|losses|) / period.

    Returns:
        50 with fewer than ``period + 1`` values, 100 when there are
        no losses, otherwise 100 - 100 / (1 + avg_gain / avg_loss).
    """
    if period <= 0 or len(values) < period + 1:
        return NEUTRAL_RSI

    deltas = np.diff(_to_array(values[-(period + 1):]))
    gains = deltas[deltas > 0].sum()
    losses = -deltas[deltas < 0].sum()

    avg_gain = gains / period
    avg_loss = losses / period
    if avg_loss == 0:
        return MAX_RSI

    rs = avg_gain / avg_loss
    return _to_decimal(100.0 - 100.0 / (1.0 + rs))


def macd(
    values: Sequence[Decimal],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACD:
    """MACD line (fast EMA - slow EMA), its EMA signal line and histogram."""
    if len(values) == 0:
        zero = Decimal("0")
        return MACD(macd=zero, signal=zero, histogram=zero)

    fast_curve = ema_series(values, fast)
    slow_curve = ema_series(values, slow)
    macd_line = [f - s for f, s in zip(fast_curve, slow_curve)]
    signal_line = ema_series(macd_line, signal)

    return MACD(
        macd=macd_line[-1],
        signal=signal_line[-1],
        histogram=macd_line[-1] - signal_line[-1],
    )


def bollinger_bands(
    values: Sequence[Decimal],
    period: int = 20,
    multiplier: float = 2.0,
) -> BollingerBands:
    """
    Bollinger bands: SMA midline +/- ``multiplier`` population std devs.

    With fewer than ``period`` values all three bands equal the last value.
    """
    if len(values) < period or period <= 0:
        last = _last_or_zero(values)
        return BollingerBands(upper=last, middle=last, lower=last)

    window = _to_array(values[-period:])
    mid = float(np.mean(window))
    std = float(np.std(window))

    return BollingerBands(
        upper=_to_decimal(mid + multiplier * std),
        middle=_to_decimal(mid),
        lower=_to_decimal(mid - multiplier * std),
    )


def highest(values: Sequence[Decimal], period: int | None = None) -> Decimal:
    """Highest value over the trailing ``period`` (whole sequence if None)."""
    if len(values) == 0:
        return Decimal("0")
    window = values[-period:] if period else values
    return max(window)


def lowest(values: Sequence[Decimal], period: int | None = None) -> Decimal:
    """Lowest value over the trailing ``period`` (whole sequence if None)."""
    if len(values) == 0:
        return Decimal("0")
    window = values[-period:] if period else values
    return min(window)


def fibonacci_levels(high: Decimal, low: Decimal) -> dict[str, Decimal]:
    """
    Fibonacci retracement levels measured down from ``high``.

    level = high - (high - low) * ratio, for ratios 0.236/0.382/0.5/0.618
    """
    range_size = high - low
    return {name: high - range_size * ratio for name, ratio in FIBONACCI_RATIOS.items()}


class IndicatorCalculator:
    """Calculator for all indicators the synthesizer reports."""

    def __init__(
        self,
        sma_period: int = 20,
        ema_period: int = 50,
        rsi_period: int = 14,
    ):
        self.sma_period = sma_period
        self.ema_period = ema_period
        self.rsi_period = rsi_period

    def calculate_latest(self, closes: Sequence[Decimal]) -> dict[str, Decimal]:
        """
        Calculate indicator values for the latest bar.

        Args:
            closes: Close prices, most recent last

        Returns:
            Dict with sma, ema, rsi, macd (+ signal/histogram) and
            Bollinger band values
        """
        macd_result = macd(closes)
        bands = bollinger_bands(closes, self.sma_period)

        return {
            "sma": sma(closes, self.sma_period),
            "ema": ema(closes, self.ema_period),
            "rsi": rsi(closes, self.rsi_period),
            "macd": macd_result.macd,
            "macd_signal": macd_result.signal,
            "macd_histogram": macd_result.histogram,
            "bb_upper": bands.upper,
            "bb_middle": bands.middle,
            "bb_lower": bands.lower,
        }
