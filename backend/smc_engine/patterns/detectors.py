"""Smart Money Concept structural detectors.

Each detector inspects a small trailing window and returns either a
boolean or a ``Bias`` (``None`` meaning no signal). Windows shorter than
a detector's minimum length yield the no-signal value. Thresholds are
fixed percentages; arithmetic is exact Decimal so boundaries are strict.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Sequence

from smc_engine.models.series import PriceSeries


class Bias(str, Enum):
    """Directional verdict of a structural detector."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"


FVG_MIN_GAP = Decimal("0.005")
ORDER_BLOCK_BAND = Decimal("0.01")
VOLUME_SURGE_MULT = Decimal("1.5")
VOLUME_LOOKBACK = 10
BOS_THRESHOLD = Decimal("0.002")
CHOCH_THRESHOLD = Decimal("0.001")
MITIGATION_BAND = Decimal("0.02")


def _decimals(values: Sequence) -> list[Decimal]:
    return [v if isinstance(v, Decimal) else Decimal(str(v)) for v in values]


def _mean(values: Sequence[Decimal]) -> Decimal:
    return sum(values, Decimal("0")) / len(values)


def detect_fair_value_gap(highs: Sequence, lows: Sequence) -> bool:
    """Gap of more than 0.5% between a bar's high and the low two bars later."""
    if len(highs) < 3 or len(lows) < 3:
        return False
    highs = _decimals(highs[-3:])
    lows = _decimals(lows[-3:])

    prev_high = highs[0]
    next_low = lows[2]
    return abs(next_low - prev_high) / prev_high > FVG_MIN_GAP


def detect_order_block(closes: Sequence) -> Bias | None:
    """Last close more than 1% away from the mean of the last five closes."""
    if len(closes) < 5:
        return None
    last_five = _decimals(closes[-5:])
    avg = _mean(last_five)
    recent = last_five[-1]

    if recent > avg * (1 + ORDER_BLOCK_BAND):
        return Bias.BULLISH
    if recent < avg * (1 - ORDER_BLOCK_BAND):
        return Bias.BEARISH
    return None


def detect_volume_surge(volumes: Sequence) -> bool:
    """Latest volume strictly above 1.5x the mean of the preceding volumes.

    The baseline is the nine or ten volumes before the latest one: nine
    when exactly ten bars are available, ten otherwise.
    """
    if len(volumes) < VOLUME_LOOKBACK:
        return False
    window = _decimals(volumes[-(VOLUME_LOOKBACK + 1):])
    latest = window[-1]
    preceding = window[:-1]
    return latest > _mean(preceding) * VOLUME_SURGE_MULT


def detect_liquidity_sweep(highs: Sequence, lows: Sequence, current) -> Bias | None:
    """
    Failed breakout/breakdown around the recent range.

    The range is taken over the bars before the latest two:
    - BEARISH: price pokes above the range high but stays below the
      second-to-last high (buy-side sweep).
    - BULLISH: price drops below the range low but stays above the
      second-to-last low (sell-side sweep).
    """
    if len(highs) < 5 or len(lows) < 5:
        return None
    highs = _decimals(highs[-6:])
    lows = _decimals(lows[-6:])
    current = _decimals([current])[0]

    recent_high = max(highs[:-2])
    recent_low = min(lows[:-2])

    if recent_high < current < highs[-2]:
        return Bias.BEARISH
    if lows[-2] < current < recent_low:
        return Bias.BULLISH
    return None


def detect_break_of_structure(highs: Sequence, lows: Sequence) -> Bias | None:
    """Latest high/low breaks the one two bars earlier by more than 0.2%."""
    if len(highs) < 6 or len(lows) < 6:
        return None
    highs = _decimals(highs[-3:])
    lows = _decimals(lows[-3:])

    if highs[-1] > highs[0] * (1 + BOS_THRESHOLD):
        return Bias.BULLISH
    if lows[-1] < lows[0] * (1 - BOS_THRESHOLD):
        return Bias.BEARISH
    return None


def detect_change_of_character(highs: Sequence, lows: Sequence) -> Bias | None:
    """One-sided break (0.1%) of the high or low two bars earlier.

    Breaking both sides at once is an outside bar, not a character change.
    """
    if len(highs) < 8 or len(lows) < 8:
        return None
    highs = _decimals(highs[-3:])
    lows = _decimals(lows[-3:])

    broke_high = highs[-1] > highs[0] * (1 + CHOCH_THRESHOLD)
    broke_low = lows[-1] < lows[0] * (1 - CHOCH_THRESHOLD)

    if broke_high and not broke_low:
        return Bias.BULLISH
    if broke_low and not broke_high:
        return Bias.BEARISH
    return None


def detect_mitigation_block(closes: Sequence) -> Bias | None:
    """Last close back inside the prior range, 2% off one of its edges.

    Prior range: closes at positions -6 to -3.
    """
    if len(closes) < 6:
        return None
    closes = _decimals(closes[-6:])
    last = closes[-1]
    prior = closes[:-2]
    prev_low = min(prior)
    prev_high = max(prior)

    if prev_low * (1 + MITIGATION_BAND) < last < prev_high:
        return Bias.BULLISH
    if prev_low < last < prev_high * (1 - MITIGATION_BAND):
        return Bias.BEARISH
    return None


def detect_breaker_block(closes: Sequence) -> Bias | None:
    """Range of the last five closes shifted wholly up or down versus the five before."""
    if len(closes) < 10:
        return None
    closes = _decimals(closes[-10:])
    prev5 = closes[:5]
    last5 = closes[5:]

    prev_high, prev_low = max(prev5), min(prev5)
    curr_high, curr_low = max(last5), min(last5)

    if curr_high > prev_high and curr_low > prev_low:
        return Bias.BULLISH
    if curr_high < prev_high and curr_low < prev_low:
        return Bias.BEARISH
    return None


@dataclass(frozen=True)
class PatternSnapshot:
    """Verdicts of all eight detectors for one series."""

    fair_value_gap: bool = False
    order_block: Bias | None = None
    volume_surge: bool = False
    liquidity_sweep: Bias | None = None
    break_of_structure: Bias | None = None
    change_of_character: Bias | None = None
    mitigation_block: Bias | None = None
    breaker_block: Bias | None = None


def detect_patterns(series: PriceSeries) -> PatternSnapshot:
    """Run every detector over a price series."""
    return PatternSnapshot(
        fair_value_gap=detect_fair_value_gap(series.highs, series.lows),
        order_block=detect_order_block(series.closes),
        volume_surge=detect_volume_surge(series.volumes),
        liquidity_sweep=detect_liquidity_sweep(series.highs, series.lows, series.current),
        break_of_structure=detect_break_of_structure(series.highs, series.lows),
        change_of_character=detect_change_of_character(series.highs, series.lows),
        mitigation_block=detect_mitigation_block(series.closes),
        breaker_block=detect_breaker_block(series.closes),
    )
