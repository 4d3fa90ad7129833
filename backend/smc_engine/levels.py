"""Fibonacci-based trade levels over a close price history."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from smc_engine.indicators import fibonacci_levels, highest, lowest
from smc_engine.models.signal import Direction

TARGET_RATIO = Decimal("0.618")
STOP_RATIO = Decimal("0.236")
CENT = Decimal("0.01")


def _round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class TradeLevels:
    entry: Decimal
    target: Decimal
    stoploss: Decimal
    fibonacci: dict[str, Decimal]


def calculate_trade_levels(prices: Sequence, direction: Direction) -> TradeLevels | None:
    """
    Project a target and stop from the full price range.

    BUY: target = current + range * 0.618, stop = current - range * 0.236
    SELL is mirrored; HOLD keeps both at the current price.

    Returns:
        TradeLevels rounded to cents, or None with fewer than two prices
    """
    if len(prices) < 2:
        return None

    prices = [p if isinstance(p, Decimal) else Decimal(str(p)) for p in prices]
    high = highest(prices)
    low = lowest(prices)
    current = prices[-1]
    range_size = high - low

    if direction == Direction.BUY:
        target = current + range_size * TARGET_RATIO
        stoploss = current - range_size * STOP_RATIO
    elif direction == Direction.SELL:
        target = current - range_size * TARGET_RATIO
        stoploss = current + range_size * STOP_RATIO
    else:
        target = current
        stoploss = current

    return TradeLevels(
        entry=current,
        target=_round2(target),
        stoploss=_round2(stoploss),
        fibonacci={k: _round2(v) for k, v in fibonacci_levels(high, low).items()},
    )
