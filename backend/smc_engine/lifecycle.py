"""Trade lifecycle: resolve active signals against live or end-of-day prices.

States: ACTIVE -> TARGET_HIT | STOP_HIT (terminal).

Rules:
- BUY:  price <= stoploss -> STOP_HIT, price >= first target -> TARGET_HIT
- SELL: price >= stoploss -> STOP_HIT, price <= first target -> TARGET_HIT
- Stop is checked before target (pessimistic when both apply)
- Resolved records and HOLD signals are returned unchanged
- End-of-day checks the session low/high but records the session close
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import TypeVar

from smc_engine.models.signal import Direction, Reason, Signal, SignalStatus

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Signal)


def _price(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _resolve(
    signal: S,
    status: SignalStatus,
    reason: Reason,
    final_price: Decimal,
    now: datetime | None,
) -> S:
    resolved = signal.model_copy(
        update={
            "status": status,
            "resolved": True,
            "resolved_at": now or datetime.now(timezone.utc),
            "final_price": final_price,
            "reasons": (reason,),
        }
    )
    logger.info(
        f"{signal.direction.value} signal resolved: {status.value} "
        f"entry={signal.entry_price} final={final_price}"
    )
    return resolved


def update_signal(signal: S, current_price, now: datetime | None = None) -> S:
    """
    Check a live price against the signal's stoploss and first target.

    Args:
        signal: Signal or TradeRecord to update
        current_price: Latest traded price
        now: Resolution timestamp (defaults to the current UTC time)

    Returns:
        The resolved copy, or ``signal`` itself when nothing changed
    """
    if signal.resolved:
        return signal

    price = _price(current_price)

    if signal.direction == Direction.BUY:
        if price <= signal.stoploss:
            return _resolve(signal, SignalStatus.STOP_HIT, Reason.STOPLOSS_HIT, price, now)
        if price >= signal.targets[0]:
            return _resolve(signal, SignalStatus.TARGET_HIT, Reason.TARGET_REACHED, price, now)
    elif signal.direction == Direction.SELL:
        if price >= signal.stoploss:
            return _resolve(signal, SignalStatus.STOP_HIT, Reason.STOPLOSS_HIT, price, now)
        if price <= signal.targets[0]:
            return _resolve(signal, SignalStatus.TARGET_HIT, Reason.TARGET_REACHED, price, now)

    return signal


def evaluate_end_of_day(
    signal: S,
    day_high,
    day_low,
    close_price,
    now: datetime | None = None,
) -> S:
    """
    Resolve a signal from a session's high/low, recording the close.

    An intraday sweep of a level counts even if the close did not breach
    it. When the session breached both levels, STOP_HIT wins.

    Returns:
        The resolved copy, or ``signal`` itself when no level was breached
    """
    if signal.resolved:
        return signal

    high = _price(day_high)
    low = _price(day_low)
    close = _price(close_price)

    if signal.direction == Direction.BUY:
        if low <= signal.stoploss:
            return _resolve(signal, SignalStatus.STOP_HIT, Reason.STOPLOSS_HIT_INTRADAY, close, now)
        if high >= signal.targets[0]:
            return _resolve(signal, SignalStatus.TARGET_HIT, Reason.TARGET_REACHED_EOD, close, now)
    elif signal.direction == Direction.SELL:
        if high >= signal.stoploss:
            return _resolve(signal, SignalStatus.STOP_HIT, Reason.STOPLOSS_HIT_INTRADAY, close, now)
        if low <= signal.targets[0]:
            return _resolve(signal, SignalStatus.TARGET_HIT, Reason.TARGET_REACHED_EOD, close, now)

    return signal
