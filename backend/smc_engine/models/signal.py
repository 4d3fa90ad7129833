"""Signal and trade data models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Direction(str, Enum):
    """Directional call."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class SignalStatus(str, Enum):
    """Signal outcome status."""

    ACTIVE = "ACTIVE"
    TARGET_HIT = "TARGET_HIT"
    STOP_HIT = "STOP_HIT"


class StructureTag(str, Enum):
    """Late (BOS) vs early (CHoCH) entry relative to the first target."""

    BOS = "BOS"
    CHOCH = "CHoCH"


class Reason(str, Enum):
    """Rationale clause codes, in the order the synthesizer emits them."""

    NEUTRAL = "neutral"
    BULLISH_TREND = "bullish_trend"
    BEARISH_TREND = "bearish_trend"
    BOS_CONFIRMED = "bos_confirmed"
    CHOCH_REVERSAL = "choch_reversal"
    BULLISH_ORDER_BLOCK = "bullish_order_block"
    BEARISH_ORDER_BLOCK = "bearish_order_block"
    MITIGATION_RESPECTED = "mitigation_respected"
    MITIGATION_CONFIRMED = "mitigation_confirmed"
    BREAKER_CONFIRMED = "breaker_confirmed"
    BREAKER_FORMED = "breaker_formed"
    FVG_SPOTTED = "fvg_spotted"
    FVG_IMBALANCE = "fvg_imbalance"
    STRONG_VOLUME = "strong_volume"
    HEAVY_SELLING_VOLUME = "heavy_selling_volume"
    BULLISH_SWEEP = "bullish_sweep"
    BEARISH_SWEEP = "bearish_sweep"
    # Terminal messages
    STOPLOSS_HIT = "stoploss_hit"
    TARGET_REACHED = "target_reached"
    STOPLOSS_HIT_INTRADAY = "stoploss_hit_intraday"
    TARGET_REACHED_EOD = "target_reached_eod"


REASON_TEXT: dict[Reason, str] = {
    Reason.NEUTRAL: "Neutral: waiting for confirmation.",
    Reason.BULLISH_TREND: "Price above SMA20 & EMA50 with bullish momentum.",
    Reason.BEARISH_TREND: "Price below SMA20 & EMA50 with bearish momentum.",
    Reason.BOS_CONFIRMED: "BOS confirmed.",
    Reason.CHOCH_REVERSAL: "CHoCH reversal.",
    Reason.BULLISH_ORDER_BLOCK: "Bullish OB.",
    Reason.BEARISH_ORDER_BLOCK: "Bearish OB.",
    Reason.MITIGATION_RESPECTED: "Mitigation Block respected.",
    Reason.MITIGATION_CONFIRMED: "Mitigation Block confirmed.",
    Reason.BREAKER_CONFIRMED: "Breaker Block confirmed.",
    Reason.BREAKER_FORMED: "Breaker Block formed.",
    Reason.FVG_SPOTTED: "FVG spotted.",
    Reason.FVG_IMBALANCE: "FVG imbalance.",
    Reason.STRONG_VOLUME: "Strong volume.",
    Reason.HEAVY_SELLING_VOLUME: "Heavy selling volume.",
    Reason.BULLISH_SWEEP: "Bullish liquidity sweep.",
    Reason.BEARISH_SWEEP: "Bearish liquidity sweep.",
    Reason.STOPLOSS_HIT: "Stoploss hit — trade invalidated.",
    Reason.TARGET_REACHED: "Target reached — take profits.",
    Reason.STOPLOSS_HIT_INTRADAY: "Stoploss hit intraday.",
    Reason.TARGET_REACHED_EOD: "Target reached.",
}


def render_explanation(reasons: Iterable[Reason]) -> str:
    """Join rationale clauses into display text."""
    return " ".join(REASON_TEXT[reason] for reason in reasons)


class Signal(BaseModel):
    """Directional signal with risk levels and outcome state.

    Records are immutable; state transitions return a modified copy.
    """

    model_config = ConfigDict(frozen=True)

    direction: Direction
    confidence: int = Field(ge=50, le=99)
    stoploss: Decimal
    targets: tuple[Decimal, ...] = Field(min_length=1, max_length=3)
    reasons: tuple[Reason, ...] = ()
    entry_price: Decimal
    status: SignalStatus = SignalStatus.ACTIVE
    resolved: bool = False
    resolved_at: datetime | None = None
    final_price: Decimal | None = None

    @model_validator(mode="after")
    def _check_resolution(self) -> "Signal":
        # resolved <=> terminal status; outcome fields only on resolved records
        if self.resolved != (self.status != SignalStatus.ACTIVE):
            raise ValueError(
                f"resolved={self.resolved} is inconsistent with status={self.status.value}"
            )
        if not self.resolved and (self.resolved_at is not None or self.final_price is not None):
            raise ValueError("resolved_at and final_price are only set on resolved signals")
        return self

    @property
    def explanation(self) -> str:
        """Human-readable rationale."""
        return render_explanation(self.reasons)

    @property
    def is_terminal(self) -> bool:
        return self.resolved

    @property
    def risk_amount(self) -> Decimal:
        """Get the risk amount (distance to stop loss)."""
        if self.direction == Direction.SELL:
            return self.stoploss - self.entry_price
        return self.entry_price - self.stoploss

    @property
    def reward_amount(self) -> Decimal:
        """Get the reward amount (distance to the first target)."""
        if self.direction == Direction.SELL:
            return self.entry_price - self.targets[0]
        return self.targets[0] - self.entry_price


def structure_tag_for(signal: Signal) -> StructureTag | None:
    """Classify entry as late (BOS) or early (CHoCH) versus the first target."""
    if not signal.targets:
        return None
    first_target = signal.targets[0]
    if signal.direction == Direction.BUY:
        return StructureTag.BOS if signal.entry_price > first_target else StructureTag.CHOCH
    if signal.direction == Direction.SELL:
        return StructureTag.BOS if signal.entry_price < first_target else StructureTag.CHOCH
    return None


class TradeRecord(Signal):
    """A signal tracked for one instrument symbol."""

    symbol: str
    structure: StructureTag | None = None

    @classmethod
    def from_signal(cls, signal: Signal, symbol: str) -> "TradeRecord":
        """Wrap a freshly synthesized signal for persistence."""
        return cls(
            symbol=symbol,
            structure=structure_tag_for(signal),
            **signal.model_dump(include=set(Signal.model_fields)),
        )
