"""Signal synthesis configuration models."""

from __future__ import annotations

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, model_validator

# Bounds of Signal.confidence
MIN_CONFIDENCE = 50
MAX_CONFIDENCE = 99


class RiskConfig(BaseModel):
    """Stoploss/target distances as fractions of the entry price."""

    model_config = ConfigDict(frozen=True)

    stop_pct: Decimal = Decimal("0.015")
    target_pcts: tuple[Decimal, ...] = Field(
        default=(Decimal("0.01"), Decimal("0.02"), Decimal("0.03")),
        min_length=1,
        max_length=3,
    )


class SynthesizerConfig(BaseModel):
    """Synthesizer parameters.

    Defaults are the canonical policy: base 70, cap 99, and the bonus
    table BOS/CHoCH 10, order/mitigation/breaker block 5, liquidity
    sweep 4, fair value gap and volume surge 3.
    """

    model_config = ConfigDict(frozen=True)

    # Indicator periods
    sma_period: int = 20
    ema_period: int = 50
    rsi_period: int = 14

    # Momentum gates
    rsi_overbought: Decimal = Decimal("70")
    rsi_oversold: Decimal = Decimal("30")

    # Confidence scoring
    base_confidence: int = Field(default=70, ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    hold_confidence: int = Field(default=50, ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)
    max_confidence: int = Field(default=99, ge=MIN_CONFIDENCE, le=MAX_CONFIDENCE)

    bos_weight: int = Field(default=10, ge=0)
    choch_weight: int = Field(default=10, ge=0)
    order_block_weight: int = Field(default=5, ge=0)
    mitigation_block_weight: int = Field(default=5, ge=0)
    breaker_block_weight: int = Field(default=5, ge=0)
    fair_value_gap_weight: int = Field(default=3, ge=0)
    volume_surge_weight: int = Field(default=3, ge=0)
    liquidity_sweep_weight: int = Field(default=4, ge=0)

    risk: RiskConfig = RiskConfig()

    @model_validator(mode="after")
    def _check_confidence_order(self) -> "SynthesizerConfig":
        if self.base_confidence > self.max_confidence:
            raise ValueError(
                f"base_confidence ({self.base_confidence}) exceeds "
                f"max_confidence ({self.max_confidence})"
            )
        if self.hold_confidence > self.max_confidence:
            raise ValueError(
                f"hold_confidence ({self.hold_confidence}) exceeds "
                f"max_confidence ({self.max_confidence})"
            )
        return self
