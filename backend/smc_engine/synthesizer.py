"""Signal synthesizer fusing trend indicators with SMC detectors.

This module is pure business logic with no I/O dependencies. The same
series and config always produce the same signal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import NamedTuple

from smc_engine.indicators import IndicatorCalculator
from smc_engine.models import (
    Direction,
    PriceSeries,
    Reason,
    Signal,
    SignalStatus,
    SynthesizerConfig,
)
from smc_engine.patterns import Bias, PatternSnapshot, detect_patterns

logger = logging.getLogger(__name__)


class _Confirmation(NamedTuple):
    """One row of the bonus table."""

    pattern: str  # PatternSnapshot attribute
    weight: str  # SynthesizerConfig attribute
    bullish_reason: Reason
    bearish_reason: Reason


# Evaluation order determines the order of the explanation clauses.
CONFIRMATIONS: tuple[_Confirmation, ...] = (
    _Confirmation("break_of_structure", "bos_weight", Reason.BOS_CONFIRMED, Reason.BOS_CONFIRMED),
    _Confirmation("change_of_character", "choch_weight", Reason.CHOCH_REVERSAL, Reason.CHOCH_REVERSAL),
    _Confirmation("order_block", "order_block_weight", Reason.BULLISH_ORDER_BLOCK, Reason.BEARISH_ORDER_BLOCK),
    _Confirmation(
        "mitigation_block", "mitigation_block_weight",
        Reason.MITIGATION_RESPECTED, Reason.MITIGATION_CONFIRMED,
    ),
    _Confirmation("breaker_block", "breaker_block_weight", Reason.BREAKER_CONFIRMED, Reason.BREAKER_FORMED),
    _Confirmation("fair_value_gap", "fair_value_gap_weight", Reason.FVG_SPOTTED, Reason.FVG_IMBALANCE),
    _Confirmation("volume_surge", "volume_surge_weight", Reason.STRONG_VOLUME, Reason.HEAVY_SELLING_VOLUME),
    _Confirmation("liquidity_sweep", "liquidity_sweep_weight", Reason.BULLISH_SWEEP, Reason.BEARISH_SWEEP),
)


@dataclass(frozen=True)
class Analysis:
    """Indicator values and detector verdicts for one series."""

    sma: Decimal
    ema: Decimal
    rsi: Decimal
    change_percent: Decimal
    patterns: PatternSnapshot
    indicators: dict[str, Decimal] = field(default_factory=dict)


class SignalSynthesizer:
    """
    Combine trend gates and structural detectors into a directional call.

    Decision:
    - BUY:  price above SMA and EMA, RSI below overbought, positive change
    - SELL: price below SMA and EMA, RSI above oversold, negative change
    - HOLD: otherwise

    Confidence starts at the base value and gains a fixed bonus for each
    detector aligned with the call, capped at ``max_confidence``.
    Risk levels are fixed percentages of the current price.
    """

    def __init__(self, config: SynthesizerConfig | None = None):
        self.config = config or SynthesizerConfig()
        self.indicator_calc = IndicatorCalculator(
            sma_period=self.config.sma_period,
            ema_period=self.config.ema_period,
            rsi_period=self.config.rsi_period,
        )

    def analyze(self, series: PriceSeries) -> Analysis:
        """Compute indicators, change percent and detector verdicts."""
        indicators = self.indicator_calc.calculate_latest(series.closes)
        return Analysis(
            sma=indicators["sma"],
            ema=indicators["ema"],
            rsi=indicators["rsi"],
            change_percent=series.change_percent,
            patterns=detect_patterns(series),
            indicators=indicators,
        )

    def decide(self, analysis: Analysis, current: Decimal) -> Direction:
        """Apply the BUY/SELL gates (mutually exclusive by construction)."""
        cfg = self.config
        if (
            current > analysis.sma
            and current > analysis.ema
            and analysis.rsi < cfg.rsi_overbought
            and analysis.change_percent > 0
        ):
            return Direction.BUY
        if (
            current < analysis.sma
            and current < analysis.ema
            and analysis.rsi > cfg.rsi_oversold
            and analysis.change_percent < 0
        ):
            return Direction.SELL
        return Direction.HOLD

    def score(
        self,
        direction: Direction,
        patterns: PatternSnapshot,
    ) -> tuple[int, tuple[Reason, ...]]:
        """
        Score a directional call against the detector verdicts.

        Returns:
            Tuple of (confidence, reasons)
        """
        cfg = self.config
        if direction == Direction.HOLD:
            return cfg.hold_confidence, (Reason.NEUTRAL,)

        bullish = direction == Direction.BUY
        bias = Bias.BULLISH if bullish else Bias.BEARISH
        confidence = cfg.base_confidence
        reasons = [Reason.BULLISH_TREND if bullish else Reason.BEARISH_TREND]

        for row in CONFIRMATIONS:
            verdict = getattr(patterns, row.pattern)
            aligned = verdict if isinstance(verdict, bool) else verdict == bias
            if aligned:
                confidence += getattr(cfg, row.weight)
                reasons.append(row.bullish_reason if bullish else row.bearish_reason)

        return min(confidence, cfg.max_confidence), tuple(reasons)

    def risk_levels(
        self,
        direction: Direction,
        current: Decimal,
    ) -> tuple[Decimal, tuple[Decimal, ...]]:
        """
        Calculate stoploss and profit targets from the current price.

        Returns:
            Tuple of (stoploss, targets)
        """
        risk = self.config.risk
        if direction == Direction.BUY:
            stoploss = current * (1 - risk.stop_pct)
            targets = tuple(current * (1 + pct) for pct in risk.target_pcts)
        elif direction == Direction.SELL:
            stoploss = current * (1 + risk.stop_pct)
            targets = tuple(current * (1 - pct) for pct in risk.target_pcts)
        else:
            stoploss = current
            targets = (current,)
        return stoploss, targets

    def synthesize(self, series: PriceSeries) -> Signal:
        """Produce an ACTIVE signal for the latest bar of ``series``."""
        current = series.current
        analysis = self.analyze(series)
        direction = self.decide(analysis, current)
        confidence, reasons = self.score(direction, analysis.patterns)
        stoploss, targets = self.risk_levels(direction, current)

        signal = Signal(
            direction=direction,
            confidence=confidence,
            stoploss=stoploss,
            targets=targets,
            reasons=reasons,
            entry_price=current,
            status=SignalStatus.ACTIVE,
            resolved=False,
        )

        label = series.symbol or "series"
        if direction == Direction.HOLD:
            logger.debug(
                f"HOLD: {label} @ {current} SMA={analysis.sma} "
                f"EMA={analysis.ema} RSI={analysis.rsi}"
            )
        else:
            logger.info(
                f"{direction.value} signal: {label} @ {current} "
                f"confidence={confidence} SL={stoploss} T1={targets[0]}"
            )
        return signal


def synthesize_signal(series: PriceSeries, config: SynthesizerConfig | None = None) -> Signal:
    """Synthesize a signal with a one-off synthesizer."""
    return SignalSynthesizer(config).synthesize(series)
