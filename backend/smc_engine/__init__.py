"""Core signal generation and trade lifecycle logic.

This package contains pure business logic with no I/O dependencies
(no database, network or clock access beyond stamping resolutions).
Persistence is described by ``TradeRepository`` and implemented by the
calling layer (signal_app/).
"""

from smc_engine.accuracy import AccuracyCalculator, AccuracyReport, compute_accuracy
from smc_engine.lifecycle import evaluate_end_of_day, update_signal
from smc_engine.models import (
    Direction,
    PriceSeries,
    Reason,
    Signal,
    SignalStatus,
    StructureTag,
    SynthesizerConfig,
    TradeRecord,
)
from smc_engine.synthesizer import SignalSynthesizer, synthesize_signal

__all__ = [
    "AccuracyCalculator",
    "AccuracyReport",
    "compute_accuracy",
    "evaluate_end_of_day",
    "update_signal",
    "Direction",
    "PriceSeries",
    "Reason",
    "Signal",
    "SignalStatus",
    "StructureTag",
    "SynthesizerConfig",
    "TradeRecord",
    "SignalSynthesizer",
    "synthesize_signal",
]
