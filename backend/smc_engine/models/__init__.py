"""Data models."""

from smc_engine.models.series import PriceSeries, sanitize_values
from smc_engine.models.signal import (
    REASON_TEXT,
    Direction,
    Reason,
    Signal,
    SignalStatus,
    StructureTag,
    TradeRecord,
    render_explanation,
    structure_tag_for,
)
from smc_engine.models.config import RiskConfig, SynthesizerConfig

__all__ = [
    "PriceSeries",
    "sanitize_values",
    "REASON_TEXT",
    "Direction",
    "Reason",
    "Signal",
    "SignalStatus",
    "StructureTag",
    "TradeRecord",
    "render_explanation",
    "structure_tag_for",
    "RiskConfig",
    "SynthesizerConfig",
]
