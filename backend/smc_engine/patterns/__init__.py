"""Structural (Smart Money Concept) pattern detectors."""

from smc_engine.patterns.detectors import (
    Bias,
    PatternSnapshot,
    detect_break_of_structure,
    detect_breaker_block,
    detect_change_of_character,
    detect_fair_value_gap,
    detect_liquidity_sweep,
    detect_mitigation_block,
    detect_order_block,
    detect_patterns,
    detect_volume_surge,
)

__all__ = [
    "Bias",
    "PatternSnapshot",
    "detect_break_of_structure",
    "detect_breaker_block",
    "detect_change_of_character",
    "detect_fair_value_gap",
    "detect_liquidity_sweep",
    "detect_mitigation_block",
    "detect_order_block",
    "detect_patterns",
    "detect_volume_surge",
]
