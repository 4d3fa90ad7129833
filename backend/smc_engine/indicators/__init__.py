"""Technical indicators (pure math, no I/O)."""

from smc_engine.indicators.indicators import (
    MACD,
    BollingerBands,
    IndicatorCalculator,
    bollinger_bands,
    ema,
    ema_series,
    fibonacci_levels,
    highest,
    lowest,
    macd,
    rsi,
    sma,
)

__all__ = [
    "MACD",
    "BollingerBands",
    "IndicatorCalculator",
    "bollinger_bands",
    "ema",
    "ema_series",
    "fibonacci_levels",
    "highest",
    "lowest",
    "macd",
    "rsi",
    "sma",
]
