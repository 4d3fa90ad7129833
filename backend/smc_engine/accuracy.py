"""Accuracy statistics over resolved trades.

Accuracy = TARGET_HIT / resolved * 100, rounded half up to an integer.
Unresolved (ACTIVE) trades are excluded from numerator and denominator;
no resolved trades yields 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from smc_engine.models.signal import Signal, SignalStatus, TradeRecord

logger = logging.getLogger(__name__)


def _percent(wins: int, resolved: int) -> int:
    if resolved == 0:
        return 0
    ratio = Decimal(wins) * 100 / Decimal(resolved)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_accuracy(trades: Iterable[Signal]) -> int:
    """Success percentage over resolved trades (0 when none are resolved)."""
    resolved = [t for t in trades if t.resolved]
    wins = sum(1 for t in resolved if t.status == SignalStatus.TARGET_HIT)
    return _percent(wins, len(resolved))


@dataclass
class GroupStats:
    key: str
    total: int = 0
    wins: int = 0
    losses: int = 0
    active: int = 0

    @property
    def resolved(self) -> int:
        return self.wins + self.losses

    @property
    def accuracy(self) -> int:
        return _percent(self.wins, self.resolved)


@dataclass
class AccuracyReport:
    """Accuracy totals with per-symbol and per-direction breakdowns."""

    total: int = 0
    wins: int = 0
    losses: int = 0
    active: int = 0
    accuracy: int = 0

    by_symbol: list[GroupStats] = field(default_factory=list)
    by_direction: list[GroupStats] = field(default_factory=list)


class AccuracyCalculator:
    """Calculate accuracy statistics for a trade collection."""

    def calculate(self, trades: Iterable[TradeRecord]) -> AccuracyReport:
        trades = list(trades)
        report = AccuracyReport()
        self._calc_overall(report, trades)
        report.by_symbol = self._group(trades, lambda t: t.symbol)
        report.by_direction = self._group(trades, lambda t: t.direction.value)
        logger.debug(
            f"Accuracy: {report.accuracy}% over {report.wins + report.losses} "
            f"resolved trades ({report.active} active)"
        )
        return report

    def _calc_overall(self, report: AccuracyReport, trades: list[TradeRecord]) -> None:
        report.total = len(trades)
        for trade in trades:
            self._count(report, trade)
        report.accuracy = _percent(report.wins, report.wins + report.losses)

    def _group(self, trades: list[TradeRecord], key_fn) -> list[GroupStats]:
        groups: dict[str, GroupStats] = {}
        for trade in trades:
            key = key_fn(trade)
            if key not in groups:
                groups[key] = GroupStats(key=key)
            stats = groups[key]
            stats.total += 1
            self._count(stats, trade)
        return sorted(groups.values(), key=lambda s: s.key)

    @staticmethod
    def _count(stats, trade: Signal) -> None:
        if not trade.resolved:
            stats.active += 1
        elif trade.status == SignalStatus.TARGET_HIT:
            stats.wins += 1
        elif trade.status == SignalStatus.STOP_HIT:
            stats.losses += 1
