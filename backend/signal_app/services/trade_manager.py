"""Trade manager: synthesize, persist and resolve one trade per symbol.

The engine is stateless; this service owns the read-modify-write cycle
over the persisted trade collection and serializes it with a lock so
concurrent price updates for the same symbol cannot race.
"""

import asyncio
import logging
from decimal import Decimal
from typing import Awaitable, Callable

from signal_app.config import Settings, get_settings
from smc_engine.accuracy import AccuracyCalculator, AccuracyReport, compute_accuracy
from smc_engine.lifecycle import evaluate_end_of_day, update_signal
from smc_engine.models import PriceSeries, TradeRecord
from smc_engine.synthesizer import SignalSynthesizer
from smc_engine.trade_repo_protocol import TradeRepository

logger = logging.getLogger(__name__)

# Type alias for outcome callback (receives the resolved record)
OutcomeCallback = Callable[[TradeRecord], Awaitable[None]]


class TradeManager:
    """
    Track the latest trade for each symbol.

    This service:
    1. Synthesizes a signal and replaces the symbol's previous record
    2. Resolves records against live ticks or end-of-day ranges
    3. Notifies outcome callbacks when a record resolves
    4. Reports accuracy over the stored collection
    """

    def __init__(
        self,
        repository: TradeRepository,
        synthesizer: SignalSynthesizer | None = None,
    ):
        self.repository = repository
        self.synthesizer = synthesizer or SignalSynthesizer()
        self.accuracy_calc = AccuracyCalculator()

        self._outcome_callbacks: list[OutcomeCallback] = []
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        repository: TradeRepository,
        settings: Settings | None = None,
    ) -> "TradeManager":
        """Create a manager whose synthesizer follows the app settings."""
        settings = settings or get_settings()
        return cls(repository, SignalSynthesizer(settings.synthesizer_config()))

    def on_outcome(self, callback: OutcomeCallback) -> None:
        """Register callback for resolution events.

        Note: Duplicate callbacks are ignored.
        """
        if callback not in self._outcome_callbacks:
            self._outcome_callbacks.append(callback)

    def off_outcome(self, callback: OutcomeCallback) -> None:
        """Unregister callback for resolution events."""
        if callback in self._outcome_callbacks:
            self._outcome_callbacks.remove(callback)

    async def record_signal(self, symbol: str, series: PriceSeries) -> TradeRecord:
        """Synthesize a signal for ``symbol`` and replace its stored record."""
        signal = self.synthesizer.synthesize(series)
        record = TradeRecord.from_signal(signal, symbol)

        async with self._lock:
            trades = await self.repository.load()
            trades = [t for t in trades if t.symbol != symbol]
            trades.append(record)
            await self.repository.save(trades)

        logger.info(
            f"Recorded {record.direction.value} for {symbol} "
            f"(confidence={record.confidence}, structure={record.structure})"
        )
        return record

    async def update_price(self, symbol: str, price: Decimal) -> TradeRecord | None:
        """Apply a live price tick to the symbol's record."""
        return await self._transition(symbol, lambda t: update_signal(t, price))

    async def end_of_day(
        self,
        symbol: str,
        day_high: Decimal,
        day_low: Decimal,
        close: Decimal,
    ) -> TradeRecord | None:
        """Apply a session's high/low/close to the symbol's record."""
        return await self._transition(
            symbol, lambda t: evaluate_end_of_day(t, day_high, day_low, close)
        )

    async def get(self, symbol: str) -> TradeRecord | None:
        """Get the stored record for a symbol."""
        for trade in await self.repository.load():
            if trade.symbol == symbol:
                return trade
        return None

    async def list_trades(self) -> list[TradeRecord]:
        return await self.repository.load()

    async def accuracy(self) -> int:
        """Success percentage over resolved trades."""
        return compute_accuracy(await self.repository.load())

    async def report(self) -> AccuracyReport:
        return self.accuracy_calc.calculate(await self.repository.load())

    async def _transition(
        self,
        symbol: str,
        apply: Callable[[TradeRecord], TradeRecord],
    ) -> TradeRecord | None:
        """Load, transform and save one symbol's record under the lock."""
        async with self._lock:
            trades = await self.repository.load()
            index = next((i for i, t in enumerate(trades) if t.symbol == symbol), None)
            if index is None:
                logger.debug(f"No trade tracked for {symbol}")
                return None

            current = trades[index]
            updated = apply(current)
            if updated is current:
                return current

            trades[index] = updated
            await self.repository.save(trades)

        # Notify outside the lock
        for callback in self._outcome_callbacks:
            try:
                await callback(updated)
            except Exception as e:
                logger.error(f"Outcome callback error for {symbol}: {e}")

        return updated
