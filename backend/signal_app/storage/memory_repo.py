"""In-memory trade repository."""

import logging

from smc_engine.models.signal import TradeRecord

logger = logging.getLogger(__name__)


class InMemoryTradeRepository:
    """Trade collection held in process memory.

    Records are immutable, so handing out the stored list's items is safe;
    the list itself is copied on every load and save.
    """

    def __init__(self, trades: list[TradeRecord] | None = None):
        self._trades: list[TradeRecord] = list(trades or [])

    async def load(self) -> list[TradeRecord]:
        return list(self._trades)

    async def save(self, trades: list[TradeRecord]) -> None:
        self._trades = list(trades)
        logger.debug(f"Saved {len(self._trades)} trades")
