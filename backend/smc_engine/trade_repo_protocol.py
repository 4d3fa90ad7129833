"""Trade repository protocol for storage-agnostic persistence.

Any storage backend can implement this protocol to hold the trade
collection (one record per symbol). The engine never calls it directly;
the calling layer loads, transforms and saves the whole collection.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from smc_engine.models.signal import TradeRecord


@runtime_checkable
class TradeRepository(Protocol):
    """Protocol that trade storage backends must implement."""

    async def load(self) -> list[TradeRecord]:
        """Load the full trade collection."""
        ...

    async def save(self, trades: list[TradeRecord]) -> None:
        """Replace the stored collection with ``trades``."""
        ...
